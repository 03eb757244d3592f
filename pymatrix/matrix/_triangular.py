"""
Triangular systems: structure predicates, substitution, and inversion.

Built on element access alone. Substitution returns the solution as a
float64 vector; inversion solves one system per identity row and
reassembles the solutions into a new matrix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    NotSquareError,
    NotTriangularError,
    SingularSystemError,
)
from pymatrix.core.validation import check_vector
from pymatrix.matrix._utils import check_matrix

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


def is_upper_triangular(A: Any) -> bool:
    """
    True if every entry below the main diagonal is exactly zero.

    Raises:
        ValidationError: If A is not a Matrix
    """
    check_matrix(A, 'A')
    for i in range(1, A.rows):
        for j in range(min(i, A.columns)):
            if A.get_element(i, j) != 0:
                return False
    return True


def is_lower_triangular(A: Any) -> bool:
    """
    True if every entry above the main diagonal is exactly zero.

    Raises:
        ValidationError: If A is not a Matrix
    """
    check_matrix(A, 'A')
    for i in range(min(A.rows, A.columns)):
        for j in range(i + 1, A.columns):
            if A.get_element(i, j) != 0:
                return False
    return True


def _check_square(A: Matrix, operation: str) -> None:
    if not A.is_square:
        raise NotSquareError(
            f"{operation} requires a square matrix, got {A.shape}",
            context={'shape': A.shape},
        )


def _first_zero_pivot(A: Matrix, order: range) -> int | None:
    for i in order:
        if A.get_element(i, i) == 0:
            return i
    return None


def back_substitution(A: Matrix, b: ArrayLike) -> NDArray[np.float64]:
    """
    Solve A x = b for upper triangular A.

    Unknowns are resolved from the last row to the first; row i subtracts
    the already-solved unknowns at columns > i from b[i] and divides by
    the diagonal.

    Raises:
        NotSquareError: If A is not square
        NotTriangularError: If A is not upper triangular
        ValidationError: If b is not a sequence of A.rows finite numbers
        SingularSystemError: If a diagonal entry is zero
    """
    _check_square(A, 'Back substitution')
    if not is_upper_triangular(A):
        raise NotTriangularError("Matrix is not upper triangular", expected='upper')
    rhs = check_vector(b, A.rows, 'b')

    n = A.rows
    pivot = _first_zero_pivot(A, range(n - 1, -1, -1))
    if pivot is not None:
        raise SingularSystemError(
            f"Unsolvable system: zero on diagonal at row {pivot}",
            pivot_index=pivot,
            context={'row': pivot},
        )

    solution = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        total = 0.0
        for j in range(n - 1, i, -1):
            total += solution[j] * A.get_element(i, j)
        solution[i] = (rhs[i] - total) / A.get_element(i, i)
    return solution


def forward_substitution(A: Matrix, b: ArrayLike) -> NDArray[np.float64]:
    """
    Solve A x = b for lower triangular A.

    Unknowns are resolved from the first row to the last; row i subtracts
    the already-solved unknowns at columns < i.

    Raises:
        NotSquareError: If A is not square
        NotTriangularError: If A is not lower triangular
        ValidationError: If b is not a sequence of A.rows finite numbers
        SingularSystemError: If a diagonal entry is zero
    """
    _check_square(A, 'Forward substitution')
    if not is_lower_triangular(A):
        raise NotTriangularError(
            "Matrix is not lower triangular", expected='lower', code=816
        )
    rhs = check_vector(b, A.rows, 'b')

    n = A.rows
    pivot = _first_zero_pivot(A, range(n))
    if pivot is not None:
        raise SingularSystemError(
            f"Unsolvable system: zero on diagonal at row {pivot}",
            pivot_index=pivot,
            context={'row': pivot},
        )

    solution = np.zeros(n, dtype=np.float64)
    for i in range(n):
        total = 0.0
        for j in range(i):
            total += solution[j] * A.get_element(i, j)
        solution[i] = (rhs[i] - total) / A.get_element(i, i)
    return solution


def invert_upper(A: Matrix) -> Matrix:
    """
    Inverse of an upper triangular matrix.

    Back substitution is applied against each row of the identity, walking
    the identity from its last row to its first; the collected solutions
    are reversed into row order and transposed, since each solution is a
    column of the inverse.

    Raises:
        NotSquareError: If A is not square
        NotTriangularError: If A is not upper triangular
        SingularSystemError: If a diagonal entry is zero
    """
    _check_square(A, 'Inversion')
    if not is_upper_triangular(A):
        raise NotTriangularError("Matrix is not upper triangular", expected='upper')

    n = A.rows
    identity = type(A).identity(n)
    solutions = [back_substitution(A, identity.get_row(i)) for i in range(n - 1, -1, -1)]
    solutions.reverse()
    return type(A)(solutions).transpose()


def invert_lower(A: Matrix) -> Matrix:
    """
    Inverse of a lower triangular matrix.

    Forward substitution against each identity row gives the columns of
    the inverse; they are stacked as rows and transposed.

    Raises:
        NotSquareError: If A is not square
        NotTriangularError: If A is not lower triangular
        SingularSystemError: If a diagonal entry is zero
    """
    _check_square(A, 'Inversion')
    if not is_lower_triangular(A):
        raise NotTriangularError(
            "Matrix is not lower triangular", expected='lower', code=816
        )

    n = A.rows
    identity = type(A).identity(n)
    solutions = [forward_substitution(A, identity.get_row(i)) for i in range(n)]
    return type(A)(solutions).transpose()
