"""
Small helpers shared by the matrix kernels.

Power-of-two testing, deep cloning, near-zero rounding, and the vector
primitives (dot product, norm, normalization) used by Gram-Schmidt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.tolerances import NEAR_ZERO
from pymatrix.core.exceptions import DimensionError, ValidationError

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


def check_matrix(value: Any, name: str) -> Matrix:
    """
    Verify value is a Matrix.

    Raises:
        ValidationError: If value is not a Matrix instance
    """
    from pymatrix.matrix.matrix import Matrix

    if not isinstance(value, Matrix):
        raise ValidationError(
            f"{name}: expected a Matrix, got {type(value).__name__}",
            code=804,
            context={name: value},
        )
    return value


def check_operand(value: Any, operation: str, code: int) -> Matrix:
    """
    Verify the right operand of a binary kernel is a Matrix.

    A foreign operand has no shape to agree with, so it is reported as a
    dimension mismatch under the operation's own code.

    Raises:
        DimensionError: If value is not a Matrix instance
    """
    from pymatrix.matrix.matrix import Matrix

    if not isinstance(value, Matrix):
        raise DimensionError(
            f"Invalid matrix dimensions for {operation}: "
            f"B is {type(value).__name__}, expected a Matrix",
            code=code,
            context={'B_type': type(value).__name__},
        )
    return value


def is_power_of_two(n: int) -> bool:
    """True if n is a positive integral power of two (1, 2, 4, ...)."""
    return n > 0 and (n & (n - 1)) == 0


def clone(matrix: Matrix) -> Matrix:
    """Deep copy: new storage, same shape."""
    return matrix._wrap(matrix._elements.copy(), matrix.rows, matrix.columns)


def round_to_zero(matrix: Matrix, tolerance: float = NEAR_ZERO) -> Matrix:
    """
    Return a copy of `matrix` with entries smaller than `tolerance` in
    magnitude replaced by exact zeros.
    """
    buffer = matrix._elements.copy()
    buffer[np.abs(buffer) < tolerance] = 0.0
    return matrix._wrap(buffer, matrix.rows, matrix.columns)


def dot(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
    """Dot product of two equal-length vectors."""
    return float(np.dot(u, v))


def euclidean_norm(v: NDArray[np.float64]) -> float:
    """Euclidean (L2) norm of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Scale v to unit Euclidean length. Caller guarantees v is not zero."""
    return v * (1.0 / euclidean_norm(v))
