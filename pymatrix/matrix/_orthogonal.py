"""
Gram-Schmidt orthonormalization and QR decomposition.

QR is computed as Q = gram_schmidt(A), R = Q' A. Vectors are carried in
double precision during orthogonalization and stored as float32.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator
import warnings

import numpy as np

from pymatrix.core.compute.tolerances import NEAR_ZERO, select_tolerance
from pymatrix.core.exceptions import LinearlyDependentColumnsError
from pymatrix.matrix._multiply import naive_multiply
from pymatrix.matrix._utils import dot, euclidean_norm, normalize, round_to_zero

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Matrix with orthonormal columns (rows x columns)
        R: Upper triangular matrix (columns x columns)

    Unpacks as a pair: ``Q, R = A.qr_decomposition()``.
    """
    Q: Matrix
    R: Matrix

    def __iter__(self) -> Iterator[Matrix]:
        return iter((self.Q, self.R))


def gram_schmidt(A: Matrix) -> Matrix:
    """
    Orthonormal basis for the column space of A (classical Gram-Schmidt).

    Columns are processed in order. Column i starts as a copy of itself and
    has its projection onto every previously produced vector u_j removed,

        w_i = v_i - sum_j (u_j . v_i / u_j . u_j) u_j

    after which all vectors are normalized and become the columns of the
    result.

    Raises:
        LinearlyDependentColumnsError: If some w_i has norm below NEAR_ZERO,
            i.e. the columns of A do not form a basis
    """
    basis: list[np.ndarray] = []

    for i in range(A.columns):
        v = A.get_column(i).astype(np.float64)
        w = v.copy()
        for u in basis:
            w -= (dot(u, v) / dot(u, u)) * u

        norm = euclidean_norm(w)
        if norm < NEAR_ZERO:
            raise LinearlyDependentColumnsError(
                f"Cannot normalize a nearly-zero column (column {i}, norm {norm:.3g}). "
                f"The given columns are not linearly independent.",
                column_index=i,
                norm=norm,
                context={'column': i, 'norm': norm},
            )
        basis.append(w)

    orthonormal = np.column_stack([normalize(u) for u in basis])
    return A._wrap(orthonormal.astype(np.float32).ravel(), A.rows, A.columns)


def _clear_below_diagonal(R: Matrix) -> Matrix:
    square = R._elements.reshape(R.rows, R.columns)
    return R._wrap(np.triu(square).ravel(), R.rows, R.columns)


def qr_decomposition(A: Matrix) -> QRResult:
    """
    Factor A = Q R.

    Q has orthonormal columns and R = Q' A is upper triangular. Entries
    of R below NEAR_ZERO in magnitude are rounded to zero, and the strictly
    lower part (zero in exact arithmetic) is cleared of float32 residue.
    A is not modified.

    Warns:
        RuntimeWarning: If Q R reproduces A only outside the float32
            tolerance tier, which indicates an ill-conditioned input

    Raises:
        LinearlyDependentColumnsError: If the columns of A are dependent
    """
    Q = gram_schmidt(A)
    R = naive_multiply(Q.transpose(), A)
    R = _clear_below_diagonal(round_to_zero(R))

    tier = select_tolerance(A.rows)
    reconstructed = naive_multiply(Q, R)
    residual = float(np.max(np.abs(reconstructed._elements - A._elements)))
    magnitude = float(np.max(np.abs(A._elements)))
    if residual > tier.atol + tier.rtol * magnitude:
        warnings.warn(
            f"QR reconstruction residual {residual:.3g} exceeds {tier.name} "
            f"tolerance; the input is likely ill-conditioned",
            RuntimeWarning,
            stacklevel=3,
        )

    return QRResult(Q=Q, R=R)
