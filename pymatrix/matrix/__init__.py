"""
Dense matrix module.

Provides the Matrix entity and its kernels: elementwise arithmetic,
naive and Strassen multiplication, triangular solves and inversion,
Gram-Schmidt and QR decomposition.

Public API:
    Matrix               - The matrix entity, factories and predicates
    QRResult             - Q and R factors from Matrix.qr_decomposition()
    is_upper_triangular  - All entries below the diagonal are zero
    is_lower_triangular  - All entries above the diagonal are zero
    is_int_matrix        - All entries are integral
    benchmark_multiply   - Time the multiplication kernels
"""

from pymatrix.matrix.matrix import (
    Matrix,
    is_upper_triangular,
    is_lower_triangular,
    is_int_matrix,
)
from pymatrix.matrix._orthogonal import QRResult
from pymatrix.matrix.benchmark import benchmark_multiply

__all__ = [
    "Matrix",
    "QRResult",
    "is_upper_triangular",
    "is_lower_triangular",
    "is_int_matrix",
    "benchmark_multiply",
]
