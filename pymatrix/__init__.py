"""
PyMatrix: dense single-precision linear algebra for Python.

A self-contained matrix core over a contiguous row-major float32 buffer,
with elementwise arithmetic, naive and Strassen multiplication,
triangular solves, and Gram-Schmidt QR decomposition.

Submodules:
    matrix: The Matrix entity and its kernels
    core: Exceptions, validation, timing, tolerances
"""

__version__ = "0.1.0"

from pymatrix import matrix
from pymatrix.matrix import (
    Matrix,
    QRResult,
    is_upper_triangular,
    is_lower_triangular,
    is_int_matrix,
)

__all__ = [
    "__version__",
    "matrix",
    "Matrix",
    "QRResult",
    "is_upper_triangular",
    "is_lower_triangular",
    "is_int_matrix",
]
