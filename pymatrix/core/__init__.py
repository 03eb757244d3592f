"""
Core infrastructure for PyMatrix.

This module provides shared abstractions and utilities used by the matrix
entity and its kernels.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Host detection, partitioning, timing, tolerances
"""

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    InvalidEntriesError,
    IndexOutOfBoundsError,
    DimensionError,
    NotSquareError,
    ReshapeSizeMismatchError,
    NotTriangularError,
    NumericalError,
    SingularSystemError,
    LinearlyDependentColumnsError,
)

__all__ = [
    "PyMatrixError",
    "ValidationError",
    "InvalidEntriesError",
    "IndexOutOfBoundsError",
    "DimensionError",
    "NotSquareError",
    "ReshapeSizeMismatchError",
    "NotTriangularError",
    "NumericalError",
    "SingularSystemError",
    "LinearlyDependentColumnsError",
]
