"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Every exception carries a numeric code and an
optional context payload alongside its message.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from typing import Any


class PyMatrixError(Exception):
    """
    Base exception for all PyMatrix errors.

    Attributes:
        code: Numeric error category
        context: Values that triggered the error (indices, shapes, ...)
    """

    default_code: int = 600

    def __init__(
        self,
        message: str,
        code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = self.default_code if code is None else code
        self.context = dict(context) if context else {}


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when an argument has the wrong type, is non-numeric, or is a
    non-positive dimension.
    """

    default_code = 606


class InvalidEntriesError(ValidationError):
    """
    Matrix entries are not finite numbers.

    Raised at construction (or on element assignment) when a value is NaN,
    infinite, or not a number at all.
    """

    default_code = 803


class IndexOutOfBoundsError(ValidationError):
    """Row, column or flat index lies outside the valid range."""

    default_code = 800


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when shapes don't match for an elementwise operation or when the
    inner dimensions of a product disagree.
    """

    default_code = 807


class NotSquareError(DimensionError):
    """An operation that requires a square matrix received a rectangular one."""

    default_code = 812


class ReshapeSizeMismatchError(DimensionError):
    """
    Value count does not match the requested shape.

    Attributes:
        n_values: Number of values supplied
        expected: rows * columns of the requested shape
    """

    default_code = 806

    def __init__(
        self,
        message: str,
        n_values: int | None = None,
        expected: int | None = None,
        code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, context=context)
        self.n_values = n_values
        self.expected = expected


class NotTriangularError(ValidationError):
    """
    Matrix does not have the triangular structure an operation requires.

    Attributes:
        expected: 'upper' or 'lower'
    """

    default_code = 815

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, context=context)
        self.expected = expected


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """

    default_code = 700


class SingularSystemError(NumericalError):
    """
    Triangular system has a zero pivot.

    Raised by forward/back substitution (and hence triangular inversion)
    when a diagonal entry is exactly zero.

    Attributes:
        pivot_index: Row whose diagonal entry is zero
    """

    default_code = 814

    def __init__(
        self,
        message: str,
        pivot_index: int | None = None,
        code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, context=context)
        self.pivot_index = pivot_index


class LinearlyDependentColumnsError(NumericalError):
    """
    Columns do not form a basis.

    Raised by Gram-Schmidt when a vector collapses to (nearly) zero after
    removing its projections onto the previous vectors.

    Attributes:
        column_index: Column that collapsed
        norm: Euclidean norm of the residual vector
    """

    default_code = 704

    def __init__(
        self,
        message: str,
        column_index: int | None = None,
        norm: float | None = None,
        code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, context=context)
        self.column_index = column_index
        self.norm = norm
