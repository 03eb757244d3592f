"""
Input validation utilities for PyMatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (bools are not numbers, strings are not numbers)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from numbers import Integral, Real
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    InvalidEntriesError,
    ValidationError,
)


def is_real_number(value: Any) -> bool:
    """True for real scalars (Python or NumPy), False for bools and everything else."""
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))


def _as_float(value: Any) -> float:
    """float(value), mapping integers too large for a double to inf."""
    try:
        return float(value)
    except OverflowError:
        return float('inf') if value > 0 else float('-inf')


def check_integer(value: Any, name: str) -> int:
    """
    Verify value is an integer and return it as a Python int.

    Args:
        value: Value to check
        name: Parameter name for error messages

    Returns:
        The value as int

    Raises:
        ValidationError: If value is not an integer (bools are rejected)
    """
    if not isinstance(value, Integral) or isinstance(value, (bool, np.bool_)):
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}",
            context={name: value},
        )
    return int(value)


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is a strictly positive integer.

    Raises:
        ValidationError: If value is not an integer or is <= 0
    """
    result = check_integer(value, name)
    if result <= 0:
        raise ValidationError(
            f"{name}: must be positive, got {result}",
            context={name: result},
        )
    return result


def check_real(value: Any, name: str) -> float:
    """
    Verify value is a real number and return it as a Python float.

    Raises:
        ValidationError: If value is not a real number
    """
    if not is_real_number(value):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__} {value!r}",
            context={name: value},
        )
    return _as_float(value)


def check_finite_value(value: Any, name: str) -> float:
    """
    Verify value is a finite real number.

    Raises:
        InvalidEntriesError: If value is not a number, or is NaN or infinite
    """
    if not is_real_number(value):
        raise InvalidEntriesError(
            f"{name}: expected a finite number, got {type(value).__name__} {value!r}",
            context={name: value},
        )
    result = _as_float(value)
    if not np.isfinite(result):
        raise InvalidEntriesError(
            f"{name}: must be finite, got {result}",
            context={name: result},
        )
    return result


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify index is an integer in [0, bound).

    Raises:
        ValidationError: If index is not an integer
        IndexOutOfBoundsError: If index is negative or >= bound
    """
    result = check_integer(index, name)
    if result < 0 or result >= bound:
        raise IndexOutOfBoundsError(
            f"{name}: index {result} out of bounds for size {bound}",
            context={name: result, 'bound': bound},
        )
    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        InvalidEntriesError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidEntriesError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)",
            context={'n_nan': n_nan, 'n_inf': n_inf},
        )


def check_flat_buffer(
    entries: ArrayLike,
    rows: int,
    columns: int,
    name: str,
) -> NDArray[np.float32]:
    """
    Validate a flat row-major buffer and return a float32 copy.

    Args:
        entries: One-dimensional array-like of numbers
        rows: Number of rows the buffer describes
        columns: Number of columns the buffer describes
        name: Parameter name for error messages

    Returns:
        New contiguous float32 array of length rows * columns

    Raises:
        InvalidEntriesError: If entries are non-numeric or non-finite
        DimensionError: If the buffer is not 1D or has the wrong length
    """
    try:
        raw = np.asarray(entries)
    except (ValueError, TypeError) as e:
        raise InvalidEntriesError(f"{name}: cannot convert to array: {e}") from e

    if raw.dtype == bool or not np.issubdtype(raw.dtype, np.number):
        raise InvalidEntriesError(
            f"{name}: non-numeric dtype {raw.dtype}, expected numeric data",
            context={'dtype': str(raw.dtype)},
        )
    if np.issubdtype(raw.dtype, np.complexfloating):
        raise InvalidEntriesError(
            f"{name}: complex entries are not supported",
            context={'dtype': str(raw.dtype)},
        )
    if raw.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D buffer, got {raw.ndim}D with shape {raw.shape}",
            context={'shape': raw.shape},
        )
    if raw.shape[0] != rows * columns:
        raise DimensionError(
            f"{name}: buffer has {raw.shape[0]} values, expected rows*columns = "
            f"{rows}*{columns} = {rows * columns}",
            context={'length': raw.shape[0], 'rows': rows, 'columns': columns},
        )

    check_finite(raw, name)
    with np.errstate(over='ignore'):
        buffer = np.array(raw, dtype=np.float32)
    # Finite float64 values can still overflow float32
    check_finite(buffer, name)
    return buffer


def check_nested(
    entries: Any,
    name: str,
) -> tuple[int, int, NDArray[np.float32]]:
    """
    Validate a rectangular nested sequence and flatten it row-major.

    Args:
        entries: Sequence of equal-length sequences of real numbers
        name: Parameter name for error messages

    Returns:
        (rows, columns, float32 buffer)

    Raises:
        ValidationError: If the structure is empty, ragged, or not nested
        InvalidEntriesError: If an entry is not a finite real number
    """
    if isinstance(entries, np.ndarray):
        if entries.ndim != 2:
            raise ValidationError(
                f"{name}: expected 2D array, got {entries.ndim}D with shape {entries.shape}"
            )
        entries = entries.tolist()

    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
        raise ValidationError(
            f"{name}: expected a nested sequence, got {type(entries).__name__}"
        )
    n_rows = len(entries)
    if n_rows == 0:
        raise ValidationError(f"{name}: must have at least one row")

    first = entries[0]
    if not isinstance(first, (Sequence, np.ndarray)) or isinstance(first, (str, bytes)):
        raise ValidationError(
            f"{name}: row 0 is {type(first).__name__}, expected a sequence"
        )
    n_cols = len(first)
    if n_cols == 0:
        raise ValidationError(f"{name}: rows must have at least one column")

    buffer = np.empty(n_rows * n_cols, dtype=np.float32)
    for i, row in enumerate(entries):
        if not isinstance(row, (Sequence, np.ndarray)) or isinstance(row, (str, bytes)):
            raise ValidationError(
                f"{name}: row {i} is {type(row).__name__}, expected a sequence",
                context={'row': i},
            )
        if len(row) != n_cols:
            raise ValidationError(
                f"{name}: ragged rows, row {i} has {len(row)} entries, expected {n_cols}",
                context={'row': i, 'length': len(row), 'expected': n_cols},
            )
        with np.errstate(over='ignore'):
            for j, value in enumerate(row):
                buffer[i * n_cols + j] = check_finite_value(value, f"{name}[{i}][{j}]")

    # Finite float64 values can still overflow float32
    check_finite(buffer, name)
    return n_rows, n_cols, buffer


def check_vector(values: Any, length: int, name: str) -> NDArray[np.float64]:
    """
    Validate a right-hand-side vector and return it as float64.

    Args:
        values: One-dimensional sequence of finite numbers
        length: Required number of entries
        name: Parameter name for error messages

    Raises:
        ValidationError: If values is not a 1D sequence of finite numbers
            of the required length
    """
    if not isinstance(values, (Sequence, np.ndarray)) or isinstance(values, (str, bytes)):
        raise ValidationError(
            f"{name}: expected a sequence, got {type(values).__name__}",
            context={name: values},
        )
    if isinstance(values, np.ndarray) and values.ndim != 1:
        raise ValidationError(
            f"{name}: expected 1D array, got {values.ndim}D with shape {values.shape}"
        )
    if len(values) != length:
        raise ValidationError(
            f"{name}: has {len(values)} entries, expected {length}",
            context={'length': len(values), 'expected': length},
        )
    result = np.empty(length, dtype=np.float64)
    for i, value in enumerate(values):
        if not is_real_number(value) or not np.isfinite(_as_float(value)):
            raise ValidationError(
                f"{name}[{i}]: expected a finite number, got {value!r}",
                context={'index': i},
            )
        result[i] = _as_float(value)
    return result
