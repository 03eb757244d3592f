"""
Elementwise arithmetic: add, subtract, scale, and a data-parallel add.

Every function validates its operands before allocating anything and
returns a new matrix; operands are never modified.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING
import warnings

import numpy as np

from pymatrix.core.compute.parallel import partition, resolve_workers
from pymatrix.core.exceptions import DimensionError
from pymatrix.core.validation import check_finite, check_real
from pymatrix.matrix._utils import check_operand, clone

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


def _check_operands(A: Matrix, B: Matrix, operation: str) -> None:
    """Both operands are matrices of identical shape."""
    check_operand(B, operation, 805)
    if A.shape != B.shape:
        raise DimensionError(
            f"Invalid matrix dimensions for {operation}: {A.shape} vs {B.shape}",
            code=805,
            context={
                'A_rows': A.rows, 'A_columns': A.columns,
                'B_rows': B.rows, 'B_columns': B.columns,
            },
        )


def add(A: Matrix, B: Matrix) -> Matrix:
    """Elementwise sum A + B."""
    _check_operands(A, B, 'addition')
    with np.errstate(over='ignore'):
        total = A._elements + B._elements
    return A._wrap(total, A.rows, A.columns)


def subtract(A: Matrix, B: Matrix) -> Matrix:
    """Elementwise difference A - B."""
    _check_operands(A, B, 'subtraction')
    with np.errstate(over='ignore'):
        difference = A._elements - B._elements
    return A._wrap(difference, A.rows, A.columns)


def scale(A: Matrix, scalar: float) -> Matrix:
    """
    Multiply every entry of A by `scalar`.

    The result is a deep clone of A; A itself is untouched.

    Raises:
        ValidationError: If scalar is not a real number
        InvalidEntriesError: If scaling overflows float32
    """
    factor = check_real(scalar, 'scalar')
    scaled = clone(A)
    with np.errstate(over='ignore'):
        np.multiply(scaled._elements, factor, out=scaled._elements, casting='same_kind')
    check_finite(scaled._elements, 'scaled entries')
    return scaled


def add_parallel(A: Matrix, B: Matrix, workers: int | None = None) -> Matrix:
    """
    Elementwise sum A + B computed by a pool of worker threads.

    The flat index range [0, size) is split into one contiguous chunk per
    worker. Each worker adds its slice of B into the same slice of a copy
    of A's buffer; chunks are disjoint, so no locking is needed. The pool
    is joined before the result is built, and the result is identical to
    add(A, B).

    Args:
        A: Left operand
        B: Right operand, same shape as A (read-only)
        workers: Number of worker threads; defaults to one per logical core

    Raises:
        ValidationError: If workers is not a positive int
        DimensionError: If B is not a Matrix or shapes differ
    """
    _check_operands(A, B, 'addition')
    n_workers = resolve_workers(workers)

    if n_workers > A.size:
        warnings.warn(
            f"add_parallel: {n_workers} workers requested for {A.size} entries; "
            f"{n_workers - A.size} workers will be idle",
            RuntimeWarning,
            stacklevel=3,
        )

    result = A._elements.copy()
    right = B._elements

    def _add_chunk(start: int, end: int) -> None:
        with np.errstate(over='ignore'):
            np.add(result[start:end], right[start:end], out=result[start:end])

    chunks = partition(A.size, n_workers)
    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        futures = [executor.submit(_add_chunk, start, end) for start, end in chunks]
        for future in as_completed(futures):
            future.result()

    return A._wrap(result, A.rows, A.columns)
