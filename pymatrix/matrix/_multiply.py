"""
Matrix multiplication kernels.

Two strategies:
    naive_multiply: general dimensions, block-unrolled dot products over a
        transposed right operand so both operands are read row-major.
    strassen_multiply: square power-of-two dimensions, seven recursive
        products per level, O(n^log2(7)).
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import numpy as np

from pymatrix.core.compute.tolerances import STRASSEN_BASE_SIZE, UNROLL_FACTOR
from pymatrix.core.exceptions import DimensionError, NotSquareError
from pymatrix.core.validation import check_positive_int
from pymatrix.matrix._utils import check_operand, is_power_of_two

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


def naive_multiply(A: Matrix, B: Matrix) -> Matrix:
    """
    Product A @ B by direct dot products.

    B is transposed once up front, so row i of A and row j of B' are both
    contiguous. Each dot product is accumulated in blocks of
    min(columns, UNROLL_FACTOR) terms; the trailing block is simply shorter.
    Partial sums are carried in double precision and the result is stored
    as float32.

    Raises:
        DimensionError: If B is not a Matrix or A.columns != B.rows
    """
    check_operand(B, 'multiplication', 807)
    if A.columns != B.rows:
        raise DimensionError(
            f"Invalid matrix dimensions for multiplication: "
            f"A has {A.columns} columns but B has {B.rows} rows",
            context={'A_columns': A.columns, 'B_rows': B.rows},
        )

    rows = A.rows
    inner = A.columns
    out_columns = B.columns
    left = A._elements.astype(np.float64)
    right_t = B.transpose()._elements.astype(np.float64)

    unroll = min(inner, UNROLL_FACTOR)
    result = np.empty(rows * out_columns, dtype=np.float32)

    for i in range(rows):
        row_a = left[i * inner:(i + 1) * inner]
        out_offset = i * out_columns
        for j in range(out_columns):
            row_b = right_t[j * inner:(j + 1) * inner]
            total = 0.0
            for k in range(0, inner, unroll):
                limit = min(k + unroll, inner)
                total += float(np.dot(row_a[k:limit], row_b[k:limit]))
            result[out_offset + j] = total

    return A._wrap(result, rows, out_columns)


def _check_strassen_operands(A: Matrix, B: Matrix) -> None:
    check_operand(B, 'multiplication', 807)
    if not A.is_square or not B.is_square:
        raise NotSquareError(
            f"Strassen multiply requires square matrices, got {A.shape} and {B.shape}",
            context={'A_shape': A.shape, 'B_shape': B.shape},
        )
    if A.columns != B.rows:
        raise DimensionError(
            f"Invalid matrix dimensions for multiplication: {A.shape} vs {B.shape}",
            context={'A_columns': A.columns, 'B_rows': B.rows},
        )
    if not is_power_of_two(A.rows):
        raise DimensionError(
            f"Strassen multiply requires a power-of-two dimension, got {A.rows}",
            context={'dimension': A.rows},
        )


def strassen_multiply(A: Matrix, B: Matrix, workers: int | None = None) -> Matrix:
    """
    Product A @ B by Strassen's algorithm.

    Args:
        A: Square left operand with power-of-two dimension
        B: Square right operand of the same dimension
        workers: If greater than 1, the seven top-level products are
            computed on a thread pool of this size (at most 7 threads).
            Deeper levels always recurse sequentially.

    Raises:
        ValidationError: If workers is invalid
        NotSquareError: If either operand is not square
        DimensionError: If B is not a Matrix, or dimensions differ or are
            not a power of two
    """
    _check_strassen_operands(A, B)
    n_workers = 1 if workers is None else check_positive_int(workers, 'workers')
    return _strassen(A, B, n_workers)


def _strassen(A: Matrix, B: Matrix, workers: int) -> Matrix:
    n = A.rows
    if n <= STRASSEN_BASE_SIZE:
        return naive_multiply(A, B)

    half = n // 2

    A11 = A.get_submatrix(0, 0, half)
    A12 = A.get_submatrix(0, half, half)
    A21 = A.get_submatrix(half, 0, half)
    A22 = A.get_submatrix(half, half, half)

    B11 = B.get_submatrix(0, 0, half)
    B12 = B.get_submatrix(0, half, half)
    B21 = B.get_submatrix(half, 0, half)
    B22 = B.get_submatrix(half, half, half)

    operands = [
        (A11, B12.subtract(B22)),
        (A11.add(A12), B22),
        (A21.add(A22), B11),
        (A22, B21.subtract(B11)),
        (A11.add(A22), B11.add(B22)),
        (A12.subtract(A22), B21.add(B22)),
        (A11.subtract(A21), B11.add(B12)),
    ]

    if workers > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(operands))) as executor:
            products = list(executor.map(lambda pair: _strassen(*pair, 1), operands))
    else:
        products = [_strassen(left, right, 1) for left, right in operands]

    P1, P2, P3, P4, P5, P6, P7 = products

    C11 = P5.add(P4).subtract(P2).add(P6)
    C12 = P1.add(P2)
    C21 = P3.add(P4)
    C22 = P5.add(P1).subtract(P3).subtract(P7)

    C = type(A).zeros(n, n)
    C.set_submatrix(0, 0, C11)
    C.set_submatrix(0, half, C12)
    C.set_submatrix(half, 0, C21)
    C.set_submatrix(half, half, C22)
    return C
