"""
Matrix: dense single-precision matrix over a flat row-major buffer.

Element (r, c) of an R x C matrix lives at index r * C + c of a
contiguous float32 array that the matrix owns exclusively. Every
arithmetic and decomposition method returns a new Matrix with its own
storage. The only in-place mutations are set_element() and
set_submatrix(), which write into the receiving matrix.

Construction:
    Matrix([[1, 2], [3, 4]])                  # nested rows
    Matrix(np.arange(6), rows=2, columns=3)   # flat buffer (copied)
    Matrix.identity(3), Matrix.zeros(2, 3), Matrix.reshape(values, 2, 3)
"""

from __future__ import annotations

from math import isqrt
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    ReshapeSizeMismatchError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_finite,
    check_finite_value,
    check_flat_buffer,
    check_index,
    check_integer,
    check_nested,
    check_positive_int,
    is_real_number,
)
from pymatrix.matrix import _arithmetic, _multiply, _orthogonal, _triangular
from pymatrix.matrix._orthogonal import QRResult
from pymatrix.matrix._utils import check_matrix


class Matrix:
    """
    Rectangular matrix of finite float32 values.

    Attributes:
        rows: Number of rows (> 0)
        columns: Number of columns (> 0)
        size: rows * columns
        shape: Label "(rows,columns)", used for shape equality checks
        is_square / is_tall / is_wide: Exactly one is True

    Args:
        entries: Nested sequence of equal-length rows, or (with rows and
            columns) a one-dimensional row-major buffer
        rows: Row count for the flat-buffer form
        columns: Column count for the flat-buffer form

    Raises:
        ValidationError: If the nested form is empty, ragged or non-numeric,
            or the flat form lacks positive integer rows/columns
        InvalidEntriesError: If any entry is NaN, infinite or not a number
        DimensionError: If a flat buffer's length is not rows * columns
    """

    __slots__ = ('_elements', '_rows', '_columns')

    def __init__(
        self,
        entries: ArrayLike,
        rows: int | None = None,
        columns: int | None = None,
    ):
        if rows is None and columns is None:
            n_rows, n_cols, buffer = check_nested(entries, 'entries')
        else:
            if rows is None or columns is None:
                raise ValidationError(
                    "rows and columns must both be given for a flat buffer",
                    code=804,
                    context={'rows': rows, 'columns': columns},
                )
            n_rows = check_positive_int(rows, 'rows')
            n_cols = check_positive_int(columns, 'columns')
            buffer = check_flat_buffer(entries, n_rows, n_cols, 'entries')

        self._elements: NDArray[np.float32] = buffer
        self._rows: int = n_rows
        self._columns: int = n_cols

    @classmethod
    def _wrap(cls, buffer: NDArray[np.float32], rows: int, columns: int) -> Matrix:
        """
        Build a matrix that takes ownership of a freshly computed buffer.

        Internal fast path for kernel results: skips structural validation
        but still enforces that every entry is finite.
        """
        if buffer.dtype != np.float32:
            with np.errstate(over='ignore'):
                buffer = buffer.astype(np.float32)
        check_finite(buffer, 'result')
        matrix = cls.__new__(cls)
        matrix._elements = buffer
        matrix._rows = rows
        matrix._columns = columns
        return matrix

    # ═══════════════════════════════════════════════════════════════════
    # Shape and classification
    # ═══════════════════════════════════════════════════════════════════

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    @property
    def size(self) -> int:
        """Number of stored entries."""
        return self._rows * self._columns

    @property
    def shape(self) -> str:
        """Shape label, e.g. '(2,3)'."""
        return f"({self._rows},{self._columns})"

    @property
    def is_square(self) -> bool:
        return self._rows == self._columns

    @property
    def is_tall(self) -> bool:
        return self._rows > self._columns

    @property
    def is_wide(self) -> bool:
        return self._columns > self._rows

    @property
    def elements(self) -> NDArray[np.float32]:
        """Read-only view of the row-major buffer."""
        view = self._elements.view()
        view.flags.writeable = False
        return view

    # ═══════════════════════════════════════════════════════════════════
    # Element access
    # ═══════════════════════════════════════════════════════════════════

    def get_element(self, row: int, column: int) -> float:
        """
        Value at (row, column), zero-based.

        Raises:
            ValidationError: If an index is not an integer
            IndexOutOfBoundsError: If an index is outside the matrix
        """
        i = check_index(row, self._rows, 'row')
        j = check_index(column, self._columns, 'column')
        return float(self._elements[i * self._columns + j])

    def get_row(self, index: int) -> NDArray[np.float32]:
        """Copy of row `index`."""
        i = check_index(index, self._rows, 'row')
        start = i * self._columns
        return self._elements[start:start + self._columns].copy()

    def get_column(self, index: int) -> NDArray[np.float32]:
        """Copy of column `index`."""
        j = check_index(index, self._columns, 'column')
        return self._elements[j::self._columns].copy()

    def set_element(self, row: int, column: int, value: float) -> None:
        """
        Overwrite the value at (row, column). Mutates this matrix in place.

        Raises:
            ValidationError: If an index is not an integer
            IndexOutOfBoundsError: If an index is outside the matrix
            InvalidEntriesError: If value is not a finite number
        """
        i = check_index(row, self._rows, 'row')
        j = check_index(column, self._columns, 'column')
        number = check_finite_value(value, 'value')
        with np.errstate(over='ignore'):
            stored = np.float32(number)
        check_finite(np.asarray(stored), 'value')
        self._elements[i * self._columns + j] = stored

    # ═══════════════════════════════════════════════════════════════════
    # Submatrix extraction and assembly
    # ═══════════════════════════════════════════════════════════════════

    def _check_block(self, start_row: int, start_col: int, size: int) -> tuple[int, int, int]:
        r = check_integer(start_row, 'start_row')
        c = check_integer(start_col, 'start_col')
        s = check_positive_int(size, 'size')
        if r < 0 or c < 0 or r + s > self._rows or c + s > self._columns:
            raise IndexOutOfBoundsError(
                f"Block of size {s} at ({r},{c}) does not fit in {self.shape}",
                context={'start_row': r, 'start_col': c, 'size': s},
            )
        return r, c, s

    def get_submatrix(self, start_row: int, start_col: int, size: int) -> Matrix:
        """
        Copy the size x size block whose top-left corner is (start_row, start_col).

        Each block row is read at offset (start_row + i) * columns + start_col
        of this matrix's buffer.

        Raises:
            IndexOutOfBoundsError: If the block does not lie within the matrix
        """
        r, c, s = self._check_block(start_row, start_col, size)
        block = np.empty(s * s, dtype=np.float32)
        for i in range(s):
            src = (r + i) * self._columns + c
            block[i * s:(i + 1) * s] = self._elements[src:src + s]
        return self._wrap(block, s, s)

    def set_submatrix(
        self,
        start_row: int,
        start_col: int,
        block: Matrix | ArrayLike,
    ) -> None:
        """
        Write a square block into this matrix at (start_row, start_col).

        MUTATES THIS MATRIX IN PLACE. This is the one bulk mutation path;
        every other operation returns a new matrix. The block size is the
        integer square root of the block's length.

        Args:
            start_row: Row of the block's top-left corner
            start_col: Column of the block's top-left corner
            block: Square Matrix, or flat row-major buffer of n*n values

        Raises:
            DimensionError: If the block is not square
            IndexOutOfBoundsError: If the block does not fit
            InvalidEntriesError: If a buffer contains non-finite values
        """
        if isinstance(block, Matrix):
            if not block.is_square:
                raise DimensionError(
                    f"Block must be square, got {block.shape}",
                    context={'block_shape': block.shape},
                )
            values = block._elements
            s = block.rows
        else:
            n_values = len(block)
            s = isqrt(n_values)
            if s == 0 or s * s != n_values:
                raise DimensionError(
                    f"Block length {n_values} is not a perfect square",
                    context={'length': n_values},
                )
            values = check_flat_buffer(block, s, s, 'block')

        r, c, s = self._check_block(start_row, start_col, s)
        for i in range(s):
            dst = (r + i) * self._columns + c
            self._elements[dst:dst + s] = values[i * s:(i + 1) * s]

    def transpose(self) -> Matrix:
        """New matrix with rows and columns exchanged."""
        square = self._elements.reshape(self._rows, self._columns)
        # For a single row or column square.T is already contiguous, so copy
        return self._wrap(square.T.copy().ravel(), self._columns, self._rows)

    # ═══════════════════════════════════════════════════════════════════
    # Arithmetic
    # ═══════════════════════════════════════════════════════════════════

    def add(self, B: Matrix) -> Matrix:
        """Elementwise sum. Raises DimensionError on shape mismatch."""
        return _arithmetic.add(self, B)

    def subtract(self, B: Matrix) -> Matrix:
        """Elementwise difference. Raises DimensionError on shape mismatch."""
        return _arithmetic.subtract(self, B)

    def scale(self, scalar: float) -> Matrix:
        """Every entry multiplied by `scalar`."""
        return _arithmetic.scale(self, scalar)

    def add_parallel(self, B: Matrix, workers: int | None = None) -> Matrix:
        """Elementwise sum computed by a thread pool; identical to add()."""
        return _arithmetic.add_parallel(self, B, workers=workers)

    def naive_multiply(self, B: Matrix) -> Matrix:
        """Product self @ B by block-unrolled dot products."""
        return _multiply.naive_multiply(self, B)

    def strassen_multiply(self, B: Matrix, workers: int | None = None) -> Matrix:
        """Product self @ B by Strassen's algorithm (square, power-of-two)."""
        return _multiply.strassen_multiply(self, B, workers=workers)

    # ═══════════════════════════════════════════════════════════════════
    # Triangular systems
    # ═══════════════════════════════════════════════════════════════════

    def back_substitution(self, b: ArrayLike) -> NDArray[np.float64]:
        """Solve self @ x = b for upper triangular self."""
        return _triangular.back_substitution(self, b)

    def forward_substitution(self, b: ArrayLike) -> NDArray[np.float64]:
        """Solve self @ x = b for lower triangular self."""
        return _triangular.forward_substitution(self, b)

    def invert_upper(self) -> Matrix:
        """Inverse of an upper triangular matrix."""
        return _triangular.invert_upper(self)

    def invert_lower(self) -> Matrix:
        """Inverse of a lower triangular matrix."""
        return _triangular.invert_lower(self)

    # ═══════════════════════════════════════════════════════════════════
    # Orthogonalization
    # ═══════════════════════════════════════════════════════════════════

    def gram_schmidt(self) -> Matrix:
        """Orthonormal basis of the column space, as columns."""
        return _orthogonal.gram_schmidt(self)

    def qr_decomposition(self) -> QRResult:
        """Factor self = Q R with orthonormal Q and upper triangular R."""
        return _orthogonal.qr_decomposition(self)

    # ═══════════════════════════════════════════════════════════════════
    # Predicates
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def is_upper_triangular(A: Matrix) -> bool:
        return _triangular.is_upper_triangular(A)

    @staticmethod
    def is_lower_triangular(A: Matrix) -> bool:
        return _triangular.is_lower_triangular(A)

    @staticmethod
    def is_int_matrix(A: Matrix) -> bool:
        """True if every entry is an integral value."""
        check_matrix(A, 'A')
        return bool(np.all(A._elements == np.floor(A._elements)))

    # ═══════════════════════════════════════════════════════════════════
    # Factories
    # ═══════════════════════════════════════════════════════════════════

    @classmethod
    def identity(cls, dimension: int) -> Matrix:
        """n x n identity."""
        n = check_positive_int(dimension, 'dimension')
        buffer = np.zeros(n * n, dtype=np.float32)
        buffer[::n + 1] = 1.0
        return cls._wrap(buffer, n, n)

    @classmethod
    def ones(cls, rows: int, columns: int) -> Matrix:
        n_rows = check_positive_int(rows, 'rows')
        n_cols = check_positive_int(columns, 'columns')
        return cls._wrap(np.ones(n_rows * n_cols, dtype=np.float32), n_rows, n_cols)

    @classmethod
    def zeros(cls, rows: int, columns: int) -> Matrix:
        n_rows = check_positive_int(rows, 'rows')
        n_cols = check_positive_int(columns, 'columns')
        return cls._wrap(np.zeros(n_rows * n_cols, dtype=np.float32), n_rows, n_cols)

    @classmethod
    def random(
        cls,
        rows: int,
        columns: int,
        rng: np.random.Generator | int | None = None,
    ) -> Matrix:
        """
        Matrix of entries drawn uniformly from [0, 100).

        Args:
            rows: Number of rows
            columns: Number of columns
            rng: Generator or seed for reproducible draws; None uses fresh
                OS entropy
        """
        n_rows = check_positive_int(rows, 'rows')
        n_cols = check_positive_int(columns, 'columns')
        generator = np.random.default_rng(rng)
        buffer = generator.random(n_rows * n_cols, dtype=np.float32) * np.float32(100.0)
        return cls._wrap(buffer, n_rows, n_cols)

    @classmethod
    def reshape(cls, values: ArrayLike, new_rows: int, new_columns: int) -> Matrix:
        """
        Lay a flat sequence of values out as a new_rows x new_columns matrix.

        Raises:
            ValidationError: If values is not a sequence or a dimension is
                not a positive integer
            ReshapeSizeMismatchError: If len(values) != new_rows * new_columns
        """
        n_rows = check_positive_int(new_rows, 'new_rows')
        n_cols = check_positive_int(new_columns, 'new_columns')
        if not hasattr(values, '__len__') or isinstance(values, (str, bytes)):
            raise ValidationError(
                f"values: expected a sequence, got {type(values).__name__}",
                context={'values': values},
            )
        n_values = len(values)
        if n_values != n_rows * n_cols:
            raise ReshapeSizeMismatchError(
                f"Invalid reshape dimensions: {n_values} values cannot fill "
                f"a {n_rows}x{n_cols} matrix",
                n_values=n_values,
                expected=n_rows * n_cols,
                context={'new_rows': n_rows, 'new_columns': n_cols},
            )
        return cls(values, n_rows, n_cols)

    # ═══════════════════════════════════════════════════════════════════
    # Conversion and display
    # ═══════════════════════════════════════════════════════════════════

    def to_array(self) -> list[list[float]]:
        """Nested lists of Python floats, row by row."""
        return [
            [self.get_element(i, j) for j in range(self._columns)]
            for i in range(self._rows)
        ]

    def to_numpy(self) -> NDArray[np.float32]:
        """2D copy of the entries."""
        return self._elements.reshape(self._rows, self._columns).copy()

    def __str__(self) -> str:
        cells = [[f"{value:g}" for value in row] for row in self.to_array()]
        widths = [max(len(row[j]) for row in cells) for j in range(self._columns)]
        lines = [
            "".join(cell.rjust(widths[j]) + "  " for j, cell in enumerate(row))
            for row in cells
        ]
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, columns={self._columns})"

    # Operator sugar: returns NotImplemented for foreign operands so Python
    # can try the reflected operation.

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> Matrix:
        if not is_real_number(other):
            return NotImplemented
        return self.scale(other)

    __rmul__ = __mul__

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.naive_multiply(other)


# Module-level predicates
is_upper_triangular = Matrix.is_upper_triangular
is_lower_triangular = Matrix.is_lower_triangular
is_int_matrix = Matrix.is_int_matrix
