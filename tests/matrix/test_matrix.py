"""
Tests for the Matrix entity.

Covers construction (nested and flat forms), classification, element
access, submatrix extraction/assembly, transpose, factories, predicates,
conversion and operator sugar.
"""

import numpy as np
import pytest

from pymatrix import Matrix, is_int_matrix, is_lower_triangular, is_upper_triangular
from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    InvalidEntriesError,
    ReshapeSizeMismatchError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_nested(self):
        A = Matrix([[1, 2, 3], [4, 5, 6]])
        assert A.rows == 2
        assert A.columns == 3
        assert A.size == 6
        np.testing.assert_array_equal(A.elements, [1, 2, 3, 4, 5, 6])
        assert A.elements.dtype == np.float32

    def test_nested_ndarray(self):
        A = Matrix(np.array([[1.5, 2.5], [3.5, 4.5]]))
        assert A.get_element(1, 0) == 3.5

    def test_flat(self):
        A = Matrix(np.arange(6, dtype=np.float32), rows=2, columns=3)
        assert A.get_element(1, 2) == 5.0

    def test_flat_positional(self):
        A = Matrix([1, 2, 3, 4], 2, 2)
        assert A.to_array() == [[1.0, 2.0], [3.0, 4.0]]

    def test_flat_buffer_is_copied(self):
        source = np.zeros(4, dtype=np.float32)
        A = Matrix(source, 2, 2)
        source[0] = 7.0
        assert A.get_element(0, 0) == 0.0

    def test_flat_requires_both_dimensions(self):
        with pytest.raises(ValidationError, match="both be given"):
            Matrix([1, 2, 3, 4], rows=2)

    @pytest.mark.parametrize("rows, columns", [(0, 4), (2, -2), (2.0, 2), ("2", 2), (True, 4)])
    def test_flat_bad_dimensions(self, rows, columns):
        with pytest.raises(ValidationError):
            Matrix([1, 2, 3, 4], rows, columns)

    def test_flat_length_mismatch(self):
        with pytest.raises(DimensionError):
            Matrix([1, 2, 3], 2, 2)

    def test_flat_nan(self):
        with pytest.raises(InvalidEntriesError):
            Matrix(np.array([1.0, np.nan, 3.0, 4.0]), 2, 2)

    def test_flat_non_numeric(self):
        with pytest.raises(InvalidEntriesError):
            Matrix(["a", "b", "c", "d"], 2, 2)

    @pytest.mark.parametrize("entries", [[], [[]], [[1, 2], [3]], [1, 2], "matrix"])
    def test_nested_malformed(self, entries):
        with pytest.raises(ValidationError):
            Matrix(entries)

    @pytest.mark.parametrize("bad", [np.nan, np.inf, "3", None, True, 1e39])
    def test_nested_bad_entry(self, bad):
        # InvalidEntriesError is a ValidationError, so both contracts hold
        with pytest.raises(InvalidEntriesError):
            Matrix([[1, 2], [bad, 4]])
        with pytest.raises(ValidationError):
            Matrix([[1, 2], [bad, 4]])


# ═══════════════════════════════════════════════════════════════════════
# Shape and classification
# ═══════════════════════════════════════════════════════════════════════


class TestClassification:

    @pytest.mark.parametrize("rows, columns, square, tall, wide", [
        (2, 2, True, False, False),
        (3, 2, False, True, False),
        (2, 3, False, False, True),
        (1, 1, True, False, False),
    ])
    def test_exactly_one_flag(self, rows, columns, square, tall, wide):
        A = Matrix.zeros(rows, columns)
        assert (A.is_square, A.is_tall, A.is_wide) == (square, tall, wide)

    def test_flags_are_idempotent(self):
        A = Matrix.zeros(3, 2)
        assert A.is_tall and A.is_tall
        assert not A.is_square and not A.is_square

    def test_shape_label(self):
        assert Matrix.zeros(2, 3).shape == "(2,3)"

    def test_transpose_updates_classification(self):
        A = Matrix.zeros(3, 2).transpose()
        assert A.is_wide
        assert A.shape == "(2,3)"


# ═══════════════════════════════════════════════════════════════════════
# Element access
# ═══════════════════════════════════════════════════════════════════════


class TestElementAccess:

    def test_get_element(self, pair_2x2):
        A, _ = pair_2x2
        assert A.get_element(0, 1) == 2.0
        assert isinstance(A.get_element(0, 1), float)

    def test_get_element_out_of_bounds(self, pair_2x2):
        A, _ = pair_2x2
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            A.get_element(5, 5)
        assert exc_info.value.code == 800

    @pytest.mark.parametrize("row, column", [(-1, 0), (0, 2), (2, 0)])
    def test_get_element_each_axis_checked(self, pair_2x2, row, column):
        A, _ = pair_2x2
        with pytest.raises(IndexOutOfBoundsError):
            A.get_element(row, column)

    @pytest.mark.parametrize("row, column", [("0", 0), (0, 1.0), (None, 0)])
    def test_get_element_non_integer(self, pair_2x2, row, column):
        A, _ = pair_2x2
        with pytest.raises(ValidationError) as exc_info:
            A.get_element(row, column)
        assert not isinstance(exc_info.value, IndexOutOfBoundsError)

    def test_get_row(self, pair_2x2):
        A, _ = pair_2x2
        np.testing.assert_array_equal(A.get_row(1), [3, 4])

    def test_get_column_of_wide_matrix(self):
        A = Matrix([[1, 2, 3], [4, 5, 6]])
        np.testing.assert_array_equal(A.get_column(2), [3, 6])

    def test_get_row_and_column_bounds(self):
        A = Matrix([[1, 2, 3], [4, 5, 6]])
        with pytest.raises(IndexOutOfBoundsError):
            A.get_row(2)
        with pytest.raises(IndexOutOfBoundsError):
            A.get_column(3)

    def test_row_is_a_copy(self, pair_2x2):
        A, _ = pair_2x2
        row = A.get_row(0)
        row[0] = 100.0
        assert A.get_element(0, 0) == 1.0

    def test_set_element(self, pair_2x2):
        A, _ = pair_2x2
        assert A.set_element(1, 1, 9.5) is None
        assert A.get_element(1, 1) == 9.5

    def test_set_element_rejects_nan(self, pair_2x2):
        A, _ = pair_2x2
        with pytest.raises(InvalidEntriesError):
            A.set_element(0, 0, float('nan'))
        assert A.get_element(0, 0) == 1.0

    def test_set_element_rejects_float32_overflow(self, pair_2x2):
        A, _ = pair_2x2
        with pytest.raises(InvalidEntriesError):
            A.set_element(0, 0, 1e39)

    def test_set_element_out_of_bounds(self, pair_2x2):
        A, _ = pair_2x2
        with pytest.raises(IndexOutOfBoundsError):
            A.set_element(2, 0, 1.0)

    def test_elements_view_is_read_only(self, pair_2x2):
        A, _ = pair_2x2
        with pytest.raises(ValueError):
            A.elements[0] = 10.0


# ═══════════════════════════════════════════════════════════════════════
# Submatrices
# ═══════════════════════════════════════════════════════════════════════


class TestSubmatrix:

    @pytest.fixture
    def grid(self):
        return Matrix.reshape(list(range(16)), 4, 4)

    def test_get_submatrix(self, grid):
        block = grid.get_submatrix(1, 1, 2)
        assert block.to_array() == [[5.0, 6.0], [9.0, 10.0]]

    def test_get_submatrix_quadrants(self, grid):
        assert grid.get_submatrix(0, 2, 2).to_array() == [[2.0, 3.0], [6.0, 7.0]]
        assert grid.get_submatrix(2, 0, 2).to_array() == [[8.0, 9.0], [12.0, 13.0]]

    def test_get_submatrix_is_independent(self, grid):
        block = grid.get_submatrix(0, 0, 2)
        block.set_element(0, 0, 42.0)
        assert grid.get_element(0, 0) == 0.0

    def test_get_submatrix_outside(self, grid):
        with pytest.raises(IndexOutOfBoundsError):
            grid.get_submatrix(3, 3, 2)

    def test_set_submatrix_from_matrix(self):
        target = Matrix.zeros(4, 4)
        target.set_submatrix(2, 2, Matrix([[1, 2], [3, 4]]))
        assert target.get_row(2).tolist() == [0.0, 0.0, 1.0, 2.0]
        assert target.get_row(3).tolist() == [0.0, 0.0, 3.0, 4.0]
        assert target.get_row(0).tolist() == [0.0, 0.0, 0.0, 0.0]

    def test_set_submatrix_from_buffer(self):
        target = Matrix.zeros(3, 3)
        target.set_submatrix(0, 1, np.array([1, 2, 3, 4], dtype=np.float32))
        assert target.to_array() == [[0.0, 1.0, 2.0], [0.0, 3.0, 4.0], [0.0, 0.0, 0.0]]

    def test_set_submatrix_non_square_block(self):
        target = Matrix.zeros(3, 3)
        with pytest.raises(DimensionError):
            target.set_submatrix(0, 0, [1, 2, 3])
        with pytest.raises(DimensionError):
            target.set_submatrix(0, 0, Matrix.ones(1, 2))

    def test_set_submatrix_does_not_fit(self):
        target = Matrix.zeros(3, 3)
        with pytest.raises(IndexOutOfBoundsError):
            target.set_submatrix(2, 2, Matrix.ones(2, 2))
        assert target.to_array() == Matrix.zeros(3, 3).to_array()

    def test_roundtrip_through_blocks(self, grid):
        rebuilt = Matrix.zeros(4, 4)
        for r in (0, 2):
            for c in (0, 2):
                rebuilt.set_submatrix(r, c, grid.get_submatrix(r, c, 2))
        np.testing.assert_array_equal(rebuilt.to_numpy(), grid.to_numpy())


# ═══════════════════════════════════════════════════════════════════════
# Transpose
# ═══════════════════════════════════════════════════════════════════════


class TestTranspose:

    def test_values(self):
        A = Matrix([[1, 2, 3], [4, 5, 6]])
        assert A.transpose().to_array() == [[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]]

    def test_double_transpose_is_exact(self, rng):
        A = Matrix.random(5, 3, rng=rng)
        np.testing.assert_array_equal(A.transpose().transpose().to_numpy(), A.to_numpy())

    def test_new_storage(self, pair_2x2):
        A, _ = pair_2x2
        T = A.transpose()
        assert not np.shares_memory(T.elements, A.elements)

    @pytest.mark.parametrize("entries", [[[1, 2, 3]], [[1], [2], [3]], [[7]]])
    def test_vector_transpose_has_new_storage(self, entries):
        A = Matrix(entries)
        original = A.get_element(0, 0)
        T = A.transpose()
        assert not np.shares_memory(T.elements, A.elements)
        T.set_element(0, 0, 99.0)
        assert A.get_element(0, 0) == original


# ═══════════════════════════════════════════════════════════════════════
# Factories
# ═══════════════════════════════════════════════════════════════════════


class TestFactories:

    def test_identity(self):
        assert Matrix.identity(3).to_array() == [
            [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0],
        ]

    @pytest.mark.parametrize("dimension", [0, -1, 2.5, "3"])
    def test_identity_invalid(self, dimension):
        with pytest.raises(ValidationError):
            Matrix.identity(dimension)

    def test_ones_and_zeros(self):
        assert np.all(Matrix.ones(2, 3).to_numpy() == 1.0)
        assert np.all(Matrix.zeros(3, 2).to_numpy() == 0.0)
        assert Matrix.ones(2, 3).shape == "(2,3)"

    @pytest.mark.parametrize("factory", [Matrix.ones, Matrix.zeros, Matrix.random])
    def test_factories_reject_bad_dimensions(self, factory):
        with pytest.raises(ValidationError):
            factory(0, 3)

    def test_random_range(self, rng):
        values = Matrix.random(20, 20, rng=rng).to_numpy()
        assert values.min() >= 0.0
        assert values.max() < 100.0

    def test_random_reproducible(self):
        A = Matrix.random(3, 3, rng=7)
        B = Matrix.random(3, 3, rng=7)
        np.testing.assert_array_equal(A.to_numpy(), B.to_numpy())

    def test_reshape(self):
        A = Matrix.reshape([1, 2, 3, 4, 5, 6], 2, 3)
        assert A.to_array() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

    def test_reshape_size_mismatch(self):
        with pytest.raises(ReshapeSizeMismatchError) as exc_info:
            Matrix.reshape([1, 2, 3], 2, 2)
        assert exc_info.value.code == 806
        assert exc_info.value.n_values == 3
        assert exc_info.value.expected == 4

    def test_reshape_invalid_arguments(self):
        with pytest.raises(ValidationError):
            Matrix.reshape(5, 1, 1)
        with pytest.raises(ValidationError):
            Matrix.reshape([1, 2], 2.0, 1)


# ═══════════════════════════════════════════════════════════════════════
# Predicates
# ═══════════════════════════════════════════════════════════════════════


class TestPredicates:

    def test_identity_is_both(self):
        I = Matrix.identity(3)
        assert is_upper_triangular(I)
        assert is_lower_triangular(I)

    def test_upper(self, upper_3x3):
        assert Matrix.is_upper_triangular(upper_3x3)
        assert not Matrix.is_lower_triangular(upper_3x3)

    def test_lower(self, lower_3x3):
        assert is_lower_triangular(lower_3x3)
        assert not is_upper_triangular(lower_3x3)

    def test_rectangular(self):
        wide = Matrix([[1, 2, 3], [0, 4, 5]])
        tall = Matrix([[1, 0], [2, 3], [4, 5]])
        assert is_upper_triangular(wide)
        assert not is_lower_triangular(wide)
        assert is_lower_triangular(tall)
        assert not is_upper_triangular(tall)

    def test_int_matrix(self):
        assert is_int_matrix(Matrix([[1, 2], [-3, 0]]))
        assert not is_int_matrix(Matrix([[1, 2.5]]))

    @pytest.mark.parametrize("predicate", [
        is_upper_triangular, is_lower_triangular, is_int_matrix,
    ])
    def test_non_matrix_rejected(self, predicate):
        with pytest.raises(ValidationError):
            predicate([[1, 0], [0, 1]])


# ═══════════════════════════════════════════════════════════════════════
# Conversion, display, operators
# ═══════════════════════════════════════════════════════════════════════


class TestConversion:

    def test_to_array(self, pair_2x2):
        A, _ = pair_2x2
        assert A.to_array() == [[1.0, 2.0], [3.0, 4.0]]

    def test_to_numpy_is_copy(self, pair_2x2):
        A, _ = pair_2x2
        values = A.to_numpy()
        assert values.shape == (2, 2)
        values[0, 0] = 50.0
        assert A.get_element(0, 0) == 1.0

    def test_str_right_aligns_columns(self):
        assert str(Matrix([[1, 10], [100, 2]])) == "  1  10  \n100   2  \n"

    def test_repr(self):
        assert repr(Matrix.zeros(2, 3)) == "Matrix(rows=2, columns=3)"


class TestOperators:

    def test_add_sub(self, pair_2x2):
        A, B = pair_2x2
        assert (A + B).to_array() == A.add(B).to_array()
        assert (B - A).to_array() == B.subtract(A).to_array()

    def test_matmul(self, pair_2x2):
        A, B = pair_2x2
        assert (A @ B).to_array() == [[19.0, 22.0], [43.0, 50.0]]

    def test_scalar_multiplication_both_sides(self, pair_2x2):
        A, _ = pair_2x2
        assert (2 * A).to_array() == [[2.0, 4.0], [6.0, 8.0]]
        assert (A * 2).to_array() == [[2.0, 4.0], [6.0, 8.0]]

    def test_foreign_operands(self, pair_2x2):
        A, _ = pair_2x2
        with pytest.raises(TypeError):
            A + 1
        with pytest.raises(TypeError):
            A * "2"
        with pytest.raises(TypeError):
            A @ [[1, 0], [0, 1]]
