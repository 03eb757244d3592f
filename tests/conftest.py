"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def pair_2x2():
    """The two 2x2 operands used throughout the arithmetic scenarios."""
    A = Matrix([[1, 2], [3, 4]])
    B = Matrix([[5, 6], [7, 8]])
    return A, B


@pytest.fixture
def upper_3x3():
    """Invertible upper triangular matrix with integer entries."""
    return Matrix([[2, 1, 3], [0, 4, 5], [0, 0, 6]])


@pytest.fixture
def lower_3x3():
    """Invertible lower triangular matrix (transpose of upper_3x3)."""
    return Matrix([[2, 0, 0], [1, 4, 0], [3, 5, 6]])


@pytest.fixture
def classic_qr_matrix():
    """Textbook 3x3 matrix whose Gram-Schmidt factors are known exactly."""
    return Matrix([[12, -51, 4], [6, 167, -68], [-4, 24, -41]])


@pytest.fixture
def well_conditioned(rng):
    """Random diagonally dominant 6x6 matrix (independent columns)."""
    values = rng.uniform(-1.0, 1.0, size=(6, 6)) + 6.0 * np.eye(6)
    return Matrix(values)
