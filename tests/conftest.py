"""Pytest configuration and shared fixtures for tiled_arrays tests."""

import pytest
import numpy as np
import scipy.sparse as sp

from tiled_arrays import TiledMatrix


@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(20240611)


@pytest.fixture
def block_zero_source():
    """4x4 matrix whose lower-right 2x2 block is zero."""
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 2.0],
            [3.0, 4.0, 0.0, 0.0],
            [5.0, 6.0, 0.0, 0.0],
        ]
    )


@pytest.fixture
def block_zero_tiled(block_zero_source):
    """block_zero_source tiled 2x2 (tile ranges [0, 2), [2, 4) on both axes)."""
    return TiledMatrix(block_zero_source, 2)


@pytest.fixture
def sparse_source(block_zero_source):
    """CSR version of block_zero_source."""
    return sp.csr_matrix(block_zero_source)


@pytest.fixture
def random_source(rng):
    """Dense random 4x4 matrix with no zero tiles."""
    return rng.random((4, 4))


@pytest.fixture
def complex_source(rng):
    """Complex 4x4 matrix whose upper-right 2x2 block is zero."""
    A = rng.random((4, 4)) + 1j * rng.random((4, 4))
    A[0:2, 2:4] = 0
    return A
