"""Tests for TiledMatrix built from scipy.sparse sources."""

import numpy as np
import scipy.sparse as sp
from numpy.testing import assert_array_equal

from tiled_arrays import TiledMatrix, check_invariants


class TestSparseSource:
    """Sparse sources behave like their dense equivalents."""

    def test_construction(self, sparse_source, block_zero_source):
        tm = TiledMatrix(sparse_source, 2)

        assert tm.sparse
        assert_array_equal(tm.emptiness, [[False, False], [False, True]])
        assert tm == block_zero_source
        assert tm == sparse_source

    def test_reads(self, sparse_source, block_zero_source):
        tm = TiledMatrix(sparse_source, 2)

        for i in range(4):
            for j in range(4):
                assert tm[i, j] == block_zero_source[i, j]
        assert_array_equal(tm[1:3, :], block_zero_source[1:3, :])
        assert isinstance(tm.tile(1, 0), np.ndarray)

    def test_write_and_release(self, sparse_source):
        tm = TiledMatrix(sparse_source, 2)
        tm[2, 3] += 6

        assert not tm.is_tile_empty(2, 2)
        assert tm[2, 3] == 6.0

        tm[2, 3] = 0.0
        assert tm.is_tile_empty(2, 2)
        assert check_invariants(tm) == []

    def test_perturbation(self, rng, sparse_source):
        tm = TiledMatrix(sparse_source, 2)
        dense = tm[:, :]
        perturbation = rng.integers(1, 11, size=(4, 4))

        dense += perturbation
        tm += perturbation

        assert tm == dense

    def test_transpose(self):
        M = np.diag(np.arange(1.0, 7.0))
        M[0, 5] = 2.0  # tile (0, 2), mirrored tile (2, 0) is also present
        M[4, 1] = 3.0
        M[2, 0] = 4.0  # tile (1, 0), mirrored tile (0, 1) is empty
        A = sp.csr_matrix(M)
        tm = TiledMatrix(A, 3)
        assert tm.is_empty_tile(0, 1)

        tm.transpose_inplace()

        assert tm.is_empty_tile(1, 0)
        assert not tm.is_empty_tile(0, 1)
        assert tm == A.T.toarray()
        assert tm == TiledMatrix(A.T, 3)

    def test_zeros_sparse(self):
        tm = TiledMatrix.zeros((4, 4), n_tiles=2, sparse=True)

        assert tm.sparse
        assert tm.n_present_tiles == 0
        tm[0, 0] = 1.0
        assert tm.n_present_tiles == 1
        assert tm.to_dense()[0, 0] == 1.0

    def test_sparse_and_dense_compare_equal(self, sparse_source, block_zero_source):
        assert TiledMatrix(sparse_source, 2) == TiledMatrix(block_zero_source, 2)

    def test_inplace_add_sparse_operand(self, sparse_source, block_zero_source):
        tm = TiledMatrix(sparse_source, 2)
        tm += sp.eye(4, format="csr")

        assert tm.sparse
        assert not tm.is_tile_empty(3, 3)
        assert tm == block_zero_source + np.eye(4)
