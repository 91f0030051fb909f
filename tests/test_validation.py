"""Tests for TiledMatrix invariant validation."""

import pytest
import numpy as np

from tiled_arrays import TiledMatrix, check_invariants, validate_tiled_matrix
from tiled_arrays.core.exceptions import InvariantError


class TestCheckInvariants:
    """Tests for check_invariants and validate_tiled_matrix."""

    def test_fresh_container_is_valid(self, block_zero_tiled):
        assert check_invariants(block_zero_tiled) == []
        assert validate_tiled_matrix(block_zero_tiled) == (True, [])

    def test_valid_after_mixed_operations(self, rng, complex_source):
        tm = TiledMatrix(complex_source, 2)
        for _ in range(20):
            i, j = rng.integers(0, 4, size=2)
            tm[i, j] = 0.0 if rng.random() < 0.5 else rng.random()
        tm.transpose_inplace()
        tm[0:2, 2:4] = 0.0

        assert check_invariants(tm) == []

    def test_detects_all_zero_present_tile(self, block_zero_tiled):
        block_zero_tiled._tiles[1][1] = np.zeros((2, 2))

        errors = check_invariants(block_zero_tiled)

        assert len(errors) == 1
        assert "all-zero" in errors[0]

    def test_detects_wrong_tile_shape(self, block_zero_tiled):
        block_zero_tiled._tiles[0][0] = np.ones((3, 3))

        errors = check_invariants(block_zero_tiled)

        assert any("has shape (3, 3), expected (2, 2)" in err for err in errors)

    def test_detects_broken_partition(self, block_zero_tiled):
        block_zero_tiled.row_partitions = [range(0, 1), range(2, 4)]

        errors = check_invariants(block_zero_tiled)

        assert any("starts at 2" in err for err in errors)

    def test_detects_grid_mismatch(self, block_zero_tiled):
        block_zero_tiled._tiles.append([None, None])

        errors = check_invariants(block_zero_tiled)

        assert any("tile grid" in err for err in errors)

    def test_validate_raises(self, block_zero_tiled):
        block_zero_tiled._tiles[1][1] = np.zeros((2, 2))

        with pytest.raises(InvariantError, match="1 error"):
            validate_tiled_matrix(block_zero_tiled)

    def test_validate_without_raising(self, block_zero_tiled):
        block_zero_tiled._tiles[1][1] = np.zeros((2, 2))

        is_valid, errors = validate_tiled_matrix(block_zero_tiled, raise_on_error=False)

        assert not is_valid
        assert len(errors) == 1
