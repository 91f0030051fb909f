"""
Invariant Validation for TiledMatrix

This module checks the structural invariants of a TiledMatrix: partition
coverage, tile grid dimensions, tile shapes and the absence of Present
tiles that are entirely zero (which a flush would have released).

Import Policy:
    from tiled_arrays.core.validation import check_invariants, validate_tiled_matrix

DO NOT use: from tiled_arrays.core.validation import *
"""

from typing import TYPE_CHECKING, List, Tuple

from tiled_arrays.core.backing import is_zero
from tiled_arrays.core.exceptions import InvariantError, PartitionError
from tiled_arrays.core.partition import validate_partition

if TYPE_CHECKING:
    from tiled_arrays.core.tiled_matrix import TiledMatrix


def check_invariants(tm: "TiledMatrix") -> List[str]:
    """Collect invariant violations of a TiledMatrix.

    Invariants checked:
        1. Row and column partitions are exact ordered covers of their axes
        2. The tile grid has one slot per (row range, column range) pair
        3. Every Present tile has the extents of its ranges
        4. No Present tile is entirely zero

    Args:
        tm: Container to check

    Returns:
        List of error messages (empty if all invariants hold)
    """
    errors = []
    nrows, ncols = tm.shape

    for partitions, length, name in (
        (tm.row_partitions, nrows, "row"),
        (tm.col_partitions, ncols, "column"),
    ):
        try:
            validate_partition(partitions, length, name)
        except PartitionError as exc:
            errors.append(str(exc))

    n_row_tiles, n_col_tiles = tm.tile_grid_shape
    if len(tm._tiles) != n_row_tiles or any(len(row) != n_col_tiles for row in tm._tiles):
        errors.append(
            f"tile grid does not match partition counts {n_row_tiles}x{n_col_tiles}"
        )
        return errors

    for info in tm.iter_tiles():
        tile = tm._tiles[info.tile_row][info.tile_col]
        if tile is None:
            continue
        if tuple(tile.shape) != info.shape:
            errors.append(
                f"tile ({info.tile_row}, {info.tile_col}) has shape {tuple(tile.shape)}, "
                f"expected {info.shape}"
            )
        elif is_zero(tile):
            errors.append(
                f"tile ({info.tile_row}, {info.tile_col}) is present but all-zero"
            )

    return errors


def validate_tiled_matrix(tm: "TiledMatrix", raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """Validate a TiledMatrix.

    Args:
        tm: Container to validate
        raise_on_error: If True, raise InvariantError on failure

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        InvariantError: If validation fails and raise_on_error=True
    """
    errors = check_invariants(tm)

    if errors:
        if raise_on_error:
            raise InvariantError(
                f"TiledMatrix validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors

    return True, []
