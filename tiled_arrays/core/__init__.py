"""Core data structures for tiled matrices.

This module contains the TiledMatrix container, axis partitioning,
index resolution, backing store primitives and invariant validation.
"""

from tiled_arrays.core.exceptions import (
    InvariantError,
    PartitionError,
    TiledArrayError,
    TileIndexError,
    TilingError,
)
from tiled_arrays.core.indexing import local_offset, locate, locate_sorted
from tiled_arrays.core.partition import (
    chunk_ranges,
    ranges_from_boundaries,
    ranges_from_sizes,
    validate_partition,
)
from tiled_arrays.core.tiled_matrix import TiledMatrix, TileInfo
from tiled_arrays.core.validation import check_invariants, validate_tiled_matrix

__all__ = [
    "TiledMatrix",
    "TileInfo",
    "chunk_ranges",
    "ranges_from_sizes",
    "ranges_from_boundaries",
    "validate_partition",
    "locate",
    "locate_sorted",
    "local_offset",
    "check_invariants",
    "validate_tiled_matrix",
    "TiledArrayError",
    "TileIndexError",
    "TilingError",
    "PartitionError",
    "InvariantError",
]
