"""Tiled Arrays: block-granular sparsity for 2-D matrices

A TiledMatrix partitions a dense or sparse matrix into rectangular tiles
and tracks, per tile, whether it is entirely zero. It reads and writes
like a dense matrix while letting downstream code skip empty tiles.

Key Principles:
- Tiles are owned exclusively by their container; reads return copies
- Empty tiles hold no storage and read as zero
- Writes materialize tiles lazily; all-zero tiles are released after each write
- In-place transpose mirrors tiles, emptiness and partitions together

Version: 0.1
"""

__version__ = "0.1"

from tiled_arrays.core.exceptions import (
    InvariantError,
    PartitionError,
    TiledArrayError,
    TileIndexError,
    TilingError,
)
from tiled_arrays.core.partition import (
    chunk_ranges,
    ranges_from_boundaries,
    ranges_from_sizes,
)
from tiled_arrays.core.tiled_matrix import TiledMatrix, TileInfo
from tiled_arrays.core.validation import check_invariants, validate_tiled_matrix

__all__ = [
    # Version
    "__version__",
    # Container
    "TiledMatrix",
    "TileInfo",
    # Partitioning
    "chunk_ranges",
    "ranges_from_sizes",
    "ranges_from_boundaries",
    # Validation
    "check_invariants",
    "validate_tiled_matrix",
    # Errors
    "TiledArrayError",
    "TileIndexError",
    "TilingError",
    "PartitionError",
    "InvariantError",
]
