"""Axis partitioning into contiguous tile ranges.

A partition is an ordered list of half-open ``range`` objects that covers
``range(0, length)`` with no gaps and no overlaps. Tile boundaries along
one axis of a TiledMatrix are defined by one partition.

Example: length=10, n_tiles=3
    - Tile 0: [0, 4) (4 indices)
    - Tile 1: [4, 7) (3 indices)
    - Tile 2: [7, 10) (3 indices)

Import Policy:
    from tiled_arrays.core.partition import chunk_ranges, validate_partition
"""

import logging
from typing import List, Sequence

import numpy as np

from tiled_arrays.core.exceptions import PartitionError

logger = logging.getLogger(__name__)


def chunk_ranges(length: int, n_tiles: int) -> List[range]:
    """Split ``range(0, length)`` into ``n_tiles`` contiguous chunks.

    Chunk sizes differ by at most one; the first ``length % n_tiles``
    chunks carry the extra index.

    Args:
        length: Number of indices along the axis
        n_tiles: Requested number of chunks

    Returns:
        List of half-open ranges ordered by start index

    Raises:
        PartitionError: If n_tiles < 1 or length < 0
    """
    if n_tiles < 1:
        raise PartitionError(f"n_tiles must be positive, got {n_tiles}")
    if length < 0:
        raise PartitionError(f"length must be non-negative, got {length}")

    if length == 0:
        return [range(0, 0)]

    if n_tiles > length:
        logger.warning(
            f"Requested {n_tiles} tiles for an axis of length {length}; "
            f"using {length} tiles instead"
        )
        n_tiles = length

    base, extra = divmod(length, n_tiles)
    ranges = []
    start = 0
    for k in range(n_tiles):
        stop = start + base + (1 if k < extra else 0)
        ranges.append(range(start, stop))
        start = stop

    return ranges


def ranges_from_sizes(sizes: Sequence[int]) -> List[range]:
    """Build contiguous ranges from a sequence of tile sizes.

    Raises:
        PartitionError: If any size is not positive
    """
    ranges = []
    start = 0
    for size in sizes:
        if size <= 0:
            raise PartitionError(f"tile sizes must be positive, got {list(sizes)}")
        ranges.append(range(start, start + size))
        start += size
    return ranges


def ranges_from_boundaries(boundaries: Sequence[int]) -> List[range]:
    """Build ranges between consecutive boundary offsets.

    ``[0, 2, 5]`` yields ``[range(0, 2), range(2, 5)]``.
    """
    if len(boundaries) < 2:
        raise PartitionError(
            f"at least two boundaries are required, got {list(boundaries)}"
        )
    if boundaries[0] != 0:
        raise PartitionError(f"first boundary must be 0, got {boundaries[0]}")
    sizes = [b - a for a, b in zip(boundaries[:-1], boundaries[1:])]
    return ranges_from_sizes(sizes)


def validate_partition(ranges: Sequence[range], length: int, axis_name: str = "axis") -> None:
    """Check that ``ranges`` is an exact, ordered cover of ``range(0, length)``.

    Args:
        ranges: Candidate partition
        length: Axis length to be covered
        axis_name: Name used in error messages ("row", "column")

    Raises:
        PartitionError: If the partition is empty, has gaps or overlaps,
            uses a step other than 1, or does not end at ``length``
    """
    if len(ranges) == 0:
        raise PartitionError(f"{axis_name} partition must contain at least one range")

    if length == 0:
        if len(ranges) == 1 and len(ranges[0]) == 0 and ranges[0].start == 0:
            return
        raise PartitionError(
            f"{axis_name} partition for a zero-length axis must be [range(0, 0)]"
        )

    expected_start = 0
    for k, r in enumerate(ranges):
        if not isinstance(r, range):
            raise PartitionError(
                f"{axis_name} partition entry {k} must be a range, got {type(r).__name__}"
            )
        if r.step != 1:
            raise PartitionError(f"{axis_name} range {k} has step {r.step}, expected 1")
        if len(r) == 0:
            raise PartitionError(f"{axis_name} range {k} is empty")
        if r.start != expected_start:
            raise PartitionError(
                f"{axis_name} range {k} starts at {r.start}, expected {expected_start} "
                f"(ranges must be contiguous and non-overlapping)"
            )
        expected_start = r.stop

    if expected_start != length:
        raise PartitionError(
            f"{axis_name} partition covers [0, {expected_start}), "
            f"but the axis has length {length}"
        )


def partition_starts(ranges: Sequence[range]) -> np.ndarray:
    """Start offsets of each range, for ``numpy.searchsorted`` lookups."""
    return np.array([r.start for r in ranges], dtype=np.int64)


def partition_stops(ranges: Sequence[range]) -> np.ndarray:
    """Stop offsets of each range."""
    return np.array([r.stop for r in ranges], dtype=np.int64)
