"""Global-to-tile index resolution.

Pure functions mapping a global row or column index to the tile that owns
it and to the offset inside that tile. ``locate`` is a linear scan over the
partition; ``locate_sorted`` is the binary-search equivalent used when a
container holds many tiles.
"""

from typing import Optional, Sequence

import numpy as np


def locate(partitions: Sequence[range], index: int) -> Optional[int]:
    """Return the position of the first range containing ``index``.

    Returns:
        Tile index, or None if no range contains ``index``
    """
    for k, r in enumerate(partitions):
        if r.start <= index < r.stop:
            return k
    return None


def locate_sorted(starts: np.ndarray, stops: np.ndarray, index: int) -> Optional[int]:
    """Binary-search version of :func:`locate`.

    Args:
        starts: Sorted range start offsets
        stops: Range stop offsets, aligned with ``starts``
        index: Global index

    Returns:
        Tile index, or None if no range contains ``index``
    """
    k = int(np.searchsorted(starts, index, side="right")) - 1
    if k < 0 or index >= stops[k]:
        return None
    return k


def local_offset(partitions: Sequence[range], tile_index: int, index: int) -> int:
    """Offset of global ``index`` relative to the start of its tile."""
    return index - partitions[tile_index].start
