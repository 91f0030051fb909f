"""Utilities package."""

from tiled_arrays.utils.visualization import plot_tile_pattern

__all__ = [
    'plot_tile_pattern',
]
