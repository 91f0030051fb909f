"""Simple visualization utilities for tile occupancy."""

import numpy as np
import matplotlib.pyplot as plt

from tiled_arrays.config.yaml_loader import get_default


def plot_tile_pattern(
    tm,
    title: str = 'Tile Occupancy',
    save_path: str = None,
):
    """Draw which tiles of a TiledMatrix hold storage.

    Present tiles are shaded by their maximum absolute value; empty tiles
    are left blank. Tile boundaries are drawn at their true extents, so
    uneven partitions are visible.

    Args:
        tm: TiledMatrix to draw
        title: Plot title
        save_path: If provided, save to file instead of showing

    Returns:
        The matplotlib Figure
    """
    nrows, ncols = tm.shape
    magnitude = np.full(tm.tile_grid_shape, np.nan)
    for info in tm.iter_tiles():
        if not info.is_empty:
            magnitude[info.tile_row, info.tile_col] = np.abs(
                tm.tile(info.tile_row, info.tile_col)
            ).max()

    row_edges = [r.start for r in tm.row_partitions] + [nrows]
    col_edges = [c.start for c in tm.col_partitions] + [ncols]

    fig, ax = plt.subplots(figsize=(6, 6))

    mesh = ax.pcolormesh(
        col_edges,
        row_edges,
        np.ma.masked_invalid(magnitude),
        cmap=get_default('plotting.cmap_present'),
        edgecolors='k',
        linewidth=0.5,
    )

    plt.colorbar(mesh, ax=ax, label='max |value| per tile')
    ax.set_xlim(0, ncols)
    ax.set_ylim(nrows, 0)
    ax.set_xlabel('column')
    ax.set_ylabel('row')
    ax.set_title(f"{title} ({tm.n_present_tiles}/{magnitude.size} tiles present)")

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=get_default('plotting.dpi'), bbox_inches='tight')
        plt.close(fig)
    else:
        plt.show()

    return fig
