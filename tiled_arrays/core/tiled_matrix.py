"""Blocked matrix container with per-tile emptiness tracking.

A TiledMatrix partitions a dense (numpy) or sparse (scipy.sparse) 2-D
array into rectangular tiles. Each tile slot is either Absent (``None``,
logically a zero block with no storage) or Present (an owned block whose
shape equals its row-range length x column-range length). Downstream
arithmetic can skip Absent tiles entirely.

Key concepts:
- Tile boundaries are given by a row partition and a column partition,
  each an ordered list of contiguous half-open ``range`` objects
- Reading an Absent tile returns zero without allocating
- Writing into an Absent tile materializes a zero-filled tile first
- After every write batch, tiles that became all-zero are released
- ``transpose_inplace`` swaps partitions and mirrors tiles across the
  tile diagonal (square tile grids only)

Typical usage:
    tm = TiledMatrix(A, n_tiles=2)
    tm.is_tile_empty(2, 2)       # emptiness of the tile owning A[2, 2]
    tm[2, 3] = 6.0               # materializes that tile
    tm.transpose_inplace()
    assert tm == A.T

Import Policy:
    from tiled_arrays.core.tiled_matrix import TiledMatrix, TileInfo
"""

import logging
import operator
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import scipy.sparse as sp

from tiled_arrays.config.yaml_loader import get_default
from tiled_arrays.core.backing import (
    as_source,
    block_view,
    blocks_equal,
    copy_block,
    is_zero,
    own_block,
    to_dense,
    transpose_block,
    zeros_block,
)
from tiled_arrays.core.exceptions import TileIndexError, TilingError
from tiled_arrays.core.indexing import local_offset, locate, locate_sorted
from tiled_arrays.core.partition import (
    chunk_ranges,
    partition_starts,
    partition_stops,
    validate_partition,
)

logger = logging.getLogger(__name__)


@dataclass
class TileInfo:
    """Description of one tile slot.

    Attributes:
        tile_row: Tile index along the row axis
        tile_col: Tile index along the column axis
        rows: Global row range covered by the tile
        cols: Global column range covered by the tile
        is_empty: True if the slot holds no storage
    """
    tile_row: int
    tile_col: int
    rows: range
    cols: range
    is_empty: bool

    @property
    def shape(self) -> Tuple[int, int]:
        """Tile extents (rows, cols)."""
        return (len(self.rows), len(self.cols))


def _is_scalar_index(key: Any) -> bool:
    return isinstance(key, (int, np.integer)) and not isinstance(key, (bool, np.bool_))


# Python scalars are weakly typed: their kind, not a default width, decides
# whether they fit the container.
_PYTHON_SCALAR_KINDS = {bool: "b", int: "i", float: "f", complex: "c"}
_KIND_RANK = {"b": 0, "u": 1, "i": 1, "f": 2, "c": 3}


class TiledMatrix:
    """Dense-looking 2-D matrix stored as a grid of optional tiles.

    Attributes:
        row_partitions: Ordered row ranges, one per tile row
        col_partitions: Ordered column ranges, one per tile column
        sparse: True if tiles are stored as scipy.sparse LIL blocks
        transposed: Flipped by every ``transpose_inplace`` call
    """

    # ndarray == TiledMatrix defers to TiledMatrix.__eq__
    __array_ufunc__ = None
    __hash__ = None

    def __init__(
        self,
        source: Any,
        n_tiles: Optional[int] = None,
        row_partitions: Optional[Sequence[range]] = None,
        col_partitions: Optional[Sequence[range]] = None,
    ):
        """Tile a source matrix.

        Args:
            source: 2-D numpy array, array-like or scipy.sparse matrix
            n_tiles: Number of tiles per axis (defaults to
                ``tiling.n_tiles`` from defaults.yaml when no partitions
                are given). A sequence of ranges here is taken as the row
                partition, so ``TiledMatrix(A, rows, cols)`` also works.
            row_partitions: Explicit row ranges (requires col_partitions)
            col_partitions: Explicit column ranges (requires row_partitions)

        Raises:
            ValueError: If the source is not 2-D or the tiling arguments
                are inconsistent
            PartitionError: If explicit partitions do not cover the axes
        """
        matrix, sparse = as_source(source)
        nrows, ncols = matrix.shape

        if n_tiles is not None and not _is_scalar_index(n_tiles):
            if col_partitions is not None:
                raise ValueError(
                    "Too many partitions given; use "
                    "TiledMatrix.from_partitions(source, row_partitions, col_partitions)"
                )
            n_tiles, row_partitions, col_partitions = None, n_tiles, row_partitions

        if row_partitions is None and col_partitions is None:
            if n_tiles is None:
                n_tiles = get_default("tiling.n_tiles")
            row_partitions = chunk_ranges(nrows, n_tiles)
            col_partitions = chunk_ranges(ncols, n_tiles)
        elif n_tiles is not None:
            raise ValueError(
                "Pass either n_tiles or explicit partitions, not both; for explicit "
                "partitions use TiledMatrix.from_partitions(source, row_partitions, col_partitions)"
            )
        elif row_partitions is None or col_partitions is None:
            raise ValueError(
                "row_partitions and col_partitions must be given together; see "
                "TiledMatrix.from_partitions"
            )
        else:
            row_partitions = list(row_partitions)
            col_partitions = list(col_partitions)
            validate_partition(row_partitions, nrows, "row")
            validate_partition(col_partitions, ncols, "column")

        self.row_partitions: List[range] = list(row_partitions)
        self.col_partitions: List[range] = list(col_partitions)
        self.sparse = sparse
        self.transposed = False
        self._shape = (nrows, ncols)
        self._dtype = matrix.dtype

        self._tiles: List[List[Any]] = [
            [None] * len(self.col_partitions) for _ in self.row_partitions
        ]
        for ti, rows in enumerate(self.row_partitions):
            for tj, cols in enumerate(self.col_partitions):
                view = block_view(matrix, rows, cols)
                if is_zero(view):
                    continue
                self._tiles[ti][tj] = own_block(view, sparse)

        self._refresh_lookup()
        logger.debug(
            f"Tiled {nrows}x{ncols} {'sparse' if sparse else 'dense'} matrix into "
            f"{len(self.row_partitions)}x{len(self.col_partitions)} tiles, "
            f"{self.n_present_tiles} present"
        )

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_partitions(
        cls,
        source: Any,
        row_partitions: Sequence[range],
        col_partitions: Sequence[range],
    ) -> "TiledMatrix":
        """Tile ``source`` along explicit row and column partitions."""
        return cls(source, row_partitions=row_partitions, col_partitions=col_partitions)

    @classmethod
    def zeros(
        cls,
        shape: Tuple[int, int],
        n_tiles: Optional[int] = None,
        dtype: Any = np.float64,
        sparse: bool = False,
    ) -> "TiledMatrix":
        """All-zero container: every tile starts Absent."""
        if sparse:
            source = sp.csr_matrix(shape, dtype=dtype)
        else:
            source = np.zeros(shape, dtype=dtype)
        return cls(source, n_tiles=n_tiles)

    def copy(self) -> "TiledMatrix":
        """Deep copy; tiles are never shared between containers."""
        new = object.__new__(type(self))
        new.row_partitions = list(self.row_partitions)
        new.col_partitions = list(self.col_partitions)
        new.sparse = self.sparse
        new.transposed = self.transposed
        new._shape = self._shape
        new._dtype = self._dtype
        new._tiles = [
            [None if tile is None else copy_block(tile) for tile in row]
            for row in self._tiles
        ]
        new._refresh_lookup()
        return new

    # ------------------------------------------------------------------
    # Shape queries
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def dtype(self) -> np.dtype:
        """Element type of the container."""
        return self._dtype

    @property
    def ndim(self) -> int:
        return 2

    @property
    def size(self) -> int:
        """Total number of elements (rows * cols)."""
        return self._shape[0] * self._shape[1]

    def axis_length(self, axis: int) -> int:
        """Length of axis 0 (rows) or 1 (cols).

        Raises:
            TileIndexError: If axis is not 0 or 1
        """
        if axis not in (0, 1):
            raise TileIndexError(f"axis {axis} is out of bounds for a 2-D TiledMatrix")
        return self._shape[axis]

    @property
    def tile_grid_shape(self) -> Tuple[int, int]:
        """Number of tiles along each axis."""
        return (len(self.row_partitions), len(self.col_partitions))

    # ------------------------------------------------------------------
    # Index resolution
    # ------------------------------------------------------------------

    def _refresh_lookup(self) -> None:
        """Rebuild boundary arrays used by the binary-search resolver."""
        threshold = get_default("tiling.binary_search_threshold")
        self._use_binary_search = max(self.tile_grid_shape) > threshold
        self._row_starts = partition_starts(self.row_partitions)
        self._row_stops = partition_stops(self.row_partitions)
        self._col_starts = partition_starts(self.col_partitions)
        self._col_stops = partition_stops(self.col_partitions)

    def row_index(self, i: int) -> Optional[int]:
        """Tile row owning global row ``i``, or None if out of range."""
        i = operator.index(i)
        if self._use_binary_search:
            return locate_sorted(self._row_starts, self._row_stops, i)
        return locate(self.row_partitions, i)

    def col_index(self, j: int) -> Optional[int]:
        """Tile column owning global column ``j``, or None if out of range."""
        j = operator.index(j)
        if self._use_binary_search:
            return locate_sorted(self._col_starts, self._col_stops, j)
        return locate(self.col_partitions, j)

    def tile_indices(self, i: int, j: int) -> Tuple[int, int]:
        """Tile coordinates of global element ``(i, j)``.

        Raises:
            TileIndexError: If (i, j) lies outside the matrix
        """
        ti = self.row_index(i)
        tj = self.col_index(j)
        if ti is None or tj is None:
            raise TileIndexError(
                f"index ({i}, {j}) is out of bounds for TiledMatrix of shape {self._shape}"
            )
        return ti, tj

    def tile_local_indices(self, i: int, j: int) -> Tuple[int, int]:
        """Offset of global element ``(i, j)`` inside its tile."""
        ti, tj = self.tile_indices(i, j)
        return (
            local_offset(self.row_partitions, ti, i),
            local_offset(self.col_partitions, tj, j),
        )

    def _resolve_row(self, i: int) -> Tuple[int, int]:
        ti = self.row_index(i)
        if ti is None:
            raise TileIndexError(
                f"row index {i} is out of bounds for axis 0 with size {self._shape[0]}"
            )
        return ti, local_offset(self.row_partitions, ti, i)

    def _resolve_col(self, j: int) -> Tuple[int, int]:
        tj = self.col_index(j)
        if tj is None:
            raise TileIndexError(
                f"column index {j} is out of bounds for axis 1 with size {self._shape[1]}"
            )
        return tj, local_offset(self.col_partitions, tj, j)

    def _normalize_indices(self, key: Any, axis: int) -> List[int]:
        """Turn a slice, range, sequence, integer or boolean array into a list of ints."""
        length = self._shape[axis]
        if isinstance(key, slice):
            return list(range(*key.indices(length)))
        if isinstance(key, range):
            return list(key)
        if _is_scalar_index(key):
            return [int(key)]

        indices = np.asarray(key)
        if indices.dtype == np.bool_:
            if indices.shape != (length,):
                raise TileIndexError(
                    f"boolean index of shape {indices.shape} does not match axis {axis} "
                    f"with size {length}"
                )
            return [int(k) for k in np.flatnonzero(indices)]
        if indices.size and not np.issubdtype(indices.dtype, np.integer):
            raise TypeError(f"indices must be integers, got dtype {indices.dtype}")
        return [int(k) for k in indices.ravel()]

    # ------------------------------------------------------------------
    # Emptiness queries
    # ------------------------------------------------------------------

    @property
    def emptiness(self) -> np.ndarray:
        """Boolean tile grid, True where the slot holds no storage."""
        return np.array(
            [[tile is None for tile in row] for row in self._tiles],
            dtype=bool,
        ).reshape(self.tile_grid_shape)

    def is_tile_empty(self, i: int, j: int) -> bool:
        """Emptiness of the tile owning global element ``(i, j)``."""
        ti, tj = self.tile_indices(i, j)
        return self._tiles[ti][tj] is None

    def is_empty_tile(self, ti: int, tj: int) -> bool:
        """Emptiness of tile ``(ti, tj)`` addressed by tile coordinates."""
        self._check_tile_coordinates(ti, tj)
        return self._tiles[ti][tj] is None

    @property
    def n_present_tiles(self) -> int:
        return sum(tile is not None for row in self._tiles for tile in row)

    @property
    def occupancy(self) -> float:
        """Fraction of tile slots holding storage."""
        n_total = len(self.row_partitions) * len(self.col_partitions)
        return self.n_present_tiles / n_total

    def _check_tile_coordinates(self, ti: int, tj: int) -> None:
        n_rows, n_cols = self.tile_grid_shape
        if not (0 <= ti < n_rows and 0 <= tj < n_cols):
            raise TileIndexError(
                f"tile ({ti}, {tj}) is out of bounds for tile grid {self.tile_grid_shape}"
            )

    def tile(self, ti: int, tj: int) -> Optional[np.ndarray]:
        """Dense copy of tile ``(ti, tj)``, or None if it is empty."""
        self._check_tile_coordinates(ti, tj)
        block = self._tiles[ti][tj]
        if block is None:
            return None
        return to_dense(block)

    def iter_tiles(self) -> Iterator[TileInfo]:
        """Iterate over all tile slots in row-major order."""
        for ti, rows in enumerate(self.row_partitions):
            for tj, cols in enumerate(self.col_partitions):
                yield TileInfo(
                    tile_row=ti,
                    tile_col=tj,
                    rows=rows,
                    cols=cols,
                    is_empty=self._tiles[ti][tj] is None,
                )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read(self, i: int, j: int) -> Any:
        """Element ``(i, j)``; empty tiles yield zero without allocation."""
        ti, li = self._resolve_row(i)
        tj, lj = self._resolve_col(j)
        tile = self._tiles[ti][tj]
        if tile is None:
            return self._dtype.type(0)
        return tile[li, lj]

    def read_block(self, rows: Any, cols: Any) -> np.ndarray:
        """Dense copy of the elements at ``rows x cols``.

        The returned array is independent of the container.
        """
        rows = self._normalize_indices(rows, 0)
        cols = self._normalize_indices(cols, 1)
        row_targets = [self._resolve_row(i) for i in rows]
        col_targets = [self._resolve_col(j) for j in cols]

        out = np.zeros((len(rows), len(cols)), dtype=self._dtype)
        for a, (ti, li) in enumerate(row_targets):
            for b, (tj, lj) in enumerate(col_targets):
                tile = self._tiles[ti][tj]
                if tile is not None:
                    out[a, b] = tile[li, lj]
        return out

    def to_dense(self) -> np.ndarray:
        """Dense numpy copy of the whole matrix."""
        out = np.zeros(self._shape, dtype=self._dtype)
        for ti, rows in enumerate(self.row_partitions):
            for tj, cols in enumerate(self.col_partitions):
                tile = self._tiles[ti][tj]
                if tile is not None:
                    out[rows.start:rows.stop, cols.start:cols.stop] = to_dense(tile)
        return out

    def __array__(self, dtype=None, copy=None):
        if copy is False:
            raise ValueError("A TiledMatrix cannot be exposed as an ndarray without a copy")
        dense = self.to_dense()
        if dtype is not None:
            dense = dense.astype(dtype)
        return dense

    def __iter__(self) -> Iterator[np.ndarray]:
        for i in range(self._shape[0]):
            yield self.read_block([i], slice(None))[0]

    def __getitem__(self, key: Any) -> Any:
        i, j = self._split_key(key)
        i_scalar, j_scalar = _is_scalar_index(i), _is_scalar_index(j)
        if i_scalar and j_scalar:
            return self.read(i, j)

        block = self.read_block(i, j)
        if i_scalar:
            return block[0, :]
        if j_scalar:
            return block[:, 0]
        return block

    @staticmethod
    def _split_key(key: Any) -> Tuple[Any, Any]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TileIndexError(
                f"TiledMatrix indices must be a (row, col) pair, got {key!r}"
            )
        return key

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _coerce(self, values: Any) -> np.ndarray:
        """Cast values to the container dtype.

        Python scalars are checked by kind (bool < int < float < complex),
        so ``1`` fits uint8 and bool containers; arrays and numpy scalars
        follow numpy's same_kind rule.
        """
        if type(values) in _PYTHON_SCALAR_KINDS and self._dtype.kind in _KIND_RANK:
            return self._coerce_python_scalar(values)

        values = np.asarray(values)
        if not np.can_cast(values.dtype, self._dtype, casting="same_kind"):
            raise TypeError(
                f"Cannot write values of dtype {values.dtype} into a TiledMatrix "
                f"of dtype {self._dtype}"
            )
        return values.astype(self._dtype, copy=False)

    def _coerce_python_scalar(self, value: Any) -> np.ndarray:
        kind = _PYTHON_SCALAR_KINDS[type(value)]
        target = self._dtype.kind
        fits = _KIND_RANK[kind] <= _KIND_RANK[target]
        if not fits and not (target == "b" and kind == "i" and value in (0, 1)):
            raise TypeError(
                f"Cannot write {type(value).__name__} value {value!r} into a "
                f"TiledMatrix of dtype {self._dtype}"
            )
        if kind == "i" and target in "ui":
            info = np.iinfo(self._dtype)
            if not info.min <= value <= info.max:
                raise OverflowError(
                    f"value {value} is out of bounds for dtype {self._dtype}"
                )
        return np.array(value, dtype=self._dtype)

    def _write_local(self, ti: int, tj: int, li: int, lj: int, value: Any) -> None:
        """Write one element, materializing the tile if it is empty.

        Zero values still materialize the tile; the next flush releases it.
        """
        tile = self._tiles[ti][tj]
        if tile is None:
            shape = (len(self.row_partitions[ti]), len(self.col_partitions[tj]))
            tile = zeros_block(shape, self._dtype, self.sparse)
            tile[li, lj] = value
            self._tiles[ti][tj] = tile
            logger.debug(f"Materialized tile ({ti}, {tj}) with shape {shape}")
        else:
            tile[li, lj] = value

    def write(self, i: int, j: int, value: Any) -> Any:
        """Set element ``(i, j)`` and release any tile left all-zero.

        Returns:
            The written value

        Raises:
            TileIndexError: If (i, j) lies outside the matrix
            TypeError: If value cannot be cast to the container dtype
        """
        ti, li = self._resolve_row(i)
        tj, lj = self._resolve_col(j)
        scalar = self._coerce(value)
        if scalar.ndim != 0:
            raise ValueError(f"write expects a scalar value, got shape {scalar.shape}")
        self._write_local(ti, tj, li, lj, scalar[()])
        self.flush_zero_tiles()
        return value

    def write_block(self, rows: Any, cols: Any, values: Any) -> Any:
        """Elementwise write of ``values`` into ``rows x cols``.

        All indices are resolved and ``values`` is checked before the first
        element is written, so a failing call leaves the container untouched.

        Raises:
            TileIndexError: If any index lies outside the matrix
            ValueError: If values does not have shape (len(rows), len(cols))
            TypeError: If values cannot be cast to the container dtype
        """
        rows = self._normalize_indices(rows, 0)
        cols = self._normalize_indices(cols, 1)
        row_targets = [self._resolve_row(i) for i in rows]
        col_targets = [self._resolve_col(j) for j in cols]

        block = self._coerce(values)
        expected = (len(rows), len(cols))
        if block.shape != expected:
            raise ValueError(
                f"values of shape {block.shape} do not match the selected block {expected}"
            )

        for a, (ti, li) in enumerate(row_targets):
            for b, (tj, lj) in enumerate(col_targets):
                self._write_local(ti, tj, li, lj, block[a, b])
        self.flush_zero_tiles()
        return values

    def __setitem__(self, key: Any, value: Any) -> None:
        i, j = self._split_key(key)
        i_scalar, j_scalar = _is_scalar_index(i), _is_scalar_index(j)
        if i_scalar and j_scalar:
            self.write(i, j, value)
            return

        rows = self._normalize_indices(i, 0)
        cols = self._normalize_indices(j, 1)
        full = (len(rows), len(cols))
        if i_scalar:
            selected = (len(cols),)
        elif j_scalar:
            selected = (len(rows),)
        else:
            selected = full
        values = np.broadcast_to(self._coerce(value), selected).reshape(full)
        self.write_block(rows, cols, values)

    def _apply_inplace(self, other: Any, op) -> "TiledMatrix":
        if isinstance(other, TiledMatrix):
            other = other.to_dense()
        elif sp.issparse(other):
            other = other.toarray()
        elif type(other) not in _PYTHON_SCALAR_KINDS:
            other = np.asarray(other)
        # Python scalars stay weak so uint8 += 1 keeps the container dtype
        result = np.asarray(op(self.to_dense(), other))
        if result.shape != self._shape:
            raise TilingError(
                f"operand of shape {np.shape(other)} does not broadcast to {self._shape}"
            )
        self.write_block(slice(None), slice(None), result)
        return self

    def __iadd__(self, other: Any) -> "TiledMatrix":
        return self._apply_inplace(other, operator.add)

    def __isub__(self, other: Any) -> "TiledMatrix":
        return self._apply_inplace(other, operator.sub)

    # ------------------------------------------------------------------
    # Empty tile tracking
    # ------------------------------------------------------------------

    def flush_zero_tiles(self) -> int:
        """Release every Present tile whose contents are all zero.

        Returns:
            Number of tiles released
        """
        released = 0
        for ti, row in enumerate(self._tiles):
            for tj, tile in enumerate(row):
                if tile is not None and is_zero(tile):
                    row[tj] = None
                    released += 1
        if released:
            logger.debug(f"Released {released} all-zero tile(s)")
        return released

    # ------------------------------------------------------------------
    # Transpose
    # ------------------------------------------------------------------

    def transpose_inplace(self) -> "TiledMatrix":
        """Transpose the container in place.

        Partitions are swapped, and for every tile pair (i, j), (j, i) with
        i <= j each Present tile is transposed into the mirrored slot. The
        emptiness grid ends up mirrored across its diagonal. Calling this
        twice restores the original container.

        Returns:
            self

        Raises:
            TilingError: If the tile grid is not square
        """
        n_row_tiles, n_col_tiles = self.tile_grid_shape
        if n_row_tiles != n_col_tiles:
            raise TilingError(
                f"transpose_inplace requires a square tile grid, got "
                f"{n_row_tiles}x{n_col_tiles} tiles"
            )

        self.row_partitions, self.col_partitions = self.col_partitions, self.row_partitions
        self._shape = (self._shape[1], self._shape[0])
        self.transposed = not self.transposed

        tiles = self._tiles
        for i in range(n_row_tiles):
            for j in range(i, n_col_tiles):
                upper, lower = tiles[i][j], tiles[j][i]
                if upper is not None and lower is not None:
                    tiles[i][j] = transpose_block(lower)
                    tiles[j][i] = transpose_block(upper)
                elif upper is not None:
                    tiles[j][i] = transpose_block(upper)
                    tiles[i][j] = None
                elif lower is not None:
                    tiles[i][j] = transpose_block(lower)
                    tiles[j][i] = None

        self._refresh_lookup()
        logger.debug(f"Transposed in place, now shape {self._shape}")
        return self

    def transpose(self) -> "TiledMatrix":
        """Transposed copy; the container itself is left unchanged."""
        return self.copy().transpose_inplace()

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        """Single-bool equality.

        Against another TiledMatrix: same shape, partitions, emptiness and
        values. Against anything array-like: same shape and values.
        """
        if isinstance(other, TiledMatrix):
            if (
                self._shape != other._shape
                or self.row_partitions != other.row_partitions
                or self.col_partitions != other.col_partitions
            ):
                return False
            if not np.array_equal(self.emptiness, other.emptiness):
                return False
            return all(
                blocks_equal(a, b)
                for row_a, row_b in zip(self._tiles, other._tiles)
                for a, b in zip(row_a, row_b)
                if a is not None
            )

        if sp.issparse(other):
            other = other.toarray()
        other = np.asarray(other)
        if other.shape != self._shape:
            return False
        return bool(np.array_equal(self.to_dense(), other))

    def __repr__(self) -> str:
        n_rows, n_cols = self.tile_grid_shape
        flags = ""
        if self.sparse:
            flags += ", sparse"
        if self.transposed:
            flags += ", transposed"
        return (
            f"TiledMatrix(shape={self._shape}, dtype={self._dtype}, "
            f"tiles={n_rows}x{n_cols}, present={self.n_present_tiles}{flags})"
        )
