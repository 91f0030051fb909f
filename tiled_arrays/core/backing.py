"""Backing store primitives for tile storage.

Tiles of a dense source are numpy arrays; tiles of a sparse source are
``scipy.sparse.lil_matrix`` blocks, which support cheap scalar writes.
Every function here returns storage owned by the caller: no tile ever
aliases the source matrix or another tile.
"""

from typing import Any, Tuple

import numpy as np
import scipy.sparse as sp


def as_source(source: Any) -> Tuple[Any, bool]:
    """Normalize a source matrix.

    Returns:
        (matrix, is_sparse) where matrix is a CSR matrix for sparse input
        and a numpy array otherwise

    Raises:
        ValueError: If the source is not 2-dimensional
    """
    if sp.issparse(source):
        matrix = sp.csr_matrix(source)
        return matrix, True

    matrix = np.asarray(source)
    if matrix.ndim != 2:
        raise ValueError(f"source must be 2-dimensional, got shape {matrix.shape}")
    return matrix, False


def block_view(matrix: Any, rows: range, cols: range) -> Any:
    """Sub-block ``matrix[rows, cols]`` without taking ownership."""
    return matrix[rows.start:rows.stop, cols.start:cols.stop]


def own_block(view: Any, sparse: bool) -> Any:
    """Copy a sub-block into new tile storage."""
    if sparse:
        return sp.lil_matrix(view)
    return np.array(view, copy=True)


def is_zero(block: Any) -> bool:
    """True if every entry of ``block`` equals zero."""
    if sp.issparse(block):
        return block.count_nonzero() == 0
    return not np.any(block)


def zeros_block(shape: Tuple[int, int], dtype: np.dtype, sparse: bool) -> Any:
    """Allocate a zero-filled tile."""
    if sparse:
        return sp.lil_matrix(shape, dtype=dtype)
    return np.zeros(shape, dtype=dtype)


def transpose_block(block: Any) -> Any:
    """Transposed copy of a tile, in the same storage kind."""
    if sp.issparse(block):
        return sp.lil_matrix(block.T)
    return np.ascontiguousarray(block.T)


def to_dense(block: Any) -> np.ndarray:
    """Dense copy of a tile."""
    if sp.issparse(block):
        return block.toarray()
    return np.array(block, copy=True)


def copy_block(block: Any) -> Any:
    """Deep copy of a tile, same storage kind."""
    return block.copy()


def blocks_equal(a: Any, b: Any) -> bool:
    """Elementwise equality of two tiles of any storage kind."""
    if a.shape != b.shape:
        return False
    return bool(np.array_equal(to_dense(a), to_dense(b)))
