"""Exception hierarchy for tiled arrays.

Import Policy:
    from tiled_arrays.core.exceptions import TileIndexError, TilingError
"""


class TiledArrayError(Exception):
    """Base exception for tiled array errors."""

    pass


class TileIndexError(TiledArrayError, IndexError):
    """Raised when an element or axis index has no owning tile."""

    pass


class TilingError(TiledArrayError, ValueError):
    """Raised when an operation's structural precondition does not hold."""

    pass


class PartitionError(TiledArrayError, ValueError):
    """Raised when a partition does not cover its axis exactly."""

    pass


class InvariantError(TiledArrayError):
    """Raised when a container fails invariant validation."""

    pass
