"""Configuration defaults for tiled_arrays.

Defaults live in ``defaults.yaml`` next to this module. A file named by
TILED_ARRAYS_DEFAULTS_PATH is merged on top of them:

    from tiled_arrays.config import get_default
    n_tiles = get_default('tiling.n_tiles')

Import Policy:
    DO NOT use: from tiled_arrays.config import *
"""

from tiled_arrays.config.yaml_loader import (
    ConfigurationError,
    get_default,
    get_defaults,
    reload_defaults,
)

__all__ = [
    "ConfigurationError",
    "get_default",
    "get_defaults",
    "reload_defaults",
]
