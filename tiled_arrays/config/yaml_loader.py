"""Layered YAML defaults for tiled_arrays.

The packaged ``defaults.yaml`` is always loaded first. A file named by the
``TILED_ARRAYS_DEFAULTS_PATH`` environment variable is merged on top of it,
so an override only needs the keys it changes:

    # site.yaml
    tiling:
      n_tiles: 8

Merged values are validated when they are loaded, not when they are used.
This module does not import the rest of tiled_arrays.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_VAR = "TILED_ARRAYS_DEFAULTS_PATH"
PACKAGED_DEFAULTS = Path(__file__).parent / "defaults.yaml"

# Keys whose values must be positive integers
_POSITIVE_INT_KEYS = (
    "tiling.n_tiles",
    "tiling.binary_search_threshold",
    "plotting.dpi",
)


class ConfigurationError(ValueError):
    """Raised when a defaults file holds an invalid value."""


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _lookup(config: dict[str, Any], key_path: str) -> Any:
    value: Any = config
    for key in key_path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _validate(config: dict[str, Any], source: str) -> None:
    errors = []
    for key_path in _POSITIVE_INT_KEYS:
        value = _lookup(config, key_path)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(f"{key_path} must be a positive integer, got {value!r}")
    if errors:
        raise ConfigurationError(
            f"Invalid configuration from {source}:\n" + "\n".join(f"  - {e}" for e in errors)
        )


def _load_config() -> dict[str, Any]:
    config = _read_yaml(PACKAGED_DEFAULTS)
    source = str(PACKAGED_DEFAULTS)

    env_path = os.getenv(ENV_VAR)
    if env_path:
        override_path = Path(env_path)
        if not override_path.exists():
            raise FileNotFoundError(
                f"{ENV_VAR} points to {override_path}, which does not exist"
            )
        config = _merge(config, _read_yaml(override_path))
        source = f"{PACKAGED_DEFAULTS} + {override_path}"
        logger.debug(f"Merged configuration overrides from {override_path}")

    _validate(config, source)
    return config


_CONFIG_CACHE: dict[str, Any] | None = None


def _get_config() -> dict[str, Any]:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = _load_config()
    return _CONFIG_CACHE


def get_defaults() -> dict[str, Any]:
    """Deep copy of the merged configuration."""
    return copy.deepcopy(_get_config())


def get_default(key_path: str, default: Any = None) -> Any:
    """Configuration value at a dotted key path such as ``'tiling.n_tiles'``.

    Returns ``default`` when any part of the path is missing.
    """
    value = _lookup(_get_config(), key_path)
    return default if value is None else value


def reload_defaults() -> None:
    """Reload and revalidate the packaged defaults and any override file.

    Raises:
        FileNotFoundError: If TILED_ARRAYS_DEFAULTS_PATH names a missing file
        ConfigurationError: If the merged values are invalid
    """
    global _CONFIG_CACHE
    _CONFIG_CACHE = None
    _CONFIG_CACHE = _load_config()
