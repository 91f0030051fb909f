"""Tests for the YAML configuration defaults."""

import pytest
import numpy as np

from tiled_arrays import TiledMatrix
from tiled_arrays.config import (
    ConfigurationError,
    get_default,
    get_defaults,
    reload_defaults,
)


@pytest.fixture
def custom_defaults(tmp_path, monkeypatch):
    """Point TILED_ARRAYS_DEFAULTS_PATH at a temporary defaults file."""
    path = tmp_path / "defaults.yaml"
    path.write_text(
        "tiling:\n"
        "  n_tiles: 2\n"
        "  binary_search_threshold: 1\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("TILED_ARRAYS_DEFAULTS_PATH", str(path))
    reload_defaults()
    yield path
    monkeypatch.delenv("TILED_ARRAYS_DEFAULTS_PATH")
    reload_defaults()


class TestDefaults:
    """Tests for the packaged defaults.yaml."""

    def test_tiling_defaults(self):
        assert get_default("tiling.n_tiles") == 4
        assert get_default("tiling.binary_search_threshold") == 32

    def test_missing_key_fallback(self):
        assert get_default("tiling.nonexistent", "fallback") == "fallback"
        assert get_default("nonexistent.key") is None

    def test_get_defaults_is_a_copy(self):
        cfg = get_defaults()
        cfg["tiling"] = None

        assert get_default("tiling.n_tiles") == 4


class TestEnvironmentOverride:
    """Tests for TILED_ARRAYS_DEFAULTS_PATH."""

    def test_override_changes_default_tile_count(self, custom_defaults):
        assert get_default("tiling.n_tiles") == 2
        assert TiledMatrix(np.ones((4, 4))).tile_grid_shape == (2, 2)

    def test_binary_search_resolution(self, custom_defaults, rng):
        A = rng.random((7, 7))
        A[0:3, 3:7] = 0
        tm = TiledMatrix(A, 3)

        assert tm._use_binary_search
        for i in range(7):
            for j in range(7):
                assert tm[i, j] == A[i, j]
        with pytest.raises(IndexError):
            tm[7, 0]

        tm.transpose_inplace()
        assert tm == A.T


class TestManyTiles:
    """Large tile counts switch to binary search with identical results."""

    def test_reads_and_writes(self, rng):
        A = rng.random((50, 50))
        A[10:30, 10:30] = 0
        tm = TiledMatrix(A, 40)

        assert tm._use_binary_search
        assert tm == A
        tm[15, 15] = 1.0
        A[15, 15] = 1.0
        assert tm == A


@pytest.fixture
def write_override(tmp_path, monkeypatch):
    """Write an override file, point the environment at it, restore afterwards."""
    path = tmp_path / "override.yaml"

    def _write(text):
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv("TILED_ARRAYS_DEFAULTS_PATH", str(path))
        return path

    yield _write
    monkeypatch.delenv("TILED_ARRAYS_DEFAULTS_PATH", raising=False)
    reload_defaults()


class TestOverrideMerging:
    """Override files are merged onto the packaged defaults."""

    def test_omitted_section_keeps_packaged_values(self, custom_defaults):
        assert get_default("plotting.dpi") == 150
        assert get_default("plotting.cmap_present") == "viridis"

    def test_partial_section_keeps_sibling_keys(self, write_override):
        write_override("tiling:\n  n_tiles: 3\n")
        reload_defaults()

        assert get_default("tiling.n_tiles") == 3
        assert get_default("tiling.binary_search_threshold") == 32
        assert get_defaults()["plotting"]["dpi"] == 150


class TestValidation:
    """Invalid values are rejected when the configuration is loaded."""

    @pytest.mark.parametrize("text", [
        "tiling:\n  n_tiles: 0\n",
        "tiling:\n  binary_search_threshold: -1\n",
        "tiling:\n  n_tiles: 2.5\n",
        "tiling:\n  n_tiles: true\n",
        "plotting:\n  dpi: high\n",
    ])
    def test_invalid_values_raise(self, write_override, text):
        write_override(text)

        with pytest.raises(ConfigurationError, match="positive integer"):
            reload_defaults()

    def test_non_mapping_file_raises(self, write_override):
        write_override("- 1\n- 2\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            reload_defaults()

    def test_missing_override_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TILED_ARRAYS_DEFAULTS_PATH", str(tmp_path / "missing.yaml"))
        try:
            with pytest.raises(FileNotFoundError):
                reload_defaults()
        finally:
            monkeypatch.delenv("TILED_ARRAYS_DEFAULTS_PATH")
            reload_defaults()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
