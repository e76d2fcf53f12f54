"""Shared test fixtures for AgroNDVI test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np
import pytest

from agrondvi.config import Config


def make_geotiff_bytes(array: np.ndarray[Any, Any]) -> bytes:
    """Encode a 2-D array as single-band GeoTIFF bytes."""
    from rasterio.io import MemoryFile
    from rasterio.transform import from_origin

    height, width = array.shape
    with MemoryFile() as memfile:
        with memfile.open(
            driver="GTiff",
            height=height,
            width=width,
            count=1,
            dtype=array.dtype,
            crs="EPSG:4326",
            transform=from_origin(73.0, 19.0, 0.001, 0.001),
        ) as dst:
            dst.write(array, 1)
        memfile.seek(0)
        return memfile.read()


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset module-level config before each test."""
    import agrondvi.config as _cfg

    monkeypatch.setattr(_cfg, "_default_config", Config())


@pytest.fixture
def test_config() -> Config:
    """Return a fresh Config with a fixed simulation seed."""
    return Config(simulation_seed=42)


@pytest.fixture
def geotiff_bytes() -> Callable[[np.ndarray[Any, Any]], bytes]:
    """Return a helper that encodes arrays as GeoTIFF bytes."""
    return make_geotiff_bytes


@pytest.fixture
def raster_dir(tmp_path: Path) -> Path:
    """Directory with a 3x4 red/nir GeoTIFF pair (one dead pixel)."""
    red = np.array(
        [[100, 50, 0, 20], [30, 40, 50, 60], [70, 80, 90, 100]],
        dtype=np.float32,
    )
    nir = np.array(
        [[300, 150, 0, 60], [90, 120, 150, 180], [210, 240, 270, 300]],
        dtype=np.float32,
    )
    (tmp_path / "red.tif").write_bytes(make_geotiff_bytes(red))
    (tmp_path / "nir.tif").write_bytes(make_geotiff_bytes(nir))
    return tmp_path
