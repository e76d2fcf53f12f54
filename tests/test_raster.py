"""Tests for GeoTIFF decoding helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np
import pytest

from agrondvi._raster import decode_band_bytes, read_band_file
from agrondvi.exceptions import ProviderError


@pytest.mark.unit
class TestDecodeBandBytes:
    def test_decodes_row_major(
        self,
        geotiff_bytes: Callable[[np.ndarray[Any, Any]], bytes],
    ) -> None:
        array = np.arange(6, dtype=np.uint16).reshape(2, 3)

        band = decode_band_bytes(geotiff_bytes(array), "red")

        assert (band.width, band.height) == (3, 2)
        assert band.values.dtype == np.float64
        assert band.values.tolist() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]

    def test_empty_bytes(self) -> None:
        with pytest.raises(ProviderError, match="Empty red raster"):
            decode_band_bytes(b"", "red")

    def test_garbage_bytes(self) -> None:
        with pytest.raises(ProviderError, match="Cannot decode nir raster") as exc_info:
            decode_band_bytes(b"\x00\x01not a raster", "nir")
        assert exc_info.value.__cause__ is not None
        assert exc_info.value.http_status == 502


@pytest.mark.unit
class TestReadBandFile:
    def test_reads_file(self, raster_dir: Path) -> None:
        band = read_band_file(raster_dir / "nir.tif", "nir")
        assert (band.width, band.height) == (4, 3)
        assert band.values[-1] == 300.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProviderError, match="Missing red raster") as exc_info:
            read_band_file(tmp_path / "red.tif", "red")
        assert "File not found" in exc_info.value.cause

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProviderError, match="Missing nir raster"):
            read_band_file(tmp_path, "nir")
