"""GeoTIFF decoding helpers shared by the file-backed band suppliers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from agrondvi._types import Band
from agrondvi.exceptions import ProviderError

logger = logging.getLogger(__name__)


@dataclass
class DecodedBand:
    """First band of a raster flattened in row-major order.

    Args:
        values: Pixel values, ``height * width`` long.
        width: Raster width from the file metadata.
        height: Raster height from the file metadata.
    """

    values: Band
    width: int
    height: int


def _read_dataset(dataset: Any) -> DecodedBand:
    """Read band 1 of an open rasterio dataset."""
    array = dataset.read(1).astype(np.float64)
    return DecodedBand(
        values=array.ravel(),
        width=int(dataset.width),
        height=int(dataset.height),
    )


def decode_band_bytes(data: bytes, label: str) -> DecodedBand:
    """Decode an in-memory GeoTIFF into its first band.

    Args:
        data: Raw GeoTIFF file contents.
        label: Band label used in error messages (``"red"``, ``"nir"``).

    Returns:
        The decoded band with its declared dimensions.

    Raises:
        ProviderError: If the bytes are empty or not a readable raster.
    """
    from rasterio.errors import RasterioError  # noqa: PLC0415
    from rasterio.io import MemoryFile  # noqa: PLC0415

    if not data:
        raise ProviderError(
            what=f"Empty {label} raster",
            cause="Downloaded object has no content",
            fix="Check the object exists and was uploaded completely",
        )

    try:
        with MemoryFile(data) as memfile, memfile.open() as dataset:
            band = _read_dataset(dataset)
    except (RasterioError, OSError, ValueError) as exc:
        raise ProviderError(
            what=f"Cannot decode {label} raster",
            cause=str(exc),
            fix="Ensure the object is a valid GeoTIFF",
        ) from exc

    logger.debug("Decoded %s raster: %dx%d", label, band.width, band.height)
    return band


def read_band_file(path: Path, label: str) -> DecodedBand:
    """Read the first band of a GeoTIFF on disk.

    Args:
        path: Raster file path.
        label: Band label used in error messages.

    Returns:
        The decoded band with its declared dimensions.

    Raises:
        ProviderError: If the file is missing or not a readable raster.
    """
    import rasterio  # noqa: PLC0415
    from rasterio.errors import RasterioError  # noqa: PLC0415

    if not path.is_file():
        raise ProviderError(
            what=f"Missing {label} raster",
            cause=f"File not found: {path}",
            fix="Set raster_dir to the directory holding the band files",
        )

    try:
        with rasterio.open(path) as dataset:
            band = _read_dataset(dataset)
    except (RasterioError, OSError, ValueError) as exc:
        raise ProviderError(
            what=f"Cannot decode {label} raster",
            cause=f"{path}: {exc}",
            fix="Ensure the file is a valid GeoTIFF",
        ) from exc

    logger.debug("Read %s raster %s: %dx%d", label, path, band.width, band.height)
    return band
