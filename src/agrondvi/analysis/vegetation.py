"""Vegetation index computation and raster pair reduction.

Pure computation module: no HTTP, no logging, no supplier access.
Takes band sequences in, returns an ``NdviResult`` out.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Union

import numpy as np
import numpy.typing as npt

from agrondvi.exceptions import ComputationError, InputShapeError, NoValidPixelsError
from agrondvi.results import NdviResult

if TYPE_CHECKING:
    from agrondvi._types import BandPair

MAX_PIXELS: int = 1_000_000
SAMPLE_SIZE: int = 100
MEAN_DECIMALS: int = 4

# numpy dtype kinds accepted as band values: bool, signed, unsigned, float.
_NUMERIC_KINDS = "biuf"

BandLike = Union[Sequence[float], npt.NDArray[Any]]


def compute_ndvi(
    red: npt.NDArray[np.floating[Any]],
    nir: npt.NDArray[np.floating[Any]],
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.bool_]]:
    """Compute Normalised Difference Vegetation Index (NDVI) per pixel.

    NDVI = (NIR - Red) / (NIR + Red).  Where ``nir + red == 0`` the
    pixel is reported as ``0.0`` and flagged invalid in the returned
    mask, so callers can exclude it from statistics.

    Parameters:
        red: Red band array, any shape.
        nir: Near-infrared band array, same shape as *red*.

    Returns:
        Tuple ``(ndvi, valid)``: float64 NDVI array with the input shape,
        and a boolean mask that is ``True`` where the denominator is
        non-zero.

    Example:
        >>> import numpy as np
        >>> ndvi, valid = compute_ndvi(np.array([0.0, 100.0]), np.array([0.0, 300.0]))
        >>> ndvi.tolist(), valid.tolist()
        ([0.0, 0.5], [False, True])
    """
    red_f = np.asarray(red, dtype=np.float64)
    nir_f = np.asarray(nir, dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        denominator = nir_f + red_f
        valid: npt.NDArray[np.bool_] = denominator != 0.0
        ndvi: npt.NDArray[np.float64] = np.where(
            valid,
            (nir_f - red_f) / np.where(valid, denominator, 1.0),
            0.0,
        )

    return ndvi, valid


def _scan_prefix(values: Any, limit: int) -> tuple[npt.NDArray[Any], int]:
    """Return the first *limit* values in scan order and the full length.

    Flat sequences are sliced before conversion so only the capped prefix
    is ever materialised as an array. Scalars count as zero pixels.
    """
    if isinstance(values, Sequence) and not isinstance(values, (str, bytes)):
        head = np.asarray(values[:limit])
        if head.ndim == 1:
            return head, len(values)
        # Nested rows: flatten the whole grid to find the scan order.
    array = np.asarray(values)
    if array.ndim == 0:
        return array.reshape(0), 0
    flat = array.ravel()
    return flat[:limit], flat.size


def _as_band(
    values: BandLike | None,
    label: str,
    limit: int,
) -> tuple[npt.NDArray[np.float64], int]:
    """Return the capped float64 prefix of a band and its full length.

    Raises:
        InputShapeError: If the band is missing or has no pixels.
        ComputationError: If the values are not numeric. Strings are
            rejected even when they look like numbers.
    """
    if values is None:
        raise InputShapeError(
            what=f"Missing {label} band",
            cause=f"No {label} values were supplied",
            fix="Pass both red and near-infrared bands",
        )
    try:
        head, total = _scan_prefix(values, limit)
    except (TypeError, ValueError) as exc:
        raise ComputationError(
            what=f"Cannot read {label} band as numbers",
            cause=str(exc),
            fix="Supply numeric reflectance values",
        ) from exc

    if head.dtype.kind not in _NUMERIC_KINDS:
        raise ComputationError(
            what=f"Cannot read {label} band as numbers",
            cause=f"The {label} band holds {head.dtype} values",
            fix="Supply numeric reflectance values",
        )
    if total == 0:
        raise InputShapeError(
            what=f"Empty {label} band",
            cause=f"The {label} band has no pixels",
            fix="Check the band supplier returned raster data",
        )
    return head.astype(np.float64), total


def _grid_side(pixel_count: int) -> int:
    """Side of the smallest square grid holding *pixel_count* pixels."""
    return math.isqrt(pixel_count - 1) + 1 if pixel_count > 0 else 0


def reduce_ndvi(
    red: BandLike | None,
    nir: BandLike | None,
    *,
    width: int | None = None,
    height: int | None = None,
    max_pixels: int = MAX_PIXELS,
    sample_size: int = SAMPLE_SIZE,
) -> NdviResult:
    """Reduce a red/NIR band pair to a mean NDVI and a preview sample.

    At most ``min(len(red), len(nir), max_pixels)`` pixels are reduced.
    Extra pixels in either band are ignored without error; the result's
    ``pixels_processed`` and ``pixels_available`` expose the shortfall.
    Zero-denominator pixels appear as ``0.0`` in the sample but are left
    out of the mean.

    The mean is rendered with ``MEAN_DECIMALS`` places using Python's
    correctly rounded float formatting, which resolves exact ties to
    even (``0.03125`` renders as ``"0.0312"``).

    Args:
        red: Red reflectance values in scan order.
        nir: Near-infrared reflectance values in scan order.
        width: Declared raster width. Defaults to the side of the
            smallest square holding the paired pixels.
        height: Declared raster height. Same default as *width*.
        max_pixels: Hard cap on pixels reduced.
        sample_size: Maximum number of per-pixel values returned.

    Returns:
        ``NdviResult`` for the processed pixels.

    Raises:
        InputShapeError: If a band is missing or empty, or a declared
            dimension is not positive.
        NoValidPixelsError: If no processed pixel has a non-zero
            denominator.
        ComputationError: If the bands are not numeric or contain
            non-finite values.

    Example:
        >>> reduce_ndvi([100], [300]).mean_ndvi
        '0.5000'
    """
    if max_pixels <= 0 or sample_size <= 0:
        msg = "max_pixels and sample_size must be greater than 0"
        raise ValueError(msg)

    red_band, red_total = _as_band(red, "red", max_pixels)
    nir_band, nir_total = _as_band(nir, "nir", max_pixels)

    paired = min(red_total, nir_total)
    available = max(red_total, nir_total)
    n = min(paired, max_pixels)

    side = _grid_side(paired)
    width = side if width is None else width
    height = side if height is None else height
    if width <= 0 or height <= 0:
        raise InputShapeError(
            what="Invalid raster dimensions",
            cause=f"Got width={width}, height={height}",
            fix="Raster width and height must be positive integers",
        )

    red_band = red_band[:n]
    nir_band = nir_band[:n]
    if not (np.isfinite(red_band).all() and np.isfinite(nir_band).all()):
        raise ComputationError(
            what="Non-finite reflectance values",
            cause="The bands contain NaN or infinite pixels",
            fix="Mask no-data pixels as 0 before reduction",
        )

    ndvi, valid = compute_ndvi(red_band, nir_band)
    if not np.isfinite(ndvi).all():
        raise ComputationError(
            what="NDVI overflowed",
            cause="Reflectance values too large for float64 arithmetic",
            fix="Rescale the bands to reflectance units",
        )

    valid_count = int(np.count_nonzero(valid))
    if valid_count == 0:
        raise NoValidPixelsError(
            what="No valid pixels for NDVI",
            cause=f"All {n} processed pixels have red + nir == 0",
            fix="Check the rasters cover the area and are not no-data",
        )

    # Invalid pixels hold 0.0, so the plain sum covers valid pixels only.
    mean = float(ndvi.sum()) / valid_count

    return NdviResult(
        mean_ndvi=f"{mean:.{MEAN_DECIMALS}f}",
        sample=ndvi[:sample_size].tolist(),
        width=int(width),
        height=int(height),
        pixels_processed=n,
        pixels_available=available,
        valid_pixels=valid_count,
    )


def reduce_bands(bands: BandPair, **kwargs: Any) -> NdviResult:
    """Reduce a supplier's ``BandPair`` with ``reduce_ndvi``.

    Args:
        bands: Band pair with optional declared dimensions.
        **kwargs: ``max_pixels`` / ``sample_size`` overrides.

    Returns:
        ``NdviResult`` for the pair.
    """
    return reduce_ndvi(
        bands.red,
        bands.nir,
        width=bands.width,
        height=bands.height,
        **kwargs,
    )
