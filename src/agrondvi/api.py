"""Top-level NDVI report functions for AgroNDVI.

``ndvi_report`` resolves a band supplier, reduces its bands, and wraps
the result in the response envelope served at ``GET /api/ndvi``.
``ndvi_response`` adds the status-code mapping an HTTP host needs, so
any web framework can serve it with a one-line handler.

Example:
    >>> import agrondvi
    >>> report = agrondvi.ndvi_report(18.52, 73.85, area="North field")
    >>> report.result.mean_ndvi  # doctest: +SKIP
    '0.2461'
    >>> status, body = agrondvi.ndvi_response("18.52", "73.85")
    >>> status
    200
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import numpy as np

from agrondvi.analysis.vegetation import reduce_bands
from agrondvi.config import Config, get_default_config
from agrondvi.coordinates import bounding_box, format_coordinates, parse_coordinates
from agrondvi.exceptions import AgroNdviError, ComputationError
from agrondvi.providers import get_supplier
from agrondvi.providers.base import BandSupplier
from agrondvi.results import NdviReport, NdviResult, VegetationHealth

logger = logging.getLogger(__name__)

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip

# Month indexes (0-based) of the monsoon and post-monsoon season.
_GROWING_MONTHS = range(5, 10)
_GROWING_RANGE = (0.4, 0.7)
_DORMANT_RANGE = (0.2, 0.4)


def _is_given(value: Any) -> bool:
    """Query parameters count as absent when ``None`` or empty."""
    return value is not None and value != ""


def _resolve_supplier(
    supplier: BandSupplier | str | None,
    config: Config,
) -> BandSupplier:
    """Return *supplier* itself, or build one from the registry."""
    if isinstance(supplier, BandSupplier):
        return supplier
    return get_supplier(supplier or config.default_supplier, config)


def build_chart_data(
    current_ndvi: float,
    now: datetime,
    rng: np.random.Generator,
) -> dict[str, Any]:
    """Build a 12-month NDVI chart series ending at *now*.

    Past months are placeholder values drawn from a seasonal range;
    the final point is the measured *current_ndvi*.

    Args:
        current_ndvi: Mean NDVI of the current reduction.
        now: Reference time; its month is the last point.
        rng: Random generator for the placeholder history.

    Returns:
        Chart.js style dictionary with ``labels``, ``datasets``,
        ``currentValue``, ``trend`` and ``averageValue``.
    """
    current_month = now.month - 1
    history: list[dict[str, Any]] = []

    for offset in range(11, -1, -1):
        month_index = (current_month - offset + 12) % 12
        low, high = _GROWING_RANGE if month_index in _GROWING_MONTHS else _DORMANT_RANGE
        history.append(
            {
                "month": _MONTHS[month_index],
                "ndvi": round(float(rng.uniform(low, high)), 3),
                "year": now.year - 1 if month_index > current_month else now.year,
            }
        )

    history[-1] = {
        "month": _MONTHS[current_month],
        "ndvi": current_ndvi,
        "year": now.year,
        "isCurrent": True,
    }

    values = [point["ndvi"] for point in history]
    average = sum(values) / len(values)
    return {
        "labels": [point["month"] for point in history],
        "datasets": [
            {
                "label": "NDVI Values",
                "data": values,
                "borderColor": "#4CAF50",
                "backgroundColor": "rgba(76, 175, 80, 0.1)",
                "tension": 0.4,
            }
        ],
        "currentValue": current_ndvi,
        "trend": "increasing" if values[-1] > values[-2] else "decreasing",
        "averageValue": f"{average:.3f}",
    }


def ndvi_report(
    latitude: float | str | None = None,
    longitude: float | str | None = None,
    area: str | None = None,
    *,
    supplier: BandSupplier | str | None = None,
    config: Config | None = None,
    now: datetime | None = None,
) -> NdviReport:
    """Compute NDVI and build the response envelope.

    Coordinates are validated and echoed only when both are given; they
    never change which rasters a file-backed supplier reads.

    Args:
        latitude: WGS84 latitude, number or numeric string.
        longitude: WGS84 longitude, number or numeric string.
        area: Optional label of the selected area, echoed back.
        supplier: Supplier instance or registry name. Defaults to
            ``config.default_supplier``.
        config: Configuration override. Defaults to the supplier's own
            config, then the module default.
        now: Reference time for the timestamp and chart series.

    Returns:
        ``NdviReport`` with the reduction result and presentation fields.

    Raises:
        InvalidCoordinatesError: If given coordinates are malformed.
        ConfigurationError: If the supplier name is unknown.
        ProviderError: If the supplier cannot obtain the bands.
        ComputationError: If the bands cannot be reduced (including
            ``InputShapeError`` and ``NoValidPixelsError``).
    """
    if config is None:
        config = supplier.config if isinstance(supplier, BandSupplier) else get_default_config()
    now = now or datetime.now(timezone.utc)

    lat: float | None = None
    lon: float | None = None
    if _is_given(latitude) and _is_given(longitude):
        lat, lon = parse_coordinates(latitude, longitude)

    band_supplier = _resolve_supplier(supplier, config)
    bands = band_supplier.fetch_bands(latitude=lat, longitude=lon)
    result: NdviResult = reduce_bands(
        bands,
        max_pixels=config.max_pixels,
        sample_size=config.sample_size,
    )

    if result.truncated:
        logger.warning(
            "NDVI reduced %d of %d available pixels from %s",
            result.pixels_processed,
            result.pixels_available,
            band_supplier.name,
        )
    logger.info(
        "NDVI %s over %d valid pixels (%s)",
        result.mean_ndvi,
        result.valid_pixels,
        band_supplier.name,
    )

    coordinates: dict[str, Any] | None = None
    if lat is not None and lon is not None:
        coordinates = {
            "latitude": lat,
            "longitude": lon,
            "formatted": format_coordinates(lat, lon),
            "boundingBox": bounding_box(lat, lon),
        }

    rng = np.random.default_rng(config.simulation_seed)
    return NdviReport(
        result=result,
        chart_data=build_chart_data(result.mean_value, now, rng),
        area_info={"selectedArea": area} if area else None,
        coordinates=coordinates,
        vegetation_health=VegetationHealth.from_ndvi(result.mean_value),
        source=band_supplier.name,
        timestamp=now.isoformat(),
    )


def error_response(exc: Exception) -> tuple[int, dict[str, Any]]:
    """Map an exception to an HTTP status and JSON error body.

    Args:
        exc: Error raised while building a report.

    Returns:
        ``(status_code, body)``; unknown errors become a 500
        ``computation_failed`` body.
    """
    if isinstance(exc, AgroNdviError):
        return exc.http_status, exc.error_body()
    return 500, {
        "error": "NDVI computation failed",
        "code": ComputationError.code,
        "details": str(exc),
    }


def ndvi_response(
    latitude: float | str | None = None,
    longitude: float | str | None = None,
    area: str | None = None,
    **kwargs: Any,
) -> tuple[int, dict[str, Any]]:
    """Build the HTTP status and JSON body for an NDVI request.

    Accepts the same arguments as ``ndvi_report``. Never raises.

    Returns:
        ``(200, report body)`` on success, otherwise the mapping from
        ``error_response``.
    """
    try:
        report = ndvi_report(latitude, longitude, area, **kwargs)
    except AgroNdviError as exc:
        logger.warning("NDVI request failed [%s]: %s", exc.code, exc.what)
        return error_response(exc)
    except Exception as exc:  # noqa: BLE001
        logger.exception("NDVI computation error")
        return error_response(exc)
    return 200, report.to_dict()
