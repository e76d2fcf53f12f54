"""Coordinate validation and request echo helpers."""

from __future__ import annotations

import math
from typing import Any

from agrondvi.exceptions import InvalidCoordinatesError

_MIN_LAT = -90.0
_MAX_LAT = 90.0
_MIN_LON = -180.0
_MAX_LON = 180.0
_KM_PER_DEGREE_LAT = 111.32


def validate_coordinates(lat: float, lon: float) -> bool:
    """Return ``True`` if *lat*/*lon* are finite WGS84 degrees in range.

    Example:
        >>> validate_coordinates(18.52, 73.85)
        True
        >>> validate_coordinates(91.0, 0.0)
        False
    """
    if isinstance(lat, bool) or isinstance(lon, bool):
        return False
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return _MIN_LAT <= lat <= _MAX_LAT and _MIN_LON <= lon <= _MAX_LON


def parse_coordinates(lat: Any, lon: Any) -> tuple[float, float]:
    """Parse query-string style coordinates into validated floats.

    Args:
        lat: Latitude as a number or numeric string.
        lon: Longitude as a number or numeric string.

    Returns:
        ``(lat, lon)`` as floats.

    Raises:
        InvalidCoordinatesError: If either value is not numeric or is
            outside WGS84 bounds.
    """
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError):
        raise InvalidCoordinatesError(
            what="Invalid coordinates provided",
            cause=f"Could not parse latitude={lat!r}, longitude={lon!r} as numbers",
            fix="Pass decimal degrees, e.g. latitude=18.52&longitude=73.85",
        ) from None

    if not validate_coordinates(lat_f, lon_f):
        raise InvalidCoordinatesError(
            what="Invalid coordinates provided",
            cause=(
                f"latitude must be in [{_MIN_LAT}, {_MAX_LAT}] and longitude in "
                f"[{_MIN_LON}, {_MAX_LON}], got ({lat_f}, {lon_f})"
            ),
            fix="Provide valid WGS84 coordinates",
        )
    return lat_f, lon_f


def bounding_box(lat: float, lon: float, radius_km: float = 1.0) -> dict[str, float]:
    """Approximate a square box of *radius_km* around a point.

    Uses 111.32 km per degree of latitude and scales the longitude
    span by ``cos(lat)``.

    Returns:
        Dictionary with ``north``, ``south``, ``east`` and ``west`` keys.

    Example:
        >>> box = bounding_box(0.0, 0.0, radius_km=111.32)
        >>> box["north"], box["east"]
        (1.0, 1.0)
    """
    lat_delta = radius_km / _KM_PER_DEGREE_LAT
    lon_delta = radius_km / (_KM_PER_DEGREE_LAT * math.cos(math.radians(lat)))
    return {
        "north": lat + lat_delta,
        "south": lat - lat_delta,
        "east": lon + lon_delta,
        "west": lon - lon_delta,
    }


def format_coordinates(lat: float, lon: float) -> str:
    """Format a point as ``"lat, lon"`` with six decimals."""
    return f"{lat:.6f}, {lon:.6f}"
