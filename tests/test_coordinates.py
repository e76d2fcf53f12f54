"""Tests for coordinate validation and echo helpers."""

from __future__ import annotations

import math

import pytest

from agrondvi.coordinates import (
    bounding_box,
    format_coordinates,
    parse_coordinates,
    validate_coordinates,
)
from agrondvi.exceptions import InvalidCoordinatesError


@pytest.mark.unit
class TestValidateCoordinates:
    @pytest.mark.parametrize(
        ("lat", "lon"),
        [(0.0, 0.0), (90.0, 180.0), (-90.0, -180.0), (18.52, 73.85), (10, 20)],
    )
    def test_valid(self, lat: float, lon: float) -> None:
        assert validate_coordinates(lat, lon)

    @pytest.mark.parametrize(
        ("lat", "lon"),
        [
            (90.1, 0.0),
            (-91.0, 0.0),
            (0.0, 180.5),
            (0.0, -181.0),
            (math.nan, 0.0),
            (0.0, math.inf),
            ("18.5", 73.8),
            (True, 0.0),
        ],
    )
    def test_invalid(self, lat: object, lon: object) -> None:
        assert not validate_coordinates(lat, lon)  # type: ignore[arg-type]


@pytest.mark.unit
class TestParseCoordinates:
    def test_numeric_strings(self) -> None:
        assert parse_coordinates("18.52", "73.85") == (18.52, 73.85)

    def test_numbers(self) -> None:
        assert parse_coordinates(18, -73.5) == (18.0, -73.5)

    @pytest.mark.parametrize(("lat", "lon"), [("abc", "10"), (None, "10"), ("10", "")])
    def test_unparseable(self, lat: object, lon: object) -> None:
        with pytest.raises(InvalidCoordinatesError, match="Could not parse"):
            parse_coordinates(lat, lon)

    @pytest.mark.parametrize(("lat", "lon"), [("95", "10"), ("10", "200"), ("nan", "1")])
    def test_out_of_range(self, lat: str, lon: str) -> None:
        with pytest.raises(InvalidCoordinatesError, match="Invalid coordinates"):
            parse_coordinates(lat, lon)


@pytest.mark.unit
class TestBoundingBox:
    def test_equator(self) -> None:
        box = bounding_box(0.0, 0.0, radius_km=111.32)
        assert box["north"] == pytest.approx(1.0)
        assert box["south"] == pytest.approx(-1.0)
        assert box["east"] == pytest.approx(1.0)
        assert box["west"] == pytest.approx(-1.0)

    def test_longitude_span_widens_with_latitude(self) -> None:
        box = bounding_box(60.0, 10.0)
        lat_span = box["north"] - box["south"]
        lon_span = box["east"] - box["west"]
        assert lon_span == pytest.approx(2 * lat_span)

    def test_default_radius_one_km(self) -> None:
        box = bounding_box(18.52, 73.85)
        assert box["north"] - 18.52 == pytest.approx(1 / 111.32)


@pytest.mark.unit
def test_format_coordinates() -> None:
    assert format_coordinates(18.52, 73.85) == "18.520000, 73.850000"
