"""Tests for NDVI result models."""

from __future__ import annotations

import warnings

import numpy as np
import pytest
from pydantic import ValidationError

from agrondvi.results import NdviReport, NdviResult, VegetationHealth


@pytest.fixture
def ndvi_result() -> NdviResult:
    return NdviResult(
        mean_ndvi="0.4000",
        sample=[0.5, 0.0, 0.3],
        width=2,
        height=2,
        pixels_processed=3,
        pixels_available=4,
        valid_pixels=2,
    )


@pytest.mark.unit
class TestNdviResult:
    """Tests for NdviResult."""

    def test_wire_field_names(self, ndvi_result: NdviResult) -> None:
        body = ndvi_result.to_dict()
        assert body == {
            "meanNdvi": "0.4000",
            "sample": [0.5, 0.0, 0.3],
            "width": 2,
            "height": 2,
            "pixelsProcessed": 3,
            "pixelsAvailable": 4,
            "validPixels": 2,
        }

    def test_populate_by_alias(self) -> None:
        result = NdviResult(
            meanNdvi="0.1000",
            sample=[],
            width=1,
            height=1,
            pixelsProcessed=1,
            pixelsAvailable=1,
            validPixels=1,
        )
        assert result.mean_ndvi == "0.1000"

    def test_mean_value(self, ndvi_result: NdviResult) -> None:
        assert ndvi_result.mean_value == pytest.approx(0.4)

    def test_truncated(self, ndvi_result: NdviResult) -> None:
        assert ndvi_result.truncated

    def test_frozen(self, ndvi_result: NdviResult) -> None:
        with pytest.raises(ValidationError):
            ndvi_result.width = 5  # type: ignore[misc]

    def test_repr_omits_sample(self, ndvi_result: NdviResult) -> None:
        text = repr(ndvi_result)
        assert text == "NdviResult(mean_ndvi=0.4000, size=2x2, pixels=3/4)"

    def test_to_dataframe(self, ndvi_result: NdviResult) -> None:
        df = ndvi_result.to_dataframe()
        assert list(df.columns) == ["pixel", "row", "col", "ndvi"]
        assert len(df) == 3
        assert df.iloc[2].to_dict() == {"pixel": 2, "row": 1, "col": 0, "ndvi": 0.3}


@pytest.mark.unit
class TestVegetationHealth:
    """Tests for VegetationHealth.from_ndvi()."""

    @pytest.mark.parametrize(
        ("value", "status", "percentage"),
        [
            (0.85, "Excellent", 90),
            (0.6, "Excellent", 90),
            (0.45, "Good", 75),
            (0.4, "Good", 75),
            (0.2, "Moderate", 50),
            (0.19, "Poor", 25),
            (-0.5, "Poor", 25),
        ],
    )
    def test_thresholds(self, value: float, status: str, percentage: int) -> None:
        health = VegetationHealth.from_ndvi(value)
        assert health.status == status
        assert health.percentage == percentage

    def test_nan_is_unknown(self) -> None:
        """A caller-computed mean over no data classifies as Unknown."""
        with np.errstate(all="ignore"), warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            mean = float(np.nanmean(np.array([np.nan, np.nan])))

        health = VegetationHealth.from_ndvi(mean)

        assert health.status == "Unknown"
        assert health.percentage == 0


@pytest.mark.unit
class TestNdviReport:
    """Tests for NdviReport.to_dict()."""

    def test_flattens_result(self, ndvi_result: NdviResult) -> None:
        report = NdviReport(
            result=ndvi_result,
            chart_data={"labels": []},
            area_info={"selectedArea": "North field"},
            coordinates=None,
            vegetation_health=VegetationHealth.from_ndvi(0.4),
            source="simulated",
            timestamp="2026-10-17T00:00:00+00:00",
        )

        body = report.to_dict()

        assert body["meanNdvi"] == "0.4000"
        assert body["sample"] == [0.5, 0.0, 0.3]
        assert body["chartData"] == {"labels": []}
        assert body["areaInfo"] == {"selectedArea": "North field"}
        assert body["coordinates"] is None
        assert body["vegetationHealth"]["status"] == "Good"
        assert body["source"] == "simulated"
        assert body["timestamp"] == "2026-10-17T00:00:00+00:00"
