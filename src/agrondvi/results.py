"""Result object model for NDVI outputs."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    import pandas as pd

# ── NDVI interpretation thresholds ────────────────────────────────
_NDVI_EXCELLENT_THRESHOLD: float = 0.6
_NDVI_GOOD_THRESHOLD: float = 0.4
_NDVI_MODERATE_THRESHOLD: float = 0.2

_WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class NdviResult(BaseModel):
    """Output of the raster pair NDVI reducer.

    Serialises with camelCase names (``meanNdvi``, ``sample``, ``width``,
    ``height``, ...) to keep the public JSON contract.

    Attributes:
        mean_ndvi: Mean of valid per-pixel NDVI values, 4 decimal places.
        sample: Prefix of the per-pixel NDVI output in scan order.
        width: Raster width.
        height: Raster height.
        pixels_processed: Pixels actually reduced.
        pixels_available: Length of the longer input band.
        valid_pixels: Pixels with a non-zero denominator.

    Example:
        >>> result = NdviResult(
        ...     mean_ndvi="0.5000", sample=[0.5], width=1, height=1,
        ...     pixels_processed=1, pixels_available=1, valid_pixels=1,
        ... )
        >>> result.to_dict()["meanNdvi"]
        '0.5000'
    """

    model_config = _WIRE_CONFIG

    mean_ndvi: str
    sample: list[float] = Field(default_factory=list)
    width: int
    height: int
    pixels_processed: int
    pixels_available: int
    valid_pixels: int

    @property
    def mean_value(self) -> float:
        """Mean NDVI as a float."""
        return float(self.mean_ndvi)

    @property
    def truncated(self) -> bool:
        """``True`` when fewer pixels were reduced than were supplied."""
        return self.pixels_processed < self.pixels_available

    def __repr__(self) -> str:
        """Return summary representation without the sample values."""
        parts = [
            f"mean_ndvi={self.mean_ndvi}",
            f"size={self.width}x{self.height}",
            f"pixels={self.pixels_processed}/{self.pixels_available}",
        ]
        return f"NdviResult({', '.join(parts)})"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dictionary with camelCase keys."""
        return self.model_dump(by_alias=True)

    def to_dataframe(self) -> pd.DataFrame:
        """Export the sample to a pandas DataFrame.

        One row per sampled pixel with its scan-order index and the
        row/column it maps to in the raster grid.

        Returns:
            DataFrame with ``pixel``, ``row``, ``col`` and ``ndvi`` columns.
        """
        import pandas as pd

        width = max(self.width, 1)
        rows = [
            {
                "pixel": i,
                "row": i // width,
                "col": i % width,
                "ndvi": value,
            }
            for i, value in enumerate(self.sample)
        ]
        return pd.DataFrame(rows, columns=["pixel", "row", "col", "ndvi"])


class VegetationHealth(BaseModel):
    """Plain-language vegetation health derived from a mean NDVI.

    Example:
        >>> VegetationHealth.from_ndvi(0.45).status
        'Good'
    """

    model_config = ConfigDict(frozen=True)

    status: str
    percentage: int
    description: str

    @classmethod
    def from_ndvi(cls, value: float) -> VegetationHealth:
        """Classify an NDVI value.

        The reducer never yields a NaN mean, so reports built by
        ``ndvi_report`` always get a graded status. ``Unknown`` is for
        callers classifying a mean they computed themselves, such as
        ``np.nanmean`` over an all-masked tile.

        Args:
            value: Mean NDVI, typically in [-1, 1], or NaN for no data.

        Returns:
            Health classification for *value*.
        """
        if math.isnan(value):
            return cls(status="Unknown", percentage=0, description="No data")
        if value >= _NDVI_EXCELLENT_THRESHOLD:
            return cls(
                status="Excellent",
                percentage=90,
                description="High vegetation density",
            )
        if value >= _NDVI_GOOD_THRESHOLD:
            return cls(status="Good", percentage=75, description="Healthy vegetation")
        if value >= _NDVI_MODERATE_THRESHOLD:
            return cls(
                status="Moderate",
                percentage=50,
                description="Moderate vegetation",
            )
        return cls(status="Poor", percentage=25, description="Low vegetation density")


class NdviReport(BaseModel):
    """NDVI response envelope returned by ``agrondvi.api.ndvi_report``.

    Wraps an ``NdviResult`` with the request echo and presentation
    fields. ``to_dict()`` flattens the result fields to the top level.
    """

    model_config = _WIRE_CONFIG

    result: NdviResult
    chart_data: dict[str, Any]
    area_info: dict[str, str] | None = None
    coordinates: dict[str, Any] | None = None
    vegetation_health: VegetationHealth
    source: str = ""
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready response body."""
        body = self.result.to_dict()
        body.update(
            {
                "chartData": self.chart_data,
                "areaInfo": self.area_info,
                "coordinates": self.coordinates,
                "vegetationHealth": self.vegetation_health.model_dump(),
                "source": self.source,
                "timestamp": self.timestamp,
            }
        )
        return body
