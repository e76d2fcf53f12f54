"""Internal shared types for cross-boundary data contracts.

These types define the data shapes passed between band suppliers and
the reducer. They are internal (prefixed ``_``) and NOT re-exported
from ``agrondvi.__init__``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt

Band = npt.NDArray[np.floating[Any]]
"""One raster band flattened to 1-D in row-major scan order."""


@dataclass
class BandPair:
    """Red and near-infrared bands paired pixel-for-pixel.

    Args:
        red: Red reflectance band, flattened in scan order.
        nir: Near-infrared reflectance band, flattened in scan order.
        width: Declared raster width, or ``None`` without raster metadata.
        height: Declared raster height, or ``None`` without raster metadata.
        source: Registry name of the supplier that produced the pair.
        metadata: Supplier-specific details (object names, seeds, etc.).

    Example:
        >>> import numpy as np
        >>> pair = BandPair(red=np.array([100.0]), nir=np.array([300.0]))
        >>> pair.pixel_count
        1
    """

    red: Band
    nir: Band
    width: int | None = None
    height: int | None = None
    source: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def pixel_count(self) -> int:
        """Number of paired pixels available (shorter band length)."""
        return min(len(self.red), len(self.nir))
