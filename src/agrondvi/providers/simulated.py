"""Simulated band supplier for environments without raster access."""

from __future__ import annotations

import logging
import math

import numpy as np

from agrondvi._types import BandPair
from agrondvi.config import Config
from agrondvi.providers.base import BandSupplier, SupplierCredentials, SupplierStatus

logger = logging.getLogger(__name__)

# Base reflectance and latitude amplitude per band, plus uniform noise span.
_RED_BASE = 120.0
_RED_AMPLITUDE = 30.0
_RED_NOISE = 20.0
_NIR_BASE = 200.0
_NIR_AMPLITUDE = 50.0
_NIR_NOISE = 30.0


class SimulatedBandSupplier(BandSupplier):
    """Synthesise red/NIR bands from pseudo-random values.

    Each pixel is ``floor(base + sin(latitude) * amplitude + noise)``
    with uniform noise, so bands sit in a plausible vegetated range and
    drift with latitude. No raster metadata exists, so ``width`` and
    ``height`` are left to the reducer's square-grid default.

    Args:
        config: Configuration snapshot; ``simulated_length`` sets the
            band length and ``simulation_seed`` makes output repeatable.

    Example:
        >>> supplier = SimulatedBandSupplier(config=Config(simulation_seed=7))
        >>> supplier.fetch_bands(latitude=20.0).pixel_count
        1000
    """

    _name: str = "simulated"

    def authenticate(self, credentials: SupplierCredentials) -> None:
        """No-op: simulation needs no credentials."""
        logger.debug("Simulated supplier authentication skipped")

    def fetch_bands(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> BandPair:
        """Generate a band pair for *latitude* (``0.0`` when omitted)."""
        lat = 0.0 if latitude is None else float(latitude)
        length = self._config.simulated_length
        rng = np.random.default_rng(self._config.simulation_seed)
        shift = math.sin(math.radians(lat))

        red = np.floor(_RED_BASE + shift * _RED_AMPLITUDE + rng.random(length) * _RED_NOISE)
        nir = np.floor(_NIR_BASE + shift * _NIR_AMPLITUDE + rng.random(length) * _NIR_NOISE)

        logger.debug("Simulated %d-pixel band pair for latitude %.4f", length, lat)
        return BandPair(
            red=red,
            nir=nir,
            source=self._name,
            metadata={"latitude": lat, "seed": self._config.simulation_seed},
        )

    def check_status(self) -> SupplierStatus:
        """Simulation is always available."""
        return SupplierStatus(available=True)
