"""Band supplier reading red/NIR GeoTIFFs from a local directory."""

from __future__ import annotations

import logging

from agrondvi._raster import read_band_file
from agrondvi._types import BandPair
from agrondvi.providers.base import BandSupplier, SupplierCredentials, SupplierStatus

logger = logging.getLogger(__name__)


class LocalBandSupplier(BandSupplier):
    """Read the configured band files from ``Config.raster_dir``.

    The file names (``red_object``, ``nir_object``) are fixed and do not
    depend on the request location.

    Example:
        >>> from agrondvi.config import Config
        >>> supplier = LocalBandSupplier(config=Config(raster_dir="/data"))
        >>> supplier.name
        'local'
    """

    _name: str = "local"

    def authenticate(self, credentials: SupplierCredentials) -> None:
        """No-op: local files need no credentials."""
        logger.debug("Local supplier authentication skipped")

    def fetch_bands(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> BandPair:
        """Read both band files; dimensions come from the red raster."""
        raster_dir = self._config.raster_dir
        red_path = raster_dir / self._config.red_object
        nir_path = raster_dir / self._config.nir_object

        red = read_band_file(red_path, "red")
        nir = read_band_file(nir_path, "nir")

        if (red.width, red.height) != (nir.width, nir.height):
            logger.warning(
                "Band rasters differ in size: red %dx%d, nir %dx%d",
                red.width,
                red.height,
                nir.width,
                nir.height,
            )

        return BandPair(
            red=red.values,
            nir=nir.values,
            width=red.width,
            height=red.height,
            source=self._name,
            metadata={"red": str(red_path), "nir": str(nir_path)},
        )

    def check_status(self) -> SupplierStatus:
        """Report whether both band files exist."""
        missing = [
            name
            for name in (self._config.red_object, self._config.nir_object)
            if not (self._config.raster_dir / name).is_file()
        ]
        if missing:
            return SupplierStatus(
                available=False,
                message=f"Missing in {self._config.raster_dir}: {', '.join(missing)}",
            )
        return SupplierStatus(available=True)
