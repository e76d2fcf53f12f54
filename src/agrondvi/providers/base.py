"""Band supplier interface contract and shared types.

Defines the ``BandSupplier`` abstract base class and the supplier-domain
types used by every red/NIR data source: file storage, local rasters and
simulation today, a live satellite source later.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from agrondvi._types import BandPair
from agrondvi.config import Config


class SupplierCredentials(BaseModel):
    """Credentials for authenticating with a band supplier.

    Immutable container. The storage supplier uses ``token`` as a bearer
    token; the local and simulated suppliers need none.

    Args:
        token: Bearer token for the storage API.

    Example:
        >>> creds = SupplierCredentials(token="placeholder")
        >>> creds.token
        'placeholder'
    """

    model_config = ConfigDict(frozen=True)

    token: str = ""


@dataclass
class SupplierStatus:
    """Operational status of a band supplier.

    Returned by ``BandSupplier.check_status()``.

    Args:
        available: ``True`` if the supplier can currently produce bands.
        message: Human-readable status message (empty when healthy).

    Example:
        >>> SupplierStatus(available=True).message
        ''
    """

    available: bool = False
    message: str = ""


class BandSupplier(ABC):
    """Abstract base class for red/NIR band suppliers.

    Subclasses set the ``_name`` class attribute to their registry name
    and implement the three abstract methods.

    Args:
        config: Configuration snapshot for this supplier instance.

    Example:
        >>> from agrondvi.providers.simulated import SimulatedBandSupplier
        >>> SimulatedBandSupplier(config=Config()).name
        'simulated'
    """

    _name: str = ""

    def __init__(self, config: Config) -> None:
        """Initialize with a configuration snapshot.

        Args:
            config: Configuration captured when the supplier was created.
        """
        self._config = config

    @property
    def name(self) -> str:
        """Supplier identifier used in the registry and in results."""
        return self._name

    @property
    def config(self) -> Config:
        """Configuration snapshot the supplier was built with."""
        return self._config

    @abstractmethod
    def authenticate(self, credentials: SupplierCredentials) -> None:
        """Validate and store supplier credentials.

        Args:
            credentials: Supplier-specific authentication credentials.

        Raises:
            ConfigurationError: If credentials are invalid.
        """
        ...

    @abstractmethod
    def fetch_bands(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> BandPair:
        """Return the red/NIR band pair to reduce.

        File-backed suppliers ignore the coordinates; the simulated
        supplier uses the latitude to shift its base reflectance.

        Args:
            latitude: Request latitude in WGS84 degrees, if any.
            longitude: Request longitude in WGS84 degrees, if any.

        Returns:
            Band pair with declared dimensions when known.

        Raises:
            ProviderError: If the bands cannot be obtained or decoded.
        """
        ...

    @abstractmethod
    def check_status(self) -> SupplierStatus:
        """Check supplier operational status.

        Never raises; failures are reported through the returned status.
        """
        ...
