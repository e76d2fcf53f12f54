"""Band supplier registry.

Provides ``get_supplier()`` to instantiate configured supplier instances
by name. Supports object storage, local files, and simulation.
"""

from __future__ import annotations

from agrondvi.config import Config
from agrondvi.exceptions import ConfigurationError
from agrondvi.providers.base import BandSupplier

_SUPPLIER_REGISTRY: dict[str, type[BandSupplier]] = {}
_REGISTRY_INITIALIZED = False


def _init_registry() -> None:
    """Populate the supplier registry on first use (lazy import)."""
    global _REGISTRY_INITIALIZED  # noqa: PLW0603
    if _REGISTRY_INITIALIZED:
        return

    from agrondvi.providers.local import LocalBandSupplier
    from agrondvi.providers.simulated import SimulatedBandSupplier
    from agrondvi.providers.storage import StorageBandSupplier

    _SUPPLIER_REGISTRY.update(
        {
            "local": LocalBandSupplier,
            "simulated": SimulatedBandSupplier,
            "storage": StorageBandSupplier,
        }
    )
    _REGISTRY_INITIALIZED = True


def get_registered_names() -> list[str]:
    """Return sorted list of registered supplier names."""
    _init_registry()
    return sorted(_SUPPLIER_REGISTRY)


def get_supplier(name: str, config: Config) -> BandSupplier:
    """Return a configured supplier instance by name.

    Supplier names are case-insensitive.

    Args:
        name: Supplier identifier (``"storage"``, ``"local"`` or
            ``"simulated"``).
        config: Configuration snapshot passed to the supplier.

    Returns:
        A ``BandSupplier`` ready to fetch bands.

    Raises:
        ConfigurationError: If *name* does not match a registered supplier.

    Example:
        >>> get_supplier("simulated", Config()).name
        'simulated'
    """
    _init_registry()
    key = name.lower()
    if key not in _SUPPLIER_REGISTRY:
        valid = ", ".join(sorted(_SUPPLIER_REGISTRY))
        raise ConfigurationError(
            what=f"Unknown band supplier: {name!r}",
            cause=f"Valid suppliers are: {valid}",
            fix=f"Use one of: {valid}",
        )
    return _SUPPLIER_REGISTRY[key](config=config)
