"""AgroNDVI: NDVI extraction and aggregation for red/NIR raster pairs.

Example:
    >>> import agrondvi
    >>>
    >>> # Reduce two bands directly
    >>> result = agrondvi.reduce_ndvi([100, 0], [300, 0])
    >>> result.mean_ndvi
    '0.5000'
    >>>
    >>> # Or build the full response envelope from a band supplier
    >>> report = agrondvi.ndvi_report(18.52, 73.85, supplier="simulated")
"""

from agrondvi.__about__ import __version__
from agrondvi.analysis.vegetation import MAX_PIXELS, SAMPLE_SIZE, reduce_bands, reduce_ndvi
from agrondvi.api import error_response, ndvi_report, ndvi_response
from agrondvi.config import Config, configure
from agrondvi.exceptions import (
    AgroNdviError,
    ComputationError,
    ConfigurationError,
    InputShapeError,
    InvalidCoordinatesError,
    NoValidPixelsError,
    ProviderError,
)
from agrondvi.providers import get_supplier
from agrondvi.results import NdviReport, NdviResult, VegetationHealth

__all__ = [
    # Version
    "__version__",
    # Reduction
    "MAX_PIXELS",
    "SAMPLE_SIZE",
    "reduce_bands",
    "reduce_ndvi",
    # Report API
    "error_response",
    "ndvi_report",
    "ndvi_response",
    # Suppliers
    "get_supplier",
    # Configuration
    "Config",
    "configure",
    # Results
    "NdviReport",
    "NdviResult",
    "VegetationHealth",
    # Exceptions
    "AgroNdviError",
    "ComputationError",
    "ConfigurationError",
    "InputShapeError",
    "InvalidCoordinatesError",
    "NoValidPixelsError",
    "ProviderError",
]
