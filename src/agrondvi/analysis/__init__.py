"""NDVI computation and raster pair reduction."""

from agrondvi.analysis.vegetation import (
    MAX_PIXELS,
    SAMPLE_SIZE,
    compute_ndvi,
    reduce_bands,
    reduce_ndvi,
)

__all__ = ["MAX_PIXELS", "SAMPLE_SIZE", "compute_ndvi", "reduce_bands", "reduce_ndvi"]
