"""Pipeline services."""

from lograinbow.core.services.acquisition import DataAcquisitionChain
from lograinbow.core.services.bands import BandGenerator
from lograinbow.core.services.events import EventFilter
from lograinbow.core.services.normalizer import SeriesNormalizer, is_valid_observation
from lograinbow.core.services.pipeline import RainbowPipeline
from lograinbow.core.services.regression import (
    RegressionEngine,
    RegressionFit,
    fit_quadratic,
    residual_statistics,
)

__all__ = [
    "DataAcquisitionChain",
    "SeriesNormalizer",
    "is_valid_observation",
    "RegressionEngine",
    "RegressionFit",
    "fit_quadratic",
    "residual_statistics",
    "BandGenerator",
    "EventFilter",
    "RainbowPipeline",
]
