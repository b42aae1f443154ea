"""Data models."""

from lograinbow.core.models.bands import (
    BandLegendEntry,
    BandSet,
    RegressionCoefficients,
    ResidualStatistics,
)
from lograinbow.core.models.prepared import (
    AcquisitionResult,
    PreparedRow,
    PreparedSeries,
    minimum_y,
)
from lograinbow.core.models.series import Observation, Series

__all__ = [
    "Observation",
    "Series",
    "RegressionCoefficients",
    "ResidualStatistics",
    "BandLegendEntry",
    "BandSet",
    "AcquisitionResult",
    "PreparedRow",
    "PreparedSeries",
    "minimum_y",
]
