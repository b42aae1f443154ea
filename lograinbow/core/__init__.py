"""lograinbow core: acquisition, normalization, regression and band synthesis."""

from lograinbow.core.config import ConfigManager, RainbowConfig
from lograinbow.core.models import Observation, PreparedSeries, Series
from lograinbow.core.services import RainbowPipeline

__all__ = [
    "ConfigManager",
    "RainbowConfig",
    "Observation",
    "Series",
    "PreparedSeries",
    "RainbowPipeline",
]
