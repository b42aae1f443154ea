"""lograinbow - logarithmic regression rainbow bands for long-run price history.

Fetches the full daily history of an asset from the first working provider,
fits a quadratic trend to ``ln(price)`` and derives the eight boundary curves
of the rainbow chart.
"""

from collections.abc import Iterable, Sequence

from lograinbow.core.config import ConfigManager, RainbowConfig
from lograinbow.core.constants import DEFAULT_MULTIPLIERS, HALVINGS, RAINBOW_LEGEND
from lograinbow.core.exceptions import (
    AggregateAcquisitionFailure,
    BandOverflowError,
    InsufficientDataError,
    ProviderFailure,
    RainbowError,
    SingularFitError,
)
from lograinbow.core.models import Observation, PreparedSeries, Series
from lograinbow.core.providers import PriceHistoryProvider
from lograinbow.core.services import RainbowPipeline


def prepare(
    providers: Sequence[PriceHistoryProvider] | None = None,
    config: RainbowConfig | None = None,
    provider_names: Iterable[str] | None = None,
) -> PreparedSeries:
    """Run the whole pipeline once and return the prepared series.

    Args:
        providers: provider instances in attempt order (built from config when None)
        config: configuration; ``~/.lograinbow/config.toml`` plus environment when None
        provider_names: override the configured provider order

    Examples:
        >>> import lograinbow
        >>> prepared = lograinbow.prepare()
        >>> print(prepared.provider, len(prepared), prepared.current_band())
    """
    return _pipeline(providers, config, provider_names).prepare_sync()


async def prepare_async(
    providers: Sequence[PriceHistoryProvider] | None = None,
    config: RainbowConfig | None = None,
    provider_names: Iterable[str] | None = None,
) -> PreparedSeries:
    """Async variant of :func:`prepare`."""
    return await _pipeline(providers, config, provider_names).prepare()


def _pipeline(
    providers: Sequence[PriceHistoryProvider] | None,
    config: RainbowConfig | None,
    provider_names: Iterable[str] | None,
) -> RainbowPipeline:
    if config is None:
        config = ConfigManager().get_config()
    return RainbowPipeline(providers, config, provider_names=provider_names)


__version__ = "0.1.0"

__all__ = [
    "prepare",
    "prepare_async",
    "RainbowPipeline",
    "RainbowConfig",
    "ConfigManager",
    "Observation",
    "Series",
    "PreparedSeries",
    "PriceHistoryProvider",
    "RainbowError",
    "ProviderFailure",
    "AggregateAcquisitionFailure",
    "InsufficientDataError",
    "SingularFitError",
    "BandOverflowError",
    "DEFAULT_MULTIPLIERS",
    "HALVINGS",
    "RAINBOW_LEGEND",
]
