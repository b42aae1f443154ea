"""End-to-end preparation of a rainbow chart series."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence

from lograinbow.core.config import RainbowConfig
from lograinbow.core.constants import RAINBOW_LEGEND
from lograinbow.core.logging import bind, log_context
from lograinbow.core.models import PreparedRow, PreparedSeries, minimum_y
from lograinbow.core.providers import PriceHistoryProvider, ProviderFactory, get_provider_factory
from lograinbow.core.services.acquisition import DataAcquisitionChain
from lograinbow.core.services.bands import BandGenerator
from lograinbow.core.services.events import EventFilter
from lograinbow.core.services.normalizer import SeriesNormalizer
from lograinbow.core.services.regression import RegressionEngine


class RainbowPipeline:
    """Acquire -> normalize -> fit -> bands -> events, once per call.

    Nothing is cached between calls; every :meth:`prepare` re-runs the
    acquisition chain and returns a new :class:`PreparedSeries` or raises a
    typed error.
    """

    def __init__(
        self,
        providers: Sequence[PriceHistoryProvider] | None = None,
        config: RainbowConfig | None = None,
        *,
        provider_names: Iterable[str] | None = None,
        factory: ProviderFactory | None = None,
    ) -> None:
        """Initialise the pipeline.

        Args:
            providers: explicit provider instances in attempt order
            config: configuration; defaults apply when None
            provider_names: provider names overriding ``config.providers.order``
            factory: factory used when ``providers`` is not given
        """
        self.config = config or RainbowConfig()
        if providers is None:
            factory = factory or get_provider_factory()
            providers = factory.create_providers(self.config.providers, provider_names)
        self.chain = DataAcquisitionChain(providers)
        self.normalizer = SeriesNormalizer()
        self.regression = RegressionEngine()
        self.band_generator = BandGenerator(self.config.bands.multipliers)
        self.event_filter = EventFilter(self.config.bands.reference_events)

    async def prepare(self) -> PreparedSeries:
        with log_context(component="RainbowPipeline") as trace_id:
            log = bind(component="RainbowPipeline")

            acquired = await self.chain.acquire()
            series = self.normalizer.normalize(acquired.observations)
            fit = self.regression.fit(series)
            bands = self.band_generator.generate(fit.fitted_log, fit.residuals.std_dev)
            events = self.event_filter.within(series.first.timestamp, series.last.timestamp)

            rows = tuple(
                PreparedRow(timestamp=observation.timestamp, price=observation.price, boundaries=bands.at(index))
                for index, observation in enumerate(series)
            )
            prepared = PreparedSeries(
                provider=acquired.provider,
                rows=rows,
                coefficients=fit.coefficients,
                residuals=fit.residuals,
                bands=bands,
                events=events,
                legend=RAINBOW_LEGEND,
                y_min=minimum_y(rows),
                failures=acquired.failures,
            )
            log.info(
                "Prepared series",
                provider=acquired.provider,
                rows=len(rows),
                events=len(events),
                trace=trace_id,
            )
            return prepared

    def prepare_sync(self) -> PreparedSeries:
        """Blocking wrapper around :meth:`prepare`."""
        return asyncio.run(self.prepare())
