"""Sequential provider fallback chain."""

from __future__ import annotations

import time
from collections.abc import Sequence

from lograinbow.core.exceptions import AggregateAcquisitionFailure, ProviderFailure
from lograinbow.core.logging import bind, log_context
from lograinbow.core.models import AcquisitionResult
from lograinbow.core.providers.base import PriceHistoryProvider


class DataAcquisitionChain:
    """Tries providers one after another until one returns observations.

    Providers are never queried concurrently: the next provider starts only
    after the previous one has failed. There is no retry within a provider.
    """

    def __init__(self, providers: Sequence[PriceHistoryProvider]) -> None:
        self.providers = list(providers)

    @property
    def provider_names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    async def acquire(self) -> AcquisitionResult:
        """Return the first non-empty provider result.

        Raises:
            AggregateAcquisitionFailure: every provider failed
        """
        log = bind(component="DataAcquisitionChain")
        log.info("Starting acquisition", providers=self.provider_names)

        failures: list[ProviderFailure] = []
        for attempt, provider in enumerate(self.providers, start=1):
            with log_context(provider=provider.name):
                started = time.perf_counter()
                try:
                    observations = await provider.fetch_history()
                    if not observations:
                        raise ProviderFailure(f"{provider.name} returned no observations", provider.name)
                except ProviderFailure as failure:
                    failures.append(failure)
                    log.warning(
                        "Provider failed, falling back",
                        attempt=attempt,
                        error_code=failure.error_code,
                        reason=failure.message,
                    )
                    continue
                except Exception as exc:
                    failure = ProviderFailure(
                        f"unexpected {type(exc).__name__}: {exc}",
                        provider.name,
                    )
                    failures.append(failure)
                    log.opt(exception=exc).warning(
                        "Provider raised an unexpected error, falling back",
                        attempt=attempt,
                        error_code=failure.error_code,
                    )
                    continue

                elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
                log.info(
                    "Provider succeeded",
                    attempt=attempt,
                    observations=len(observations),
                    elapsed_ms=elapsed_ms,
                )
                return AcquisitionResult(
                    provider=provider.name,
                    observations=tuple(observations),
                    failures=tuple(failures),
                )

        error = AggregateAcquisitionFailure(failures)
        log.error("Acquisition failed: {}", error.message, error_code=error.error_code)
        raise error
