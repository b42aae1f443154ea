"""Pytest configuration for the lograinbow test suite."""

from __future__ import annotations

import math
import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from lograinbow.core.exceptions import ProviderFailure
from lograinbow.core.models import Observation
from lograinbow.core.providers import PriceHistoryProvider


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--lograinbow-run-integration",
        action="store_true",
        default=False,
        help="Run lograinbow integration tests that call live price providers.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for lograinbow tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks lograinbow tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--lograinbow-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --lograinbow-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


class StubProvider(PriceHistoryProvider):
    """In-memory provider that records how often it was called."""

    def __init__(
        self,
        name: str,
        observations: list[Observation] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.name = name
        self.observations = observations or []
        self.error = error
        self.calls = 0

    async def fetch_history(self) -> list[Observation]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.observations)


def daily_observations(
    count: int,
    start: datetime = datetime(2012, 1, 1, tzinfo=UTC),
    *,
    noise: float = 0.05,
    seed: int = 7,
) -> list[Observation]:
    """Log-linear price path with gaussian noise on ``ln(price)``."""

    rng = random.Random(seed)
    return [
        Observation(
            timestamp=start + timedelta(days=day),
            price=math.exp(1.5 + 0.0025 * day + rng.gauss(0.0, noise)),
        )
        for day in range(count)
    ]


@pytest.fixture
def stub_provider() -> Callable[..., StubProvider]:
    """Factory for :class:`StubProvider` instances."""

    return StubProvider


@pytest.fixture
def failing_provider() -> Callable[[str, str], StubProvider]:
    """Factory for providers that raise :class:`ProviderFailure`."""

    def _make(name: str, reason: str) -> StubProvider:
        return StubProvider(name, error=ProviderFailure(reason, name))

    return _make


@pytest.fixture
def synthetic_observations() -> Callable[..., list[Observation]]:
    return daily_observations
