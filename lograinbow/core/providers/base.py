"""Price history provider abstractions."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from lograinbow.core.exceptions import ProviderFailure
from lograinbow.core.logging import bind
from lograinbow.core.models import Observation


DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "lograinbow/0.1.0"


class PriceHistoryProvider(ABC):
    """Source of the full daily price history of one asset."""

    name: str = "provider"

    @abstractmethod
    async def fetch_history(self) -> list[Observation]:
        """Fetch raw observations over the full available history.

        Raises:
            ProviderFailure: on any transport, status or payload problem
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


class HttpPriceProvider(PriceHistoryProvider):
    """Base for providers backed by a single JSON ``GET`` request.

    Subclasses describe the request (:meth:`build_url`, :meth:`build_params`,
    :meth:`build_headers`), the envelope model and the row conversion.
    """

    display_name: str = "HTTP provider"
    payload_model: type[BaseModel]

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    @abstractmethod
    def build_url(self) -> str: ...

    def build_params(self) -> dict[str, Any]:
        return {}

    def build_headers(self) -> dict[str, str]:
        return {"accept": "application/json"}

    @abstractmethod
    def to_observations(self, payload: Any) -> list[Observation]: ...

    async def fetch_history(self) -> list[Observation]:
        payload = await self._get_payload()
        return self.to_observations(payload)

    def _failure(self, message: str, **details: Any) -> ProviderFailure:
        return ProviderFailure(message, self.name, details=details or None)

    async def _get_payload(self) -> BaseModel:
        log = bind(component="HttpPriceProvider", provider=self.name)
        url = self.build_url()
        headers = {"User-Agent": self.user_agent, **self.build_headers()}

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url, params=self.build_params(), headers=headers)
            except httpx.HTTPError as exc:
                raise self._failure(
                    f"{self.display_name} request failed: {type(exc).__name__}: {exc}",
                    url=url,
                ) from exc

        if not response.is_success:
            raise self._failure(
                f"{self.display_name} {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise self._failure(f"{self.display_name} bad payload", reason="invalid JSON") from exc

        try:
            payload = self.payload_model.model_validate(body)
        except ValidationError as exc:
            raise self._failure(
                f"{self.display_name} bad payload",
                reason=f"{exc.error_count()} validation error(s)",
            ) from exc

        log.debug("Fetched payload from {}", url)
        return payload


def coerce_price(value: Any) -> float:
    """Float price or NaN when the value is not numeric."""

    if isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def coerce_timestamp(value: Any, unit: str = "ms") -> datetime | None:
    """UTC instant from an epoch number in ``ms`` or ``s``; None if unreadable."""

    if isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if unit == "ms":
        seconds /= 1000.0
    if not math.isfinite(seconds):
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


__all__ = [
    "PriceHistoryProvider",
    "HttpPriceProvider",
    "coerce_price",
    "coerce_timestamp",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
]
