"""Configuration management for lograinbow."""

from __future__ import annotations

import math
import os
import tomllib
from dataclasses import asdict, dataclass, field
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from loguru import logger

from lograinbow.core.constants import DEFAULT_MULTIPLIERS, DEFAULT_PROVIDER_ORDER, HALVINGS
from lograinbow.core.exceptions import ConfigurationError
from lograinbow.core.logging.config import LOG_LEVELS

DEFAULT_CONFIG_PATH = Path.home() / ".lograinbow" / "config.toml"


@dataclass
class ProviderConfig:
    """Provider selection and request settings."""

    order: list[str] = field(default_factory=lambda: list(DEFAULT_PROVIDER_ORDER))
    timeout: float = 30.0
    user_agent: str = "lograinbow/0.1.0"
    coin_id: str = "bitcoin"
    vs_currency: str = "usd"
    coincap_api_key: str | None = None
    yfinance_ticker: str = "BTC-USD"

    def __post_init__(self) -> None:
        if isinstance(self.order, str):
            self.order = self.order.split(",")
        if not isinstance(self.order, (list, tuple)) or not all(isinstance(name, str) for name in self.order):
            raise ConfigurationError("providers.order must be a list of provider names", {"order": self.order})
        self.order = [name.strip().lower() for name in self.order if name.strip()]
        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("providers.timeout must be a number", {"timeout": self.timeout}) from exc
        if self.timeout <= 0:
            raise ConfigurationError("providers.timeout must be positive", {"timeout": self.timeout})


@dataclass
class BandConfig:
    """Band multipliers and chart reference events."""

    multipliers: list[float] = field(default_factory=lambda: list(DEFAULT_MULTIPLIERS))
    reference_events: list[datetime] = field(default_factory=lambda: list(HALVINGS))

    def __post_init__(self) -> None:
        try:
            if not isinstance(self.multipliers, (list, tuple)):
                raise TypeError("not a list")
            self.multipliers = [_as_number(value) for value in self.multipliers]
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                "bands.multipliers must be a list of numbers",
                {"multipliers": self.multipliers},
            ) from exc
        if any(lower >= upper for lower, upper in zip(self.multipliers, self.multipliers[1:])):
            raise ConfigurationError(
                "bands.multipliers must be strictly increasing",
                {"multipliers": self.multipliers},
            )
        if not isinstance(self.reference_events, (list, tuple)):
            raise ConfigurationError(
                "bands.reference_events must be a list of instants",
                {"reference_events": self.reference_events},
            )
        self.reference_events = [_parse_instant(value) for value in self.reference_events]


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "WARNING"
    file: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.level, str) or self.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {', '.join(sorted(LOG_LEVELS))}",
                {"level": self.level},
            )
        self.level = self.level.upper()


@dataclass
class RainbowConfig:
    """Top-level configuration."""

    providers: ProviderConfig = field(default_factory=ProviderConfig)
    bands: BandConfig = field(default_factory=BandConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RainbowConfig":
        """Build a configuration from a (possibly partial) nested dict."""
        try:
            return cls(
                providers=ProviderConfig(**config_dict.get("providers", {})),
                bands=BandConfig(**config_dict.get("bands", {})),
                logging=LoggingConfig(**config_dict.get("logging", {})),
            )
        except TypeError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "providers": asdict(self.providers),
            "bands": {
                "multipliers": list(self.bands.multipliers),
                "reference_events": [event.isoformat() for event in self.bands.reference_events],
            },
            "logging": asdict(self.logging),
        }


class ConfigManager:
    """Loads configuration from a TOML file with environment overrides."""

    def __init__(self, config_path: Path | None = None, use_env: bool = True):
        """Initialise the manager.

        Args:
            config_path: TOML file to read; ``~/.lograinbow/config.toml`` when None
            use_env: apply ``LOGRAINBOW_*`` environment overrides
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.use_env = use_env
        self.config = self._load_config()

    def _load_config(self) -> RainbowConfig:
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning("Failed to load config from {}: {}", self.config_path, e)
                config_dict = {}

        if self.use_env:
            config_dict = _deep_update(config_dict, load_config_from_env())
        return RainbowConfig.from_dict(config_dict)

    def get_config(self) -> RainbowConfig:
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Merge nested updates into the current configuration."""
        self.config = RainbowConfig.from_dict(_deep_update(self.config.to_dict(), updates))


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(dict(d.get(k, {})), v)
        else:
            d[k] = v
    return d


def _as_number(value: Any) -> float:
    if isinstance(value, (bool, str)):
        raise TypeError(f"{value!r} is not a number")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not finite")
    return number


def _parse_instant(value: datetime | date | str) -> datetime:
    """UTC-aware instant from a datetime, a date (midnight UTC) or an ISO string."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid reference event '{value}'", {"value": value}) from exc
    elif isinstance(value, date) and not isinstance(value, datetime):
        # TOML bare dates arrive as datetime.date
        value = datetime(value.year, value.month, value.day)
    elif not isinstance(value, datetime):
        raise ConfigurationError(
            f"Invalid reference event {value!r}: expected an ISO string or a datetime",
            {"value": repr(value)},
        )
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def load_config_from_env() -> dict[str, Any]:
    """Read ``LOGRAINBOW_*`` environment variables into a nested dict."""
    config: dict[str, Any] = {}

    provider_config: dict[str, Any] = {}
    provider_order = os.getenv("LOGRAINBOW_PROVIDER_ORDER")
    if provider_order:
        provider_config["order"] = provider_order
    provider_timeout = os.getenv("LOGRAINBOW_PROVIDER_TIMEOUT")
    if provider_timeout is not None:
        try:
            provider_config["timeout"] = float(provider_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"LOGRAINBOW_PROVIDER_TIMEOUT must be a number, got '{provider_timeout}'"
            ) from exc
    coincap_api_key = os.getenv("LOGRAINBOW_COINCAP_API_KEY")
    if coincap_api_key:
        provider_config["coincap_api_key"] = coincap_api_key

    if provider_config:
        config["providers"] = provider_config

    logging_level = os.getenv("LOGRAINBOW_LOGGING_LEVEL")
    if logging_level is not None:
        config["logging"] = {"level": logging_level}

    return config
