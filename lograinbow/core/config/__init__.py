"""Configuration management module."""

from lograinbow.core.config.settings import (
    BandConfig,
    ConfigManager,
    LoggingConfig,
    ProviderConfig,
    RainbowConfig,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "RainbowConfig",
    "ProviderConfig",
    "BandConfig",
    "LoggingConfig",
    "load_config_from_env",
]
