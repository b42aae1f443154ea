"""Structured JSON logging with per-run trace ids."""

from lograinbow.core.logging.config import LogConfig
from lograinbow.core.logging.logger import bind, configure_logging, log_context, logger

__all__ = ["LogConfig", "bind", "configure_logging", "log_context", "logger"]
