"""Settings for the JSON log sinks."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


class LogConfig(BaseModel):
    """Where log lines go and from which level on."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console: bool = True
    stream: Any = None
    file_path: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return normalized


__all__ = ["LOG_LEVELS", "LogConfig"]
