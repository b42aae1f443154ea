"""JSON-line logging for pipeline runs.

Every record is rendered as one JSON object carrying the trace id of the run
it belongs to and, while a provider is being attempted, that provider's name.
Console output goes to stderr so command output on stdout stays parseable.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Iterator
from uuid import uuid4

from loguru import logger

from lograinbow.core.logging.config import LogConfig

_RUN_CONTEXT: ContextVar[dict[str, Any]] = ContextVar("lograinbow_run_context", default={})

# promoted out of "context" into the top level of each JSON line
_TOP_LEVEL_KEYS = ("trace_id", "provider", "error_code")
_SERIALIZED_KEY = "_json"


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _attach_run_context(record: dict[str, Any]) -> None:
    """Merge the active run context into ``extra`` and pre-render the JSON line."""

    extra = record["extra"]
    for key, value in _RUN_CONTEXT.get().items():
        # values passed to the log call itself win over the run context
        if extra.get(key) is None:
            extra[key] = value
    if not extra.get("trace_id"):
        extra["trace_id"] = uuid4().hex

    context = {key: value for key, value in extra.items() if key not in _TOP_LEVEL_KEYS and key != _SERIALIZED_KEY}
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    payload.update({key: extra.get(key) for key in _TOP_LEVEL_KEYS})
    if context:
        payload["context"] = context
    if record["exception"] is not None:
        exc_type, exc_value, _ = record["exception"]
        payload["exception"] = f"{exc_type.__name__}: {exc_value}"
    extra[_SERIALIZED_KEY] = json.dumps(payload, default=_json_default)


def _json_line(record: dict[str, Any]) -> str:
    # a callable format stops loguru from appending the traceback after the JSON
    return "{extra[" + _SERIALIZED_KEY + "]}\n"


def _write_stderr(message: str) -> None:
    # looked up per call so a swapped sys.stderr (CliRunner, capsys) is honoured
    sys.stderr.write(message)


def _handlers(config: LogConfig) -> list[dict[str, Any]]:
    level = config.level.upper()
    handlers: list[dict[str, Any]] = []
    if config.console:
        sink = config.stream if config.stream is not None else _write_stderr
        handlers.append({"sink": sink, "level": level, "format": _json_line})
    if config.file_path:
        handlers.append({"sink": config.file_path, "level": level, "format": _json_line, "encoding": "utf-8"})
    return handlers


def configure_logging(
    level: str = "INFO",
    *,
    stream: Any = None,
    file_path: str | None = None,
    console: bool = True,
) -> LogConfig:
    """(Re)install the JSON sinks on the global loguru logger.

    Args:
        level: minimum level for every sink
        stream: writable text stream for console output; stderr when None
        file_path: also append JSON lines to this file
        console: disable to log to the file only
    """
    config = LogConfig(level=level, stream=stream, file_path=file_path, console=console)
    logger.configure(handlers=_handlers(config), patcher=_attach_run_context)
    return config


def bind(**kwargs: Any):
    """Logger with ``kwargs`` attached to every record it emits."""

    return logger.bind(**kwargs)


@contextmanager
def log_context(*, trace_id: str | None = None, **values: Any) -> Iterator[str]:
    """Attach ``values`` and a trace id to every record logged inside the block.

    Nested blocks keep the enclosing trace id unless one is given explicitly.

    >>> with log_context(provider="coincap") as trace_id:
    ...     bind(component="demo").info("attempting provider")
    """
    enclosing = _RUN_CONTEXT.get()
    active_trace = trace_id or enclosing.get("trace_id") or uuid4().hex
    token = _RUN_CONTEXT.set({**enclosing, **values, "trace_id": active_trace})
    try:
        yield active_trace
    finally:
        _RUN_CONTEXT.reset(token)


configure_logging()


__all__ = ["bind", "configure_logging", "log_context", "logger"]
