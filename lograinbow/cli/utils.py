"""Option resolution, output sinks and error reporting for the chart commands."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

import typer

from lograinbow.core.exceptions import ErrorCode, RainbowError

from .constants import VALIDATION_EXIT_CODE
from .formatters import create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Global options stored on the Typer context by the app callback."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False
    config_path: Path | None = None
    log_level: str | None = None

    @classmethod
    def from_context(cls, ctx: typer.Context) -> CLIOptions:
        ctx.ensure_object(dict)
        data = ctx.obj or {}
        return cls(
            format=str(data.get("format", "table")),
            output_path=data.get("output_path"),
            no_color=bool(data.get("no_color", False)),
            config_path=data.get("config_path"),
            log_level=data.get("log_level"),
        )


@contextmanager
def open_output(path: Path | None) -> Iterator[TextIO]:
    """Yield stdout, or ``path`` opened for writing.

    A path that cannot be opened is reported on stderr and exits with the
    validation exit code.
    """
    if path is None:
        yield sys.stdout
        return
    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as exc:
        report_error(RainbowError(f"Unable to open '{path}': {exc}", ErrorCode.OUTPUT_ERROR, {"path": str(path)}))
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    with handle:
        yield handle


def write_rows(
    options: CLIOptions,
    rows: Sequence[Mapping[str, Any]],
    *,
    columns: Sequence[str] | None = None,
) -> None:
    """Render ``rows`` in the selected format to the selected destination."""

    formatter = create_formatter(options.format, no_color=options.no_color)
    with open_output(options.output_path) as stream:
        formatter.render(rows, stream=stream, columns=columns)


def report_error(error: RainbowError) -> None:
    """Print the error payload as one JSON line on stderr."""

    typer.echo(json.dumps(error.to_payload(), ensure_ascii=False, default=str), err=True)


__all__ = ["CLIOptions", "open_output", "write_rows", "report_error"]
