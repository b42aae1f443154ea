"""Renderers for prepared rainbow rows and run summaries."""

from __future__ import annotations

import json
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

# prices, band boundaries and band heights share the price axis
_PRICE_COLUMN = re.compile(r"^(price|base|latest_price|y_min|b\d+|span\d+)$")

Row = Mapping[str, Any]


def is_price_column(column: str) -> bool:
    return bool(_PRICE_COLUMN.match(column))


def format_cell(column: str, value: Any) -> str:
    """Human-readable cell text for the table view."""

    if value is None:
        return "-"
    if isinstance(value, datetime):
        # daily closes land on midnight; show the day only
        if value.timetz().replace(tzinfo=None) == time(0):
            return value.date().isoformat()
        return value.isoformat(timespec="minutes")
    if isinstance(value, (list, tuple)):
        return ", ".join(format_cell(column, item) for item in value) or "-"
    if isinstance(value, bool) or not isinstance(value, float):
        return str(value)
    if not math.isfinite(value):
        return "-"
    if is_price_column(column):
        # sub-dollar prices from the early history keep their significant digits
        return f"{value:,.2f}" if abs(value) >= 1 else f"{value:.6g}"
    return f"{value:,.2f}" if abs(value) >= 1000 else f"{value:.6g}"


def to_json_value(value: Any) -> Any:
    """JSON-safe value: ISO instants, lists for tuples, ``null`` for NaN/inf."""

    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class OutputFormatter(ABC):
    """Writes a sequence of flat rows to a text stream."""

    @abstractmethod
    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None: ...

    @staticmethod
    def resolve_columns(rows: Sequence[Row], columns: Sequence[str] | None) -> list[str]:
        if columns:
            return list(columns)
        return list(rows[0]) if rows else []


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Rich table; price columns right-aligned with thousands separators."""

    no_color: bool = False

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color, width=200)
        resolved = self.resolve_columns(rows, columns)
        if not rows:
            console.print("No data available.")
            return

        table = Table(box=SIMPLE)
        for column in resolved:
            numeric = is_price_column(column) or isinstance(rows[0].get(column), float)
            table.add_column(
                column,
                justify="right" if numeric else "left",
                header_style="" if self.no_color else "bold",
            )
        for row in rows:
            table.add_row(*(format_cell(column, row.get(column)) for column in resolved))
        console.print(table)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """One JSON object per row; instants as ISO-8601 strings."""

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str] | None = None) -> None:
        resolved = self.resolve_columns(rows, columns)
        for row in rows:
            record = {column: to_json_value(row.get(column)) for column in resolved}
            stream.write(json.dumps(record, ensure_ascii=False))
            stream.write("\n")
        stream.flush()


FORMATS = ("table", "jsonl")


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Formatter for ``name`` (``table`` or ``jsonl``)."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(FORMATS)}.")


__all__ = [
    "OutputFormatter",
    "TableFormatter",
    "JSONLFormatter",
    "create_formatter",
    "format_cell",
    "to_json_value",
    "is_price_column",
    "FORMATS",
]
