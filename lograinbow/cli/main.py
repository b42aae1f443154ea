"""Main entry point for the lograinbow command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from lograinbow.core.logging import configure_logging

from .chart import register as register_chart_commands
from .formatters import create_formatter


def create_app() -> typer.Typer:
    """Create a Typer application instance for lograinbow."""

    app = typer.Typer(add_completion=False, help="Logarithmic regression rainbow bands")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level for the JSON log stream on stderr (overrides config).",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
        config: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help="Configuration file (defaults to ~/.lograinbow/config.toml).",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            # Validate formatter eagerly for immediate feedback on invalid options
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "log_level": log_level.upper() if log_level else None,
                "no_color": no_color,
                "config_path": config,
            }
        )
        try:
            configure_logging(level=log_level or "WARNING")
        except ValueError as exc:
            raise typer.BadParameter(f"Unknown log level '{log_level}'", param_hint="--log-level") from exc

    register_chart_commands(app)
    return app


app = create_app()


def run() -> None:
    """Console script entry point."""
    app()
