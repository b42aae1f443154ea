"""Rainbow chart commands for the lograinbow CLI."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import typer

from lograinbow.core.config import ConfigManager, RainbowConfig
from lograinbow.core.exceptions import (
    AggregateAcquisitionFailure,
    BandOverflowError,
    ConfigurationError,
    ErrorCode,
    InsufficientDataError,
    RainbowError,
    SingularFitError,
)
from lograinbow.core.logging import configure_logging
from lograinbow.core.models import PreparedSeries
from lograinbow.core.providers import get_provider_factory
from lograinbow.core.services import RainbowPipeline

from .constants import DATA_EXIT_CODE, PROVIDER_EXIT_CODE, SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import CLIOptions, report_error, write_rows

PROVIDER_OPTION_HELP = "Provider to try, in order. Repeat to build a fallback list."


def register(app: typer.Typer) -> None:
    """Register the chart commands on the provided application."""

    app.command("bands")(bands_command)
    app.command("summary")(summary_command)
    app.command("providers")(providers_command)


def load_config(config_path: Path | None) -> RainbowConfig:
    """Factory hook for the configuration used by CLI commands."""

    return ConfigManager(config_path).get_config()


def get_pipeline(config: RainbowConfig, provider_names: list[str] | None) -> RainbowPipeline:
    """Factory hook for obtaining a :class:`RainbowPipeline` instance."""

    return RainbowPipeline(config=config, provider_names=provider_names or None)


def bands_command(
    ctx: typer.Context,
    spans: bool = typer.Option(False, "--spans", help="Emit base + band heights instead of boundaries."),
    tail: int | None = typer.Option(None, "--tail", min=1, help="Only show the most recent N rows."),
    provider: list[str] | None = typer.Option(None, "--provider", "-p", help=PROVIDER_OPTION_HELP),
) -> None:
    """Prepare the rainbow series and render one row per observation."""

    options = CLIOptions.from_context(ctx)
    prepared = _run_pipeline(options, provider)
    rows = prepared.to_records("spans" if spans else "boundaries")
    if tail is not None:
        rows = rows[-tail:]
    write_rows(options, rows)


def summary_command(
    ctx: typer.Context,
    provider: list[str] | None = typer.Option(None, "--provider", "-p", help=PROVIDER_OPTION_HELP),
) -> None:
    """Show the fitted trend, residual spread and the band of the latest price."""

    options = CLIOptions.from_context(ctx)
    prepared = _run_pipeline(options, provider)
    rows = [{"field": key, "value": value} for key, value in summarize(prepared).items()]
    write_rows(options, rows, columns=["field", "value"])


def providers_command(ctx: typer.Context) -> None:
    """List the providers in the order they will be tried."""

    options = CLIOptions.from_context(ctx)
    with _error_exit():
        config = _load_config(options)
    available = set(get_provider_factory().available)
    rows = [
        {"position": position, "name": name, "known": name in available}
        for position, name in enumerate(config.providers.order, start=1)
    ]
    write_rows(options, rows, columns=["position", "name", "known"])


def summarize(prepared: PreparedSeries) -> dict[str, Any]:
    """Flat key/value overview of a prepared series."""

    band = prepared.current_band()
    return {
        "provider": prepared.provider,
        "points": len(prepared),
        "start": prepared.start,
        "end": prepared.end,
        "a": prepared.coefficients.a,
        "b": prepared.coefficients.b,
        "c": prepared.coefficients.c,
        "residual_mean": prepared.residuals.mean,
        "residual_std": prepared.residuals.std_dev,
        "y_min": prepared.y_min,
        "events": prepared.events,
        "latest_price": prepared.latest.price,
        "current_band": band.label if band else "outside bands",
    }


def _run_pipeline(options: CLIOptions, provider_names: list[str] | None) -> PreparedSeries:
    with _error_exit():
        config = _load_config(options)
        pipeline = get_pipeline(config, provider_names)
        return pipeline.prepare_sync()


def _load_config(options: CLIOptions) -> RainbowConfig:
    config = load_config(options.config_path)
    # --log-level wins over the configured level
    configure_logging(level=options.log_level or config.logging.level, file_path=config.logging.file)
    return config


@contextmanager
def _error_exit() -> Iterator[None]:
    """Translate pipeline errors into a stderr payload and an exit code."""

    try:
        yield
    except ConfigurationError as error:
        _exit_with(error, VALIDATION_EXIT_CODE)
    except AggregateAcquisitionFailure as error:
        _exit_with(error, PROVIDER_EXIT_CODE)
    except (InsufficientDataError, SingularFitError, BandOverflowError) as error:
        _exit_with(error, DATA_EXIT_CODE)
    except RainbowError as error:
        _exit_with(error, SYSTEM_EXIT_CODE)
    except Exception as error:  # pragma: no cover - safety net
        _exit_with(RainbowError(str(error), ErrorCode.UNEXPECTED_ERROR), SYSTEM_EXIT_CODE, cause=error)


def _exit_with(error: RainbowError, code: int, *, cause: BaseException | None = None) -> None:
    report_error(error)
    raise typer.Exit(code=code) from (cause or error)


__all__ = [
    "register",
    "bands_command",
    "summary_command",
    "providers_command",
    "get_pipeline",
    "load_config",
    "summarize",
]
