"""Tests for the top-level library interface."""

import io
import json
from datetime import UTC, datetime

import pytest

import lograinbow
from lograinbow.cli.formatters import JSONLFormatter, TableFormatter, create_formatter, format_cell
from lograinbow.core.config import RainbowConfig


def test_prepare_with_explicit_providers(stub_provider, synthetic_observations):
    provider = stub_provider("memory", observations=synthetic_observations(25))

    prepared = lograinbow.prepare([provider], RainbowConfig())

    assert isinstance(prepared, lograinbow.PreparedSeries)
    assert prepared.provider == "memory"
    assert len(prepared) == 25


@pytest.mark.asyncio
async def test_prepare_async(stub_provider, failing_provider, synthetic_observations):
    providers = [failing_provider("down", "down 500"), stub_provider("up", observations=synthetic_observations(12))]

    prepared = await lograinbow.prepare_async(providers, RainbowConfig())

    assert prepared.provider == "up"
    assert prepared.failures[0].message == "down 500"


def test_prepare_raises_typed_error(failing_provider):
    with pytest.raises(lograinbow.AggregateAcquisitionFailure):
        lograinbow.prepare([failing_provider("down", "down 500")], RainbowConfig())


def test_version():
    assert lograinbow.__version__ == "0.1.0"


class TestFormatters:
    def test_table_formats_price_columns(self):
        stream = io.StringIO()

        TableFormatter(no_color=True).render(
            [{"price": 43210.5, "b0": 0.0123456789, "span3": 1250.0, "known": True}], stream=stream
        )

        output = stream.getvalue()
        assert "43,210.50" in output
        assert "0.0123457" in output
        assert "1,250.00" in output
        assert "True" in output

    def test_table_shows_daily_instants_as_dates(self):
        stream = io.StringIO()
        rows = [
            {"timestamp": datetime(2024, 4, 20, tzinfo=UTC), "price": 64000.0},
            {"timestamp": datetime(2024, 4, 21, 12, 30, tzinfo=UTC), "price": 64500.0},
        ]

        TableFormatter(no_color=True).render(rows, stream=stream)

        output = stream.getvalue()
        assert "2024-04-20" in output
        assert "2024-04-20T" not in output
        assert "2024-04-21T12:30+00:00" in output

    def test_coefficients_keep_significant_digits(self):
        assert format_cell("a", 0.000412345678) == "0.000412346"
        assert format_cell("c", 1.5) == "1.5"
        assert format_cell("points", 40) == "40"
        assert format_cell("events", ()) == "-"
        assert format_cell("residual_std", float("nan")) == "-"

    def test_table_without_rows(self):
        stream = io.StringIO()

        TableFormatter(no_color=True).render([], stream=stream, columns=["field", "value"])

        assert "No data available." in stream.getvalue()

    def test_jsonl_respects_columns(self):
        stream = io.StringIO()

        JSONLFormatter().render([{"field": "a", "value": 1.5, "extra": 0}], stream=stream, columns=["field", "value"])

        assert stream.getvalue() == '{"field": "a", "value": 1.5}\n'

    def test_jsonl_writes_instants_as_iso_strings(self):
        stream = io.StringIO()
        halvings = (datetime(2016, 7, 9, tzinfo=UTC), datetime(2020, 5, 11, tzinfo=UTC))

        JSONLFormatter().render(
            [{"field": "events", "value": halvings}, {"field": "end", "value": halvings[1]}], stream=stream
        )

        first, second = map(json.loads, stream.getvalue().splitlines())
        assert first["value"] == ["2016-07-09T00:00:00+00:00", "2020-05-11T00:00:00+00:00"]
        assert second["value"] == "2020-05-11T00:00:00+00:00"

    def test_jsonl_writes_non_finite_floats_as_null(self):
        stream = io.StringIO()

        JSONLFormatter().render([{"residual_std": float("inf")}], stream=stream)

        assert stream.getvalue() == '{"residual_std": null}\n'

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            create_formatter("csv")
