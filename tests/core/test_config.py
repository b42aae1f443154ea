"""Tests for configuration loading."""

from datetime import UTC, datetime

import pytest

from lograinbow.core.config import (
    BandConfig,
    ConfigManager,
    ProviderConfig,
    RainbowConfig,
    load_config_from_env,
)
from lograinbow.core.constants import DEFAULT_MULTIPLIERS, DEFAULT_PROVIDER_ORDER, HALVINGS
from lograinbow.core.exceptions import ConfigurationError

ENV_VARS = (
    "LOGRAINBOW_PROVIDER_ORDER",
    "LOGRAINBOW_PROVIDER_TIMEOUT",
    "LOGRAINBOW_COINCAP_API_KEY",
    "LOGRAINBOW_LOGGING_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestRainbowConfig:
    def test_defaults(self):
        config = RainbowConfig()

        assert config.providers.order == list(DEFAULT_PROVIDER_ORDER)
        assert config.providers.timeout == 30.0
        assert config.bands.multipliers == list(DEFAULT_MULTIPLIERS)
        assert config.bands.reference_events == list(HALVINGS)
        assert config.logging.level == "WARNING"

    def test_from_dict_round_trips_through_to_dict(self):
        config = RainbowConfig.from_dict({"providers": {"order": ["blockchain"], "timeout": 10}})

        rebuilt = RainbowConfig.from_dict(config.to_dict())

        assert rebuilt == config
        assert rebuilt.providers.order == ["blockchain"]

    def test_unknown_key_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            RainbowConfig.from_dict({"providers": {"retries": 3}})

    def test_order_accepts_comma_separated_string(self):
        assert ProviderConfig(order=" CoinCap, yfinance ,").order == ["coincap", "yfinance"]

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ConfigurationError):
            ProviderConfig(timeout=0)

    def test_multipliers_must_increase(self):
        with pytest.raises(ConfigurationError) as excinfo:
            BandConfig(multipliers=[-1, 1, 0])

        assert excinfo.value.details["multipliers"] == [-1.0, 1.0, 0.0]

    def test_reference_events_parse_iso_and_default_to_utc(self):
        bands = BandConfig(reference_events=["2020-05-11", datetime(2024, 4, 20)])

        assert bands.reference_events == [datetime(2020, 5, 11, tzinfo=UTC), datetime(2024, 4, 20, tzinfo=UTC)]

    def test_bad_reference_event(self):
        with pytest.raises(ConfigurationError):
            BandConfig(reference_events=["someday"])

    @pytest.mark.parametrize(
        "multipliers",
        [["low", 0, 1], [True, 1, 2], ["-1", "0", "1"], [0, float("inf")], 3, None],
        ids=["word", "bool", "numeric-strings", "infinite", "scalar", "null"],
    )
    def test_multipliers_must_be_a_list_of_numbers(self, multipliers):
        with pytest.raises(ConfigurationError, match="list of numbers"):
            RainbowConfig.from_dict({"bands": {"multipliers": multipliers}})

    @pytest.mark.parametrize(
        "events",
        [[20240420], [None], ["2020-05-11", 1.5], "2020-05-11"],
        ids=["integer", "null", "float", "bare-string"],
    )
    def test_reference_events_must_be_instants(self, events):
        with pytest.raises(ConfigurationError):
            RainbowConfig.from_dict({"bands": {"reference_events": events}})

    @pytest.mark.parametrize("timeout", ["soon", None, [5]])
    def test_timeout_must_be_a_number(self, timeout):
        with pytest.raises(ConfigurationError, match="providers.timeout"):
            RainbowConfig.from_dict({"providers": {"timeout": timeout}})

    @pytest.mark.parametrize("order", [42, ["coincap", 7]])
    def test_order_must_list_names(self, order):
        with pytest.raises(ConfigurationError, match="providers.order"):
            RainbowConfig.from_dict({"providers": {"order": order}})

    @pytest.mark.parametrize("level", ["LOUD", 10])
    def test_logging_level_must_be_known(self, level):
        with pytest.raises(ConfigurationError, match="logging.level"):
            RainbowConfig.from_dict({"logging": {"level": level}})

    def test_logging_level_is_uppercased(self):
        assert RainbowConfig.from_dict({"logging": {"level": "debug"}}).logging.level == "DEBUG"


class TestConfigManager:
    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "absent.toml", use_env=False)

        assert manager.get_config() == RainbowConfig()

    def test_loads_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[providers]\norder = ["coincap", "blockchain"]\ntimeout = 12.5\n\n'
            "[bands]\nmultipliers = [-2, 0, 2]\n\n"
            '[logging]\nlevel = "DEBUG"\n',
            encoding="utf-8",
        )

        config = ConfigManager(path, use_env=False).get_config()

        assert config.providers.order == ["coincap", "blockchain"]
        assert config.providers.timeout == 12.5
        assert config.bands.multipliers == [-2.0, 0.0, 2.0]
        assert config.logging.level == "DEBUG"

    def test_toml_dates_are_reference_events(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[bands]\nreference_events = [2020-05-11, 2024-04-20T00:00:00Z]\n", encoding="utf-8")

        config = ConfigManager(path, use_env=False).get_config()

        assert config.bands.reference_events == [
            datetime(2020, 5, 11, tzinfo=UTC),
            datetime(2024, 4, 20, tzinfo=UTC),
        ]

    def test_invalid_toml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[providers\norder = ", encoding="utf-8")

        assert ConfigManager(path, use_env=False).get_config() == RainbowConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text('[providers]\norder = ["coingecko"]\ntimeout = 5\n', encoding="utf-8")
        monkeypatch.setenv("LOGRAINBOW_PROVIDER_ORDER", "blockchain,yfinance")
        monkeypatch.setenv("LOGRAINBOW_COINCAP_API_KEY", "abc")

        config = ConfigManager(path).get_config()

        assert config.providers.order == ["blockchain", "yfinance"]
        assert config.providers.timeout == 5
        assert config.providers.coincap_api_key == "abc"

    def test_update_config(self, tmp_path):
        manager = ConfigManager(tmp_path / "absent.toml", use_env=False)

        manager.update_config(logging={"level": "ERROR"})

        assert manager.get_config().logging.level == "ERROR"
        assert manager.get_config().providers.order == list(DEFAULT_PROVIDER_ORDER)


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("LOGRAINBOW_PROVIDER_TIMEOUT", "7")
    monkeypatch.setenv("LOGRAINBOW_LOGGING_LEVEL", "WARNING")

    assert load_config_from_env() == {"providers": {"timeout": 7.0}, "logging": {"level": "WARNING"}}


def test_load_config_from_env_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("LOGRAINBOW_PROVIDER_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        load_config_from_env()
