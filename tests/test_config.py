"""Tests for IndicatorConfig and env parsing."""

from __future__ import annotations

import pytest

from dailysma.config import IndicatorConfig, LookbackMode, PriceField
from dailysma.errors import DailySmaError, DailySmaErrorCode

ENV_KEYS = [
    "DAILY_SMA_PERIOD",
    "DAILY_SMA_PRICE_FIELD",
    "DAILY_SMA_SYMBOL",
    "DAILY_SMA_MAX_ATTEMPTS",
    "DAILY_SMA_LOOKBACK_MODE",
    "DAILY_SMA_INCLUDE_LIVE_PRICE",
    "DAILY_SMA_VALIDATE",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestIndicatorConfig:
    def test_defaults(self):
        cfg = IndicatorConfig()
        assert cfg.period == 5
        assert cfg.price_field is PriceField.CLOSE
        assert cfg.max_attempts == 5
        assert cfg.lookback_mode is LookbackMode.CALENDAR
        assert cfg.include_live_price is True

    @pytest.mark.parametrize("period", [0, -3, 1000])
    def test_period_out_of_range(self, period):
        with pytest.raises(DailySmaError) as exc_info:
            IndicatorConfig(period=period)
        assert exc_info.value.code == DailySmaErrorCode.INVALID_CONFIG

    def test_period_bounds_accepted(self):
        assert IndicatorConfig(period=1).period == 1
        assert IndicatorConfig(period=999).period == 999

    def test_bool_period_rejected(self):
        with pytest.raises(DailySmaError):
            IndicatorConfig(period=True)  # type: ignore[arg-type]

    def test_string_field_and_mode_normalized(self):
        cfg = IndicatorConfig(
            price_field="Typical",  # type: ignore[arg-type]
            lookback_mode="TRADING_DAYS",  # type: ignore[arg-type]
            symbol=" aapl ",
        )
        assert cfg.price_field is PriceField.TYPICAL
        assert cfg.lookback_mode is LookbackMode.TRADING_DAYS
        assert cfg.symbol == "AAPL"

    def test_unknown_field(self):
        with pytest.raises(DailySmaError):
            PriceField.parse("vwap")

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(DailySmaError):
            IndicatorConfig(max_attempts=0)


class TestFromEnv:
    def test_defaults_without_env(self):
        assert IndicatorConfig.from_env() == IndicatorConfig()

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("DAILY_SMA_PERIOD", "20")
        monkeypatch.setenv("DAILY_SMA_PRICE_FIELD", "weighted")
        monkeypatch.setenv("DAILY_SMA_SYMBOL", "msft")
        monkeypatch.setenv("DAILY_SMA_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("DAILY_SMA_LOOKBACK_MODE", "trading_days")
        monkeypatch.setenv("DAILY_SMA_INCLUDE_LIVE_PRICE", "false")
        monkeypatch.setenv("DAILY_SMA_VALIDATE", "0")

        cfg = IndicatorConfig.from_env()
        assert cfg.period == 20
        assert cfg.price_field is PriceField.WEIGHTED
        assert cfg.symbol == "MSFT"
        assert cfg.max_attempts == 3
        assert cfg.lookback_mode is LookbackMode.TRADING_DAYS
        assert cfg.include_live_price is False
        assert cfg.validate_window is False

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("DAILY_SMA_PERIOD", "five")
        with pytest.raises(DailySmaError) as exc_info:
            IndicatorConfig.from_env()
        assert exc_info.value.code == DailySmaErrorCode.INVALID_CONFIG

    def test_bad_boolean(self, monkeypatch):
        monkeypatch.setenv("DAILY_SMA_VALIDATE", "maybe")
        with pytest.raises(DailySmaError):
            IndicatorConfig.from_env()
