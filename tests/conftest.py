"""Shared fixtures for dailysma tests."""

from __future__ import annotations

import sys
from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from dailysma.calendar import get_trading_dates
from dailysma.models.bar import Bar
from dailysma.sources.mock import MockHistorySource

# Friday after MLK Day 2024; the last closed daily bar is Thu Jan 18.
AS_OF = date(2024, 1, 19)
NOW = datetime(2024, 1, 19, 15, 0, tzinfo=timezone.utc)


def make_bar(day: date, close: float, **kwargs) -> Bar:
    defaults = dict(
        timestamp=datetime.combine(day, time(0, 0), tzinfo=timezone.utc),
        open=close,
        high=close + 1.0,
        low=close - 1.0,
        close=close,
        volume=1_000_000.0,
    )
    defaults.update(kwargs)
    return Bar(**defaults)


def daily_bars(closes: list[float], last_day: date = date(2024, 1, 18)) -> list[Bar]:
    """Bars on consecutive trading days (oldest first) ending on ``last_day``."""
    if not closes:
        return []
    days = get_trading_dates(date(2022, 1, 1), last_day)[-len(closes):]
    return [make_bar(d, c) for d, c in zip(days, closes)]


@pytest.fixture
def mock_source() -> MockHistorySource:
    return MockHistorySource(as_of=AS_OF)


@pytest.fixture
def now() -> datetime:
    return NOW
