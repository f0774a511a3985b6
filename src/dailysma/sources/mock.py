"""Mock history source for testing and CI — no data files required."""

from __future__ import annotations

from collections import deque
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from dailysma.calendar import is_trading_day
from dailysma.config import PriceField
from dailysma.errors import DailySmaError, DailySmaErrorCode
from dailysma.models.bar import Bar
from dailysma.models.window import BarWindow
from dailysma.sources.base import BaseHistorySource


class MockHistorySource(BaseHistorySource):
    """In-memory source that returns configurable or synthetic daily bars.

    Use ``set_bars`` to pre-load a history, ``queue_response`` to script
    the next answers (a bar count, a bar list, ``None`` or an exception),
    and ``push_bar`` to close a new daily bar on every open window. Leave
    everything unset for synthetic weekday bars that skip NYSE holidays.

    Every request is recorded in ``requests`` and every window handed out
    in ``windows``.
    """

    def __init__(self, as_of: date | None = None) -> None:
        self.as_of = as_of or datetime.now(timezone.utc).date()
        self.requests: list[tuple[str, datetime, str]] = []
        self.windows: list[BarWindow] = []
        self._bars: dict[str, list[Bar | None]] = {}
        self._prices: dict[str, float] = {}
        self._responses: deque[Any] = deque()
        self._live: list[BarWindow] = []

    # --- Pre-load helpers ---

    def set_bars(self, symbol: str, bars: list[Bar | None]) -> None:
        self._bars[symbol.upper()] = list(bars)

    def set_price(self, symbol: str, price: float) -> None:
        self._prices[symbol.upper()] = price

    def queue_response(self, *responses: Any) -> None:
        """Script upcoming ``get_daily_bars`` answers, consumed in order.

        An ``int`` yields that many synthetic bars, a list yields those
        bars, ``None`` yields no window and an exception instance is raised.
        """
        self._responses.extend(responses)

    def push_bar(self, symbol: str, bar: Bar | None) -> None:
        """Close a new daily bar: stored history and open windows extend."""
        key = symbol.upper()
        self._bars.setdefault(key, []).append(bar)
        for window in self._live:
            if window.symbol == key:
                window.append(bar)

    @property
    def open_windows(self) -> list[BarWindow]:
        return list(self._live)

    # --- Source implementation ---

    def get_daily_bars(
        self,
        symbol: str,
        start: datetime,
        price_basis: str = "last",
    ) -> BarWindow | None:
        key = symbol.upper()
        self.requests.append((key, start, price_basis))

        if self._responses:
            response = self._responses.popleft()
            if isinstance(response, BaseException):
                raise response
            if response is None:
                return None
            if isinstance(response, int):
                bars = self._generate_bars(self.as_of - timedelta(days=response * 2 + 7))
                return self._open(key, bars[-response:] if response else [])
            return self._open(key, list(response))

        if key in self._bars:
            bars = [
                b for b in self._bars[key]
                if b is None or b.timestamp.date() >= start.date()
            ]
            return self._open(key, bars)
        if key.startswith("INVALID"):
            raise DailySmaError(
                f"Unknown symbol '{symbol}'",
                code=DailySmaErrorCode.SOURCE_FAILURE,
            )
        return self._open(key, self._generate_bars(start.date()))

    def get_current_price(self, symbol: str, field: PriceField) -> float:
        key = symbol.upper()
        if key in self._prices:
            return self._prices[key]
        bars = [b for b in self._bars.get(key, []) if b is not None]
        if bars:
            return bars[-1].price(field)
        return float("nan")

    def capabilities(self) -> set[str]:
        return {"daily_bars", "live_price"}

    # --- Window bookkeeping ---

    def _open(self, symbol: str, bars: list[Bar | None]) -> BarWindow:
        window = BarWindow(bars, symbol=symbol)
        self.windows.append(window)
        self._live.append(window)
        window.on_release(lambda: self._live.remove(window))
        return window

    # --- Synthetic data generation ---

    def _generate_bars(self, start: date) -> list[Bar]:
        """Generate one bar per trading day in [start, as_of)."""
        bars: list[Bar] = []
        current = start
        base_price = 100.0
        i = 0
        while current < self.as_of:
            if is_trading_day(current):
                o = base_price + i * 0.5
                bars.append(Bar(
                    timestamp=datetime.combine(current, time(0, 0), tzinfo=timezone.utc),
                    open=round(o, 2),
                    high=round(o + 1.5, 2),
                    low=round(o - 1.0, 2),
                    close=round(o + 0.5, 2),
                    volume=1_000_000.0 + i * 1000,
                ))
                i += 1
            current += timedelta(days=1)
        return bars
