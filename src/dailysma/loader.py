"""Lookback window loader — backfills daily history until N bars are available."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from dailysma.calendar import exchange_date, trading_days_back
from dailysma.config import DEFAULT_MAX_ATTEMPTS, LookbackMode
from dailysma.errors import DailySmaErrorCode
from dailysma.models.window import BarWindow
from dailysma.sources.base import BaseHistorySource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadError:
    """Why a load ended without a usable window.

    Attributes:
        code: INVALID_CONFIG, SOURCE_FAILURE or INSUFFICIENT_DATA.
        message: Human-readable description.
        have: Bars returned by the last request (INSUFFICIENT_DATA).
        need: Bars required.
        attempts: Requests issued before giving up.
    """

    code: DailySmaErrorCode
    message: str
    have: int = 0
    need: int = 0
    attempts: int = 0


@dataclass
class LoadResult:
    """Outcome of ``LookbackWindowLoader.load``."""

    window: BarWindow | None = None
    error: LoadError | None = None
    attempts: int = 0
    calendar_days_back: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.window is not None


class LookbackWindowLoader:
    """Request daily bars, widening the lookback until ``period`` bars arrive.

    The lookback starts at ``period`` calendar days (or the NYSE trading-day
    estimate in ``TRADING_DAYS`` mode). After each short answer it grows by
    exactly the number of missing bars. A source failure stops the load
    immediately; running out of attempts ends with INSUFFICIENT_DATA.
    Superseded windows are released before the next request.
    """

    def __init__(
        self,
        source: BaseHistorySource,
        symbol: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        lookback_mode: LookbackMode = LookbackMode.CALENDAR,
        price_basis: str = "last",
    ) -> None:
        self.source = source
        self.symbol = symbol.upper()
        self.max_attempts = max_attempts
        self.lookback_mode = lookback_mode
        self.price_basis = price_basis

    def initial_days_back(self, period: int, now: datetime) -> int:
        if self.lookback_mode is LookbackMode.TRADING_DAYS:
            return trading_days_back(exchange_date(now), period)
        return period

    def load(self, period: int, now: datetime) -> LoadResult:
        if period <= 0:
            logger.error("Refusing to load %s: period must be positive, got %d", self.symbol, period)
            return LoadResult(error=LoadError(
                DailySmaErrorCode.INVALID_CONFIG,
                f"period must be positive, got {period}",
                need=period,
            ))

        days_back = self.initial_days_back(period, now)
        have = 0

        for attempt in range(1, self.max_attempts + 1):
            start = now - timedelta(days=days_back)
            logger.debug(
                "Requesting daily bars for %s since %s (attempt %d/%d, %d days back)",
                self.symbol, start.date(), attempt, self.max_attempts, days_back,
            )

            try:
                window = self.source.get_daily_bars(self.symbol, start, self.price_basis)
                count = None if window is None else window.count
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "History request for %s failed on attempt %d: %s",
                    self.symbol, attempt, exc,
                )
                return LoadResult(
                    error=LoadError(
                        DailySmaErrorCode.SOURCE_FAILURE,
                        f"History request failed: {exc}",
                        need=period,
                        attempts=attempt,
                    ),
                    attempts=attempt,
                    calendar_days_back=days_back,
                )

            if window is None:
                logger.error("History source returned no window for %s on attempt %d", self.symbol, attempt)
                return LoadResult(
                    error=LoadError(
                        DailySmaErrorCode.SOURCE_FAILURE,
                        "History source returned no data",
                        need=period,
                        attempts=attempt,
                    ),
                    attempts=attempt,
                    calendar_days_back=days_back,
                )

            have = count
            if have >= period:
                logger.info(
                    "Loaded %d daily bars for %s after %d attempt(s)",
                    have, self.symbol, attempt,
                )
                return LoadResult(window=window, attempts=attempt, calendar_days_back=days_back)

            shortfall = period - have
            try:
                window.release()
            except Exception:  # noqa: BLE001
                logger.exception("Failed to release partial window for %s", self.symbol)
            logger.info(
                "Only %d of %d daily bars for %s; widening lookback by %d days",
                have, period, self.symbol, shortfall,
            )
            days_back += shortfall

        logger.warning(
            "Gave up loading %s: %d of %d daily bars after %d attempts",
            self.symbol, have, period, self.max_attempts,
        )
        return LoadResult(
            error=LoadError(
                DailySmaErrorCode.INSUFFICIENT_DATA,
                f"Only {have} of {period} daily bars after {self.max_attempts} attempts",
                have=have,
                need=period,
                attempts=self.max_attempts,
            ),
            attempts=self.max_attempts,
            calendar_days_back=days_back,
        )
