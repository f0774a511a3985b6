"""DailySmaIndicator — host-facing lifecycle around the loader and engine."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from dailysma.config import IndicatorConfig, PriceField
from dailysma.engine import ComputeResult, compute_average
from dailysma.loader import LoadResult, LookbackWindowLoader
from dailysma.models.bar import Bar
from dailysma.models.window import BarWindow
from dailysma.quality import validate_window
from dailysma.sources.base import BaseHistorySource

logger = logging.getLogger(__name__)


class IndicatorState(Enum):
    """Readiness of a DailySmaIndicator."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class BarCloseEvent:
    """A bar closed on the consuming (intraday) timeframe.

    Attributes:
        timestamp: Close time of the intraday bar.
        bar: The intraday bar that just closed, used as the live price
            sample when no live price provider is configured.
    """

    timestamp: datetime
    bar: Bar | None = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DailySmaIndicator:
    """Daily SMA displayed on an intraday chart.

    Usage::

        indicator = DailySmaIndicator(source, publish=chart.set_value)
        indicator.initialize(IndicatorConfig(period=20))
        ...
        indicator.on_bar_close(BarCloseEvent(ts, bar))   # per intraday bar
        ...
        indicator.teardown()

    Nothing raised by the source, the engine or the publisher escapes
    ``initialize``, ``on_bar_close`` or ``teardown``; failures are logged
    and end in ``FAILED`` (initialization) or a skipped update.
    """

    def __init__(
        self,
        source: BaseHistorySource,
        publish: Callable[[float], None] | None = None,
        config: IndicatorConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
        live_price: Callable[[PriceField], float] | None = None,
    ) -> None:
        self.source = source
        self.config = config or IndicatorConfig()
        self.clock = clock
        self.live_price = live_price
        self._publish = publish
        self._window: BarWindow | None = None
        self._state = IndicatorState.UNINITIALIZED
        self.value: float | None = None
        self.last_load: LoadResult | None = None
        self.last_compute: ComputeResult | None = None

    @property
    def state(self) -> IndicatorState:
        return self._state

    @property
    def name(self) -> str:
        return f"Daily SMA ({self.config.period})"

    @property
    def window(self) -> BarWindow | None:
        return self._window

    # --- Lifecycle ---

    def initialize(self, config: IndicatorConfig | None = None) -> IndicatorState:
        """Load the daily window. Returns READY or FAILED."""
        if self._state is not IndicatorState.UNINITIALIZED:
            self.teardown()
        if config is not None:
            self.config = config

        cfg = self.config
        loader = LookbackWindowLoader(
            self.source,
            cfg.symbol,
            max_attempts=cfg.max_attempts,
            lookback_mode=cfg.lookback_mode,
        )
        try:
            result = loader.load(cfg.period, self.clock())
        except Exception:  # noqa: BLE001
            logger.exception("%s: unexpected error while loading %s", self.name, cfg.symbol)
            self._state = IndicatorState.FAILED
            return self._state

        self.last_load = result
        if result.error is not None or result.window is None:
            logger.error("%s: initialization failed: %s", self.name, result.error)
            self._state = IndicatorState.FAILED
            return self._state

        self._window = result.window
        if cfg.validate_window:
            self._report_quality()
        self._state = IndicatorState.READY
        logger.info("%s ready for %s", self.name, cfg.symbol)
        return self._state

    def on_bar_close(self, event: BarCloseEvent) -> None:
        """Recompute and publish; a no-op unless READY."""
        if self._state is not IndicatorState.READY:
            return
        cfg = self.config
        try:
            price = self._current_price(event) if cfg.include_live_price else math.nan
            result = compute_average(
                self._window,
                cfg.period,
                cfg.price_field,
                price,
                include_live_price=cfg.include_live_price,
            )
        except Exception:  # noqa: BLE001
            logger.exception("%s: update at %s failed", self.name, event.timestamp)
            return

        self.last_compute = result
        if result.error is not None:
            logger.warning(
                "%s: skipped update at %s (%s): %s",
                self.name, event.timestamp, result.error.code.value, result.error.message,
            )
            return

        self.value = result.value
        if self._publish is None:
            return
        try:
            self._publish(result.value)
        except Exception:  # noqa: BLE001
            logger.exception("%s: publisher rejected %.6f", self.name, result.value)

    def teardown(self) -> None:
        """Release the window and return to UNINITIALIZED. Safe to repeat."""
        window, self._window = self._window, None
        if window is not None:
            try:
                window.release()
            except Exception:  # noqa: BLE001
                logger.exception("%s: failed to release daily window", self.name)
        self._state = IndicatorState.UNINITIALIZED
        self.value = None

    # --- Helpers ---

    def _current_price(self, event: BarCloseEvent) -> float:
        field = self.config.price_field
        if self.live_price is not None:
            return self.live_price(field)
        if event.bar is not None:
            return event.bar.price(field)
        if "live_price" in self.source.capabilities():
            return self.source.get_current_price(self.config.symbol, field)
        return math.nan

    def _report_quality(self) -> None:
        try:
            report = validate_window(self._window)
        except Exception:  # noqa: BLE001
            logger.exception("%s: quality check failed", self.name)
            return
        if not report.passed:
            logger.warning("%s: daily data quality issues: %s", self.name, report.summary())
