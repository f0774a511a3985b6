"""Indicator configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from dailysma.errors import DailySmaError, DailySmaErrorCode

MIN_PERIOD = 1
MAX_PERIOD = 999
DEFAULT_MAX_ATTEMPTS = 5


class PriceField(Enum):
    """Price fields a bar can be averaged on."""

    CLOSE = "close"
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    TYPICAL = "typical"
    MEDIAN = "median"
    WEIGHTED = "weighted"

    @classmethod
    def parse(cls, raw: str | PriceField) -> PriceField:
        """Resolve a field from its value or name, case-insensitively."""
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise DailySmaError(
            f"Unknown price field '{raw}'. "
            f"Supported: {', '.join(m.value for m in cls)}",
            code=DailySmaErrorCode.INVALID_CONFIG,
        )


class LookbackMode(Enum):
    """How the loader picks its first start date."""

    CALENDAR = "calendar"
    TRADING_DAYS = "trading_days"


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    key = raw.strip().lower()
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise DailySmaError(
        f"{name} must be a boolean, got '{raw}'",
        code=DailySmaErrorCode.INVALID_CONFIG,
    )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise DailySmaError(
            f"{name} must be an integer, got '{raw}'",
            code=DailySmaErrorCode.INVALID_CONFIG,
        ) from None


@dataclass(frozen=True)
class IndicatorConfig:
    """Configuration for one DailySmaIndicator instance.

    Immutable for the lifetime of the instance; a parameter change is a
    teardown followed by a fresh ``initialize``.

    Attributes:
        period: Number of daily samples to average (1..999).
        price_field: Bar field averaged on every update.
        symbol: Instrument whose daily history is requested.
        max_attempts: Upper bound on history requests during a load.
        lookback_mode: First start-date estimate (calendar days or NYSE
            trading days).
        include_live_price: Use the live price as the newest term. When
            False the average covers the ``period`` most recent closed bars.
        validate_window: Log a quality report for the loaded window.
    """

    period: int = 5
    price_field: PriceField = PriceField.CLOSE
    symbol: str = "SPY"
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    lookback_mode: LookbackMode = LookbackMode.CALENDAR
    include_live_price: bool = True
    validate_window: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise DailySmaError(
                f"period must be an integer, got {self.period!r}",
                code=DailySmaErrorCode.INVALID_CONFIG,
            )
        if not MIN_PERIOD <= self.period <= MAX_PERIOD:
            raise DailySmaError(
                f"period must be within {MIN_PERIOD}..{MAX_PERIOD}, got {self.period}",
                code=DailySmaErrorCode.INVALID_CONFIG,
            )
        if self.max_attempts < 1:
            raise DailySmaError(
                f"max_attempts must be >= 1, got {self.max_attempts}",
                code=DailySmaErrorCode.INVALID_CONFIG,
            )
        if not self.symbol or not self.symbol.strip():
            raise DailySmaError(
                "symbol must not be empty",
                code=DailySmaErrorCode.INVALID_CONFIG,
            )
        object.__setattr__(self, "price_field", PriceField.parse(self.price_field))
        object.__setattr__(self, "symbol", self.symbol.strip().upper())
        if not isinstance(self.lookback_mode, LookbackMode):
            try:
                mode = LookbackMode(str(self.lookback_mode).strip().lower())
            except ValueError:
                raise DailySmaError(
                    f"Unknown lookback mode '{self.lookback_mode}'",
                    code=DailySmaErrorCode.INVALID_CONFIG,
                ) from None
            object.__setattr__(self, "lookback_mode", mode)

    @classmethod
    def from_env(cls) -> IndicatorConfig:
        """Build a config from environment variables.

        Environment variables:
            DAILY_SMA_PERIOD: Averaging period (default: 5).
            DAILY_SMA_PRICE_FIELD: close, open, high, low, typical, median,
                weighted (default: close).
            DAILY_SMA_SYMBOL: Instrument symbol (default: "SPY").
            DAILY_SMA_MAX_ATTEMPTS: Load attempts (default: 5).
            DAILY_SMA_LOOKBACK_MODE: "calendar" or "trading_days"
                (default: "calendar").
            DAILY_SMA_INCLUDE_LIVE_PRICE: Live price as newest term
                (default: true).
            DAILY_SMA_VALIDATE: Log a quality report after load (default: true).
        """
        return cls(
            period=_env_int("DAILY_SMA_PERIOD", 5),
            price_field=PriceField.parse(os.getenv("DAILY_SMA_PRICE_FIELD", "close")),
            symbol=os.getenv("DAILY_SMA_SYMBOL", "SPY"),
            max_attempts=_env_int("DAILY_SMA_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            lookback_mode=os.getenv("DAILY_SMA_LOOKBACK_MODE", "calendar"),  # type: ignore[arg-type]
            include_live_price=_env_bool("DAILY_SMA_INCLUDE_LIVE_PRICE", True),
            validate_window=_env_bool("DAILY_SMA_VALIDATE", True),
        )
