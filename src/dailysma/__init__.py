"""dailysma — Daily simple moving average for intraday charts.

Loads a self-healing window of daily bars (widening the lookback when
holidays or thin history leave it short) and recomputes the SMA of a chosen
price field on every intraday bar close.

Quick start::

    from dailysma import create_indicator_from_env
    indicator = create_indicator_from_env(publish=print)
    indicator.initialize()
    indicator.on_bar_close(BarCloseEvent(ts, intraday_bar))
"""

from __future__ import annotations

import os
from collections.abc import Callable

from dailysma.calendar import get_trading_dates, is_holiday, is_trading_day
from dailysma.config import IndicatorConfig, LookbackMode, PriceField
from dailysma.engine import ComputeError, ComputeResult, compute_average
from dailysma.errors import DailySmaError, DailySmaErrorCode
from dailysma.indicator import BarCloseEvent, DailySmaIndicator, IndicatorState
from dailysma.loader import LoadError, LoadResult, LookbackWindowLoader
from dailysma.models.bar import Bar
from dailysma.models.window import BarWindow
from dailysma.quality import ValidationCheck, ValidationResult, validate_window
from dailysma.sources import BaseHistorySource, create_source

__version__ = "0.1.0"

__all__ = [
    # Indicator
    "DailySmaIndicator",
    "IndicatorState",
    "BarCloseEvent",
    "create_indicator_from_env",
    # Core
    "LookbackWindowLoader",
    "LoadResult",
    "LoadError",
    "compute_average",
    "ComputeResult",
    "ComputeError",
    # Config
    "IndicatorConfig",
    "PriceField",
    "LookbackMode",
    # Errors
    "DailySmaError",
    "DailySmaErrorCode",
    # Models
    "Bar",
    "BarWindow",
    # Sources
    "BaseHistorySource",
    "create_source",
    # Quality and calendar utilities
    "ValidationCheck",
    "ValidationResult",
    "validate_window",
    "is_holiday",
    "is_trading_day",
    "get_trading_dates",
]


def create_indicator_from_env(
    publish: Callable[[float], None] | None = None,
) -> DailySmaIndicator:
    """Zero-config factory — reads the source and parameters from env vars.

    Environment variables:
        DAILY_SMA_SOURCE: History source — "parquet" or "mock" (default: "parquet").
        DAILY_SMA_DATA_DIR: Parquet directory (default: "data/daily").
        DAILY_SMA_*: Indicator parameters, see ``IndicatorConfig.from_env``.
    """
    source_name = os.getenv("DAILY_SMA_SOURCE", "parquet").strip().lower()
    kwargs = {}
    if source_name == "parquet":
        kwargs["base_path"] = os.getenv("DAILY_SMA_DATA_DIR", "data/daily")

    return DailySmaIndicator(
        create_source(source_name, **kwargs),
        publish=publish,
        config=IndicatorConfig.from_env(),
    )
