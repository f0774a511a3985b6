"""Rolling average engine — the daily SMA as if today's bar closed now."""

from __future__ import annotations

import math
from dataclasses import dataclass

from dailysma.config import PriceField
from dailysma.errors import DailySmaErrorCode
from dailysma.models.window import BarWindow

LIVE_OFFSET = 0


@dataclass(frozen=True)
class ComputeError:
    """Why an update produced no value.

    Attributes:
        code: INSUFFICIENT_WINDOW, INVALID_SAMPLE or INVALID_RESULT.
        message: Human-readable description.
        offset: Window offset of the bad sample (0 is the live price when
            it is included).
    """

    code: DailySmaErrorCode
    message: str
    offset: int | None = None


@dataclass(frozen=True)
class ComputeResult:
    """Outcome of ``compute_average``."""

    value: float | None = None
    error: ComputeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_finite_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _invalid_sample(offset: int, detail: str) -> ComputeResult:
    return ComputeResult(error=ComputeError(
        DailySmaErrorCode.INVALID_SAMPLE,
        f"Sample at offset {offset} is {detail}",
        offset=offset,
    ))


def compute_average(
    window: BarWindow | None,
    period: int,
    field: PriceField,
    current_price: float,
    include_live_price: bool = True,
) -> ComputeResult:
    """Average ``field`` over the newest ``period`` samples.

    With ``include_live_price`` the newest term is ``current_price`` and the
    remaining ``period - 1`` terms come from window offsets ``1..period-1``.
    Without it the terms are offsets ``0..period-1`` and ``current_price``
    is ignored.

    A single null, missing or non-finite sample rejects the whole update.
    The window is only read, so repeated calls on the same inputs agree.
    """
    if window is None or period <= 0 or window.count < period:
        have = 0 if window is None else window.count
        return ComputeResult(error=ComputeError(
            DailySmaErrorCode.INSUFFICIENT_WINDOW,
            f"Window holds {have} bars, need {period}",
        ))

    total = 0.0
    first = 0
    if include_live_price:
        if not _is_finite_number(current_price):
            return _invalid_sample(LIVE_OFFSET, f"live price {current_price!r}")
        total = current_price
        first = 1

    for offset in range(first, period):
        bar = window[offset]
        if bar is None:
            return _invalid_sample(offset, "a null bar")
        try:
            value = bar.price(field)
        except TypeError:
            # a derived field over a missing OHLC value
            return _invalid_sample(offset, f"{field.value} over missing prices")
        if not _is_finite_number(value):
            return _invalid_sample(offset, f"{field.value}={value!r}")
        total += value

    average = total / period
    if not math.isfinite(average):
        return ComputeResult(error=ComputeError(
            DailySmaErrorCode.INVALID_RESULT,
            f"Average over {period} samples is {average!r}",
        ))
    return ComputeResult(value=average)
