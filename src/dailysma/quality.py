"""Data quality report for loaded daily windows.

The report is diagnostic only: the loader logs failed checks but never
rejects a window because of them. Corrupt samples are rejected later, per
update, by the average engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from dailysma.calendar import is_trading_day
from dailysma.models.bar import Bar
from dailysma.models.window import BarWindow


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def summary(self) -> str:
        return "; ".join(f"{c.name}: {c.message}" for c in self.failed_checks)


def _is_finite_number(val: object) -> bool:
    return isinstance(val, (int, float)) and not isinstance(val, bool) and math.isfinite(val)


def validate_window(window: BarWindow) -> ValidationResult:
    """Run all quality checks on a daily window.

    Checks:
        1. Not empty
        2. No null bars
        3. No missing or NaN/Inf OHLC values
        4. Timestamp ordering (strictly increasing days)
        5. OHLC consistency (high >= low, high >= open/close)
        6. Sessions (no bars dated on weekends/NYSE holidays)
    """
    result = ValidationResult()
    bars = window.chronological()

    # 1. Not empty
    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    # 2. Null bars
    nulls = sum(1 for b in bars if b is None)
    present: list[Bar] = [b for b in bars if b is not None]
    if nulls:
        result.checks.append(ValidationCheck("no_null_bars", False, f"{nulls} null bars"))
    else:
        result.checks.append(ValidationCheck("no_null_bars", True))

    # 3. Missing or NaN/Inf values
    bad_values = sum(
        1
        for b in present
        for val in (b.open, b.high, b.low, b.close)
        if not _is_finite_number(val)
    )
    if bad_values:
        result.checks.append(
            ValidationCheck("finite_prices", False, f"{bad_values} missing or NaN/Inf values")
        )
    else:
        result.checks.append(ValidationCheck("finite_prices", True))

    # 4. Timestamp ordering
    out_of_order = sum(
        1
        for prev, cur in zip(present, present[1:])
        if cur.timestamp.date() <= prev.timestamp.date()
    )
    if out_of_order:
        result.checks.append(
            ValidationCheck("timestamp_order", False, f"{out_of_order} out of order")
        )
    else:
        result.checks.append(ValidationCheck("timestamp_order", True))

    # 5. OHLC consistency (bars with unusable prices are counted in check 3)
    inconsistent = 0
    for b in present:
        if not all(_is_finite_number(v) for v in (b.open, b.high, b.low, b.close)):
            continue
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    # 6. Bars dated on closed days
    off_session = sum(1 for b in present if not is_trading_day(b.timestamp.date()))
    if off_session:
        result.checks.append(
            ValidationCheck("sessions", False, f"{off_session} bars on non-trading days")
        )
    else:
        result.checks.append(ValidationCheck("sessions", True))

    return result
