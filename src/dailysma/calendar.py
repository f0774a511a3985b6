"""NYSE trading calendar used to estimate how far back a daily lookback reaches.

No external dependencies — uses hardcoded holiday rules for NYSE.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

EXCHANGE_TZ = ZoneInfo("America/New_York")


def _observed(d: date) -> date:
    """Shift a fixed-date holiday off the weekend (Sat -> Fri, Sun -> Mon)."""
    if d.weekday() == 5:
        return d - timedelta(days=1)
    if d.weekday() == 6:
        return d + timedelta(days=1)
    return d


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Get the nth occurrence of a weekday in a month (1-indexed)."""
    first = date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    return first + timedelta(days=delta, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> date:
    """Get the last occurrence of a weekday in a month."""
    next_month = date(year + month // 12, month % 12 + 1, 1)
    last_day = next_month - timedelta(days=1)
    return last_day - timedelta(days=(last_day.weekday() - weekday) % 7)


def _easter(year: int) -> date:
    """Western Easter Sunday (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


@lru_cache(maxsize=64)
def nyse_holidays(year: int) -> frozenset[date]:
    """All NYSE full-day closures for a given year."""
    holidays = {
        _nth_weekday(year, 1, 0, 3),    # Martin Luther King Jr. Day
        _nth_weekday(year, 2, 0, 3),    # Washington's Birthday
        _easter(year) - timedelta(days=2),  # Good Friday
        _last_weekday(year, 5, 0),      # Memorial Day
        _observed(date(year, 7, 4)),
        _nth_weekday(year, 9, 0, 1),    # Labor Day
        _nth_weekday(year, 11, 3, 4),   # Thanksgiving
        _observed(date(year, 12, 25)),
    }
    # New Year's Day falling on Saturday is not observed on Dec 31
    new_year = date(year, 1, 1)
    if new_year.weekday() != 5:
        holidays.add(_observed(new_year))
    if year >= 2022:
        holidays.add(_observed(date(year, 6, 19)))
    return frozenset(holidays)


def is_holiday(d: date) -> bool:
    """Check if a date is an NYSE holiday."""
    return d in nyse_holidays(d.year)


def is_trading_day(d: date) -> bool:
    """Check if a date is a trading day (weekday and not a holiday)."""
    return d.weekday() < 5 and not is_holiday(d)


def get_trading_dates(start: date, end: date) -> list[date]:
    """Return all trading dates in the range [start, end]."""
    dates: list[date] = []
    current = start
    while current <= end:
        if is_trading_day(current):
            dates.append(current)
        current += timedelta(days=1)
    return dates


def exchange_date(dt: datetime) -> date:
    """Calendar date of ``dt`` on the exchange clock (naive = UTC)."""
    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone(EXCHANGE_TZ).date()


def trading_days_back(end: date, trading_days: int) -> int:
    """Calendar days between ``end`` and the day before the earliest of
    ``trading_days`` trading days counted backwards from ``end`` inclusive.

    Mirrors walking the calendar one day at a time until enough sessions
    have been seen, so the returned distance always covers the sessions.
    """
    if trading_days <= 0:
        return 0
    current = end
    found = 0
    while found < trading_days:
        if is_trading_day(current):
            found += 1
        current -= timedelta(days=1)
    return (end - current).days
