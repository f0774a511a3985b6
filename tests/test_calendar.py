"""Tests for the NYSE trading calendar."""

from datetime import date, datetime, timezone

from dailysma.calendar import (
    exchange_date,
    get_trading_dates,
    is_holiday,
    is_trading_day,
    trading_days_back,
)


class TestIsHoliday:
    def test_2024_holidays(self):
        for d in (
            date(2024, 1, 1),
            date(2024, 1, 15),   # MLK
            date(2024, 2, 19),   # Presidents
            date(2024, 3, 29),   # Good Friday
            date(2024, 5, 27),   # Memorial
            date(2024, 6, 19),   # Juneteenth
            date(2024, 7, 4),
            date(2024, 9, 2),    # Labor
            date(2024, 11, 28),  # Thanksgiving
            date(2024, 12, 25),
        ):
            assert is_holiday(d), d

    def test_regular_day(self):
        assert not is_holiday(date(2024, 1, 16))

    def test_sunday_holiday_observed_monday(self):
        assert is_holiday(date(2021, 7, 5))
        assert is_holiday(date(2022, 12, 26))
        assert is_holiday(date(2023, 1, 2))

    def test_saturday_holiday_observed_friday(self):
        assert is_holiday(date(2020, 7, 3))

    def test_saturday_new_year_not_observed(self):
        assert is_trading_day(date(2021, 12, 31))

    def test_juneteenth_before_2022(self):
        assert not is_holiday(date(2021, 6, 18))


class TestTradingDays:
    def test_weekend(self):
        assert not is_trading_day(date(2024, 1, 13))
        assert not is_trading_day(date(2024, 1, 14))

    def test_week_with_holiday(self):
        dates = get_trading_dates(date(2024, 1, 15), date(2024, 1, 19))
        assert dates == [date(2024, 1, d) for d in (16, 17, 18, 19)]

    def test_days_back_across_holiday_weekend(self):
        # Fri..Tue, then skip MLK Monday and the weekend to Fri Jan 12
        assert trading_days_back(date(2024, 1, 19), 5) == 8

    def test_days_back_single_session(self):
        assert trading_days_back(date(2024, 1, 17), 1) == 1

    def test_days_back_zero(self):
        assert trading_days_back(date(2024, 1, 17), 0) == 0

    def test_exchange_date_converts_utc(self):
        late_utc = datetime(2024, 1, 17, 2, 0, tzinfo=timezone.utc)
        assert exchange_date(late_utc) == date(2024, 1, 16)
        assert exchange_date(datetime(2024, 1, 17, 2, 0)) == date(2024, 1, 17)
