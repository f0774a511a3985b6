"""Tests for Bar and BarWindow."""

from datetime import date

import pytest

from conftest import daily_bars, make_bar
from dailysma.config import PriceField
from dailysma.errors import DailySmaError, DailySmaErrorCode
from dailysma.models.window import BarWindow


class TestBar:
    def test_derived_prices(self):
        bar = make_bar(date(2024, 1, 16), close=10.0, high=12.0, low=6.0)
        assert bar.typical == pytest.approx((12.0 + 6.0 + 10.0) / 3)
        assert bar.median == pytest.approx(9.0)
        assert bar.weighted == pytest.approx((12.0 + 6.0 + 20.0) / 4)

    @pytest.mark.parametrize(
        "field,expected",
        [
            (PriceField.CLOSE, 10.0),
            (PriceField.OPEN, 9.0),
            (PriceField.HIGH, 12.0),
            (PriceField.LOW, 6.0),
            (PriceField.MEDIAN, 9.0),
        ],
    )
    def test_price_extraction(self, field, expected):
        bar = make_bar(date(2024, 1, 16), close=10.0, open=9.0, high=12.0, low=6.0)
        assert bar.price(field) == pytest.approx(expected)

    def test_frozen(self):
        bar = make_bar(date(2024, 1, 16), close=10.0)
        with pytest.raises(AttributeError):
            bar.close = 11.0  # type: ignore[misc]


class TestBarWindow:
    def test_newest_first(self):
        window = BarWindow(daily_bars([1.0, 2.0, 3.0]), symbol="spy")
        assert window.symbol == "SPY"
        assert window.count == 3
        assert len(window) == 3
        assert window[0].close == 3.0
        assert window[2].close == 1.0
        assert [b.close for b in window] == [3.0, 2.0, 1.0]

    def test_append_shifts_offsets(self):
        window = BarWindow(daily_bars([1.0, 2.0]))
        window.append(make_bar(date(2024, 1, 19), close=5.0))
        assert window.count == 3
        assert window[0].close == 5.0
        assert window[1].close == 2.0

    def test_null_slot(self):
        bars = daily_bars([1.0, 2.0])
        window = BarWindow([bars[0], None, bars[1]])
        assert window[1] is None

    def test_out_of_range(self):
        window = BarWindow(daily_bars([1.0]))
        with pytest.raises(IndexError):
            window[1]
        with pytest.raises(IndexError):
            window[-1]

    def test_release_is_idempotent(self):
        calls = []
        window = BarWindow(daily_bars([1.0, 2.0]))
        window.on_release(lambda: calls.append("released"))
        window.release()
        window.release()
        assert window.released
        assert calls == ["released"]

    def test_released_window_rejects_reads(self):
        window = BarWindow(daily_bars([1.0]))
        window.release()
        with pytest.raises(DailySmaError) as exc_info:
            window.count
        assert exc_info.value.code == DailySmaErrorCode.RELEASED

    def test_context_manager_releases(self):
        with BarWindow(daily_bars([1.0])) as window:
            assert window.count == 1
        assert window.released

    def test_failing_hook_does_not_skip_others(self):
        calls = []

        def failing_hook():
            raise RuntimeError("unsubscribe failed")

        window = BarWindow(daily_bars([1.0]))
        window.on_release(failing_hook)
        window.on_release(lambda: calls.append("second"))
        with pytest.raises(RuntimeError, match="unsubscribe failed"):
            window.release()
        assert calls == ["second"]
        assert window.released
        window.release()
        assert calls == ["second"]

    def test_empty_window(self):
        assert daily_bars([]) == []
        assert BarWindow(daily_bars([])).count == 0
