"""Parquet-backed daily history source.

Storage layout: ``{base_path}/{SYMBOL}/1day.parquet``
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from dailysma.errors import DailySmaError, DailySmaErrorCode
from dailysma.models.bar import Bar
from dailysma.models.window import BarWindow
from dailysma.sources.base import BaseHistorySource

logger = logging.getLogger(__name__)


class ParquetHistorySource(BaseHistorySource):
    """Serve daily bars from Parquet files written by ``store_bars``.

    Windows are snapshots of the file at request time; ``append_bar``
    writes a newly closed bar to disk and extends every open window for
    that symbol.
    """

    def __init__(self, base_path: Path | str) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._live: list[BarWindow] = []

    def _file_path(self, symbol: str) -> Path:
        return self.base_path / symbol.upper() / "1day.parquet"

    def has_data(self, symbol: str) -> bool:
        return self._file_path(symbol).exists()

    def store_bars(self, symbol: str, bars: list[Bar]) -> None:
        """Replace the stored history for ``symbol``."""
        if not bars:
            return
        fp = self._file_path(symbol)
        fp.parent.mkdir(parents=True, exist_ok=True)
        df = self._bars_to_df(bars)
        df.to_parquet(fp, compression="snappy")

    def append_bar(self, symbol: str, bar: Bar) -> None:
        """Persist a newly closed daily bar and push it to open windows."""
        existing = self._read(symbol) if self.has_data(symbol) else []
        self.store_bars(symbol, existing + [bar])
        key = symbol.upper()
        for window in self._live:
            if window.symbol == key:
                window.append(bar)

    def get_daily_bars(
        self,
        symbol: str,
        start: datetime,
        price_basis: str = "last",
    ) -> BarWindow | None:
        if price_basis != "last":
            raise DailySmaError(
                f"Parquet history only stores 'last' bars, got '{price_basis}'",
                code=DailySmaErrorCode.SOURCE_FAILURE,
            )
        if not self.has_data(symbol):
            raise DailySmaError(
                f"No daily history stored for '{symbol}'",
                code=DailySmaErrorCode.SOURCE_FAILURE,
            )
        bars = [b for b in self._read(symbol) if b.timestamp.date() >= start.date()]
        logger.debug("Read %d daily bars for %s since %s", len(bars), symbol, start.date())

        window = BarWindow(bars, symbol=symbol)
        self._live.append(window)
        window.on_release(lambda: self._live.remove(window))
        return window

    def _read(self, symbol: str) -> list[Bar]:
        fp = self._file_path(symbol)
        try:
            df = pd.read_parquet(fp)
        except Exception as exc:  # noqa: BLE001
            raise DailySmaError(
                f"Failed to read {fp}: {exc}",
                code=DailySmaErrorCode.SOURCE_FAILURE,
            ) from exc
        return self._df_to_bars(df.sort_values("timestamp"))

    # ---- helpers ----

    @staticmethod
    def _bars_to_df(bars: list[Bar]) -> pd.DataFrame:
        records = [
            {
                "timestamp": b.timestamp,
                "open": b.open,
                "high": b.high,
                "low": b.low,
                "close": b.close,
                "volume": b.volume,
            }
            for b in bars
        ]
        return pd.DataFrame(records)

    @staticmethod
    def _df_to_bars(df: pd.DataFrame) -> list[Bar]:
        bars: list[Bar] = []
        for _, row in df.iterrows():
            bars.append(Bar(
                timestamp=pd.Timestamp(row["timestamp"]).to_pydatetime(),
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=float(row["volume"]) if pd.notna(row.get("volume")) else 0.0,
            ))
        return bars
