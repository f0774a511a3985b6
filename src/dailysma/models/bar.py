"""Bar (OHLCV) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from dailysma.config import PriceField


@dataclass(frozen=True)
class Bar:
    """Single daily price bar.

    Attributes:
        timestamp: Trading day the bar covers (start of period).
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
    """

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @property
    def typical(self) -> float:
        """(H + L + C) / 3."""
        return (self.high + self.low + self.close) / 3

    @property
    def median(self) -> float:
        """(H + L) / 2."""
        return (self.high + self.low) / 2

    @property
    def weighted(self) -> float:
        """(H + L + 2C) / 4."""
        return (self.high + self.low + 2 * self.close) / 4

    def price(self, field: PriceField) -> float:
        """Extract the value of ``field`` from this bar."""
        return getattr(self, field.value)
