"""Abstract base class for daily history sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from dailysma.config import PriceField
from dailysma.models.window import BarWindow


class BaseHistorySource(ABC):
    """Abstract base for all daily history sources.

    Subclasses must implement ``get_daily_bars``. The live price endpoint
    defaults to ``NotImplementedError``; sources that support it advertise
    ``live_price`` via ``capabilities()``.
    """

    # --- Historical bars (required) ---

    @abstractmethod
    def get_daily_bars(
        self,
        symbol: str,
        start: datetime,
        price_basis: str = "last",
    ) -> BarWindow | None:
        """Open an auto-extending window of daily bars from ``start`` onward.

        Args:
            symbol: Ticker symbol.
            start: Earliest day to include.
            price_basis: Quote basis the bars are built from ("last",
                "bid", "ask", "mark").

        Returns:
            A BarWindow (newest-first), or None when the source has nothing
            to offer. Source-level failures raise ``DailySmaError``.
        """
        ...

    # --- Real-time ---

    def get_current_price(self, symbol: str, field: PriceField) -> float:
        """Live price sample for ``field``; NaN when temporarily unavailable."""
        raise NotImplementedError

    # --- Capabilities ---

    def capabilities(self) -> set[str]:
        """Return the set of supported features.

        Possible values: ``daily_bars``, ``live_price``.
        """
        return {"daily_bars"}
