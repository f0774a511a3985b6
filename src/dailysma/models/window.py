"""Newest-first window over a daily bar series."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from dailysma.errors import DailySmaError, DailySmaErrorCode
from dailysma.models.bar import Bar


class BarWindow:
    """Ordered daily bars indexed newest-first.

    ``window[0]`` is the most recent bar. Bars are kept in chronological
    order internally, so ``append`` of a newly closed bar shifts every
    existing offset by one. A slot may hold ``None`` when the source
    delivered a null bar.

    The window stands for a live history subscription: ``release`` drops
    the bars and ``on_release`` hooks registered by the source run once.
    Reading a released window raises ``DailySmaError``.
    """

    def __init__(self, bars: Iterable[Bar | None] = (), symbol: str = "") -> None:
        self.symbol = symbol.upper()
        self._bars: list[Bar | None] = list(bars)
        self._released = False
        self._release_hooks: list[Callable[[], None]] = []

    # --- Sequence access ---

    @property
    def count(self) -> int:
        self._check_open()
        return len(self._bars)

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, offset: int) -> Bar | None:
        self._check_open()
        if offset < 0 or offset >= len(self._bars):
            raise IndexError(f"offset {offset} out of range for {len(self._bars)} bars")
        return self._bars[-1 - offset]

    def __iter__(self) -> Iterator[Bar | None]:
        self._check_open()
        return reversed(self._bars)

    def chronological(self) -> list[Bar | None]:
        """Bars oldest-first (copy)."""
        self._check_open()
        return list(self._bars)

    # --- Live updates ---

    def append(self, bar: Bar | None) -> None:
        """Add a newly closed daily bar at offset 0."""
        self._check_open()
        self._bars.append(bar)

    # --- Lifetime ---

    @property
    def released(self) -> bool:
        return self._released

    def on_release(self, hook: Callable[[], None]) -> None:
        """Register a zero-argument callable run when the window is released."""
        self._release_hooks.append(hook)

    def release(self) -> None:
        """Drop the bars and run release hooks. Safe to call twice.

        Every hook runs even if an earlier one raises; the first error is
        re-raised once all hooks have run.
        """
        if self._released:
            return
        self._released = True
        self._bars = []
        hooks, self._release_hooks = self._release_hooks, []
        first_error: Exception | None = None
        for hook in hooks:
            try:
                hook()
            except Exception as exc:  # noqa: BLE001
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def __enter__(self) -> BarWindow:
        return self

    def __exit__(self, *exc) -> None:
        self.release()

    def _check_open(self) -> None:
        if self._released:
            raise DailySmaError(
                f"Window for {self.symbol or 'unknown symbol'} has been released",
                code=DailySmaErrorCode.RELEASED,
            )

    def __repr__(self) -> str:
        if self._released:
            return f"BarWindow(symbol={self.symbol!r}, released)"
        return f"BarWindow(symbol={self.symbol!r}, count={len(self._bars)})"
