"""Daily SMA models."""

from dailysma.models.bar import Bar
from dailysma.models.window import BarWindow

__all__ = [
    "Bar",
    "BarWindow",
]
