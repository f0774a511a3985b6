"""Daily SMA error types."""

from __future__ import annotations

from enum import Enum


class DailySmaErrorCode(Enum):
    """Error classification codes."""

    INVALID_CONFIG = "invalid_config"
    SOURCE_FAILURE = "source_failure"
    INSUFFICIENT_DATA = "insufficient_data"
    INSUFFICIENT_WINDOW = "insufficient_window"
    INVALID_SAMPLE = "invalid_sample"
    INVALID_RESULT = "invalid_result"
    RELEASED = "released"


class DailySmaError(Exception):
    """Daily SMA exception with error code and retryable flag.

    Raised by configuration parsing, history sources and released windows.
    The loader and the average engine report data problems through their
    result objects instead.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether widening the request could resolve the problem.
    """

    def __init__(
        self,
        message: str,
        code: DailySmaErrorCode = DailySmaErrorCode.SOURCE_FAILURE,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable
