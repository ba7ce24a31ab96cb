"""Resilience – retry errors."""
from __future__ import annotations

from typing import Any

from pwcli.kernel.errors import ApplicationError, error_message


class RetryExhaustedError(ApplicationError):
    """Every allowed attempt failed with a retryable error.

    Attributes
    ----------
    attempts:
        The configured attempt budget that was used up.
    last_error:
        The error raised by the final attempt (also chained as ``__cause__``).
    """

    default_code = "retry_exhausted"

    def __init__(self, attempts: int, last_error: BaseException, **kwargs: Any) -> None:
        super().__init__(
            f"Operation failed after {attempts} attempts. Last error: {error_message(last_error)}",
            cause=last_error,
            **kwargs,
        )
        self.attempts = attempts
        self.last_error = last_error


__all__ = ["RetryExhaustedError"]
