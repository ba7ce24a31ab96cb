"""Resilience – timeout errors."""
from __future__ import annotations

from typing import Any

from pwcli.kernel.errors import TimeoutError as AppTimeoutError


class OperationTimeoutError(AppTimeoutError):
    """An attempt did not settle before its timer fired.

    Attributes
    ----------
    timeout_ms:
        The bound that was exceeded, in milliseconds.
    operation:
        Optional operation name included in the message.
    """

    default_code = "operation_timeout"

    def __init__(self, timeout_ms: float, operation: str | None = None, **kwargs: Any) -> None:
        if operation:
            message = f"Operation '{operation}' timed out after {_format_ms(timeout_ms)}ms"
        else:
            message = f"Operation timed out after {_format_ms(timeout_ms)}ms"
        super().__init__(message, **kwargs)
        self.timeout_ms = timeout_ms
        self.operation = operation


def _format_ms(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


__all__ = ["OperationTimeoutError"]
