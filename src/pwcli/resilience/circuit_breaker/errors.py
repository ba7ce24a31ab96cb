"""Resilience – circuit-breaker specific errors."""
from __future__ import annotations

from typing import Any

from pwcli.kernel.errors import InfrastructureError


class CircuitOpenError(InfrastructureError):
    """Raised instead of invoking the operation while the breaker is OPEN."""

    default_code = "circuit_open"

    def __init__(self, message: str = "Circuit breaker is open - operation blocked", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = ["CircuitOpenError"]
