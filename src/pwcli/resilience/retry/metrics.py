"""Resilience – RetryMetrics record."""
from __future__ import annotations

import dataclasses
from typing import Any

from pwcli.resilience.circuit_breaker import CircuitBreakerState


@dataclasses.dataclass
class RetryMetrics:
    """Counters kept by one :class:`RetryExecutor` across all its calls.

    ``failed_attempts`` is only cleared by an explicit reset; the breaker
    closing again leaves it untouched.
    """
    total_attempts: int = 0
    successful_attempts: int = 0
    failed_attempts: int = 0
    total_retry_time_ms: float = 0.0
    last_error: BaseException | None = None
    breaker_state: CircuitBreakerState = CircuitBreakerState.CLOSED

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_attempts": self.total_attempts,
            "successful_attempts": self.successful_attempts,
            "failed_attempts": self.failed_attempts,
            "total_retry_time_ms": round(self.total_retry_time_ms, 3),
            "last_error": str(self.last_error) if self.last_error is not None else None,
            "breaker_state": self.breaker_state.value,
        }


__all__ = ["RetryMetrics"]
