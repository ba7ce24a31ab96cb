"""Resilience – Circuit Breaker pattern."""
from pwcli.resilience.circuit_breaker.errors import CircuitOpenError
from pwcli.resilience.circuit_breaker.state import CircuitBreakerState
from pwcli.resilience.circuit_breaker.breaker import (
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_FAILURE_THRESHOLD,
    CircuitBreaker,
)

__all__ = [
    "DEFAULT_COOLDOWN_SECONDS",
    "DEFAULT_FAILURE_THRESHOLD",
    "CircuitBreaker",
    "CircuitBreakerState",
    "CircuitOpenError",
]
