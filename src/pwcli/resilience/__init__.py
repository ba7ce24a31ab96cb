"""Resilience – retry executor, circuit breaker, timeouts."""

from pwcli.resilience.circuit_breaker import CircuitBreaker, CircuitBreakerState, CircuitOpenError
from pwcli.resilience.retry import (
    BackoffKind,
    OperationCategory,
    RetryConfig,
    RetryExecutor,
    RetryExhaustedError,
    RetryMetrics,
)
from pwcli.resilience.timeouts import OperationTimeoutError, with_timeout

__all__ = [
    "BackoffKind",
    "CircuitBreaker",
    "CircuitBreakerState",
    "CircuitOpenError",
    "OperationCategory",
    "OperationTimeoutError",
    "RetryConfig",
    "RetryExecutor",
    "RetryExhaustedError",
    "RetryMetrics",
    "with_timeout",
]
