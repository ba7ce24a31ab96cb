"""Resilience – retry executor with backoff policies, presets and metrics."""
from pwcli.resilience.retry.backoff import (
    BackoffKind,
    BackoffPolicy,
    ExponentialBackoff,
    FixedBackoff,
    LinearBackoff,
    create_backoff,
)
from pwcli.resilience.retry.config import (
    PRESETS,
    OperationCategory,
    RetryConfig,
    RetrySettings,
    get_preset,
    load_retry_config,
)
from pwcli.resilience.retry.errors import RetryExhaustedError
from pwcli.resilience.retry.executor import RetryExecutor
from pwcli.resilience.retry.metrics import RetryMetrics

__all__ = [
    "PRESETS",
    "BackoffKind",
    "BackoffPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
    "LinearBackoff",
    "OperationCategory",
    "RetryConfig",
    "RetryExecutor",
    "RetryExhaustedError",
    "RetryMetrics",
    "RetrySettings",
    "create_backoff",
    "get_preset",
    "load_retry_config",
]
