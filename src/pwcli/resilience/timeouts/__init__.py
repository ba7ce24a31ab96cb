"""Resilience – per-operation timeouts."""
from pwcli.resilience.timeouts.errors import OperationTimeoutError
from pwcli.resilience.timeouts.policy import TimeoutPolicy, timeout_protected, with_timeout, with_timeout_or_default

__all__ = [
    "OperationTimeoutError",
    "TimeoutPolicy",
    "timeout_protected",
    "with_timeout",
    "with_timeout_or_default",
]
