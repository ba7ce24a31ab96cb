"""Resilience – backoff policies.

All delays are in milliseconds and attempt numbers are 1-based: the value
returned for attempt *n* is the wait after the *n*-th failed attempt.
"""
from __future__ import annotations

import abc
from enum import Enum
from typing import TYPE_CHECKING

from pwcli.config.validation import ConfigError

if TYPE_CHECKING:
    from pwcli.resilience.retry.config import RetryConfig


class BackoffKind(str, Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    FIXED = "fixed"


class BackoffPolicy(abc.ABC):
    """Compute the wait (ms) after the *attempt*-th failure."""

    def __init__(self, base_delay_ms: float, max_delay_ms: float) -> None:
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    @classmethod
    def from_config(cls, config: RetryConfig) -> BackoffPolicy:
        return cls(config.base_delay_ms, config.max_delay_ms)

    @abc.abstractmethod
    def delay(self, attempt: int) -> float: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_delay_ms={self.base_delay_ms!r}, max_delay_ms={self.max_delay_ms!r})"


class LinearBackoff(BackoffPolicy):
    """Delay grows linearly: ``base_delay_ms * attempt``, capped."""

    def delay(self, attempt: int) -> float:
        return min(self.base_delay_ms * attempt, self.max_delay_ms)


class ExponentialBackoff(BackoffPolicy):
    """Delay doubles per attempt: ``base_delay_ms * 2^(attempt-1)``, capped."""

    def delay(self, attempt: int) -> float:
        return min(self.base_delay_ms * (2 ** (attempt - 1)), self.max_delay_ms)


class FixedBackoff(BackoffPolicy):
    """Same delay between every attempt; ``max_delay_ms`` is ignored."""

    def delay(self, attempt: int) -> float:  # noqa: ARG002
        return self.base_delay_ms


_POLICIES: dict[BackoffKind, type[BackoffPolicy]] = {
    BackoffKind.LINEAR: LinearBackoff,
    BackoffKind.EXPONENTIAL: ExponentialBackoff,
    BackoffKind.FIXED: FixedBackoff,
}


def create_backoff(kind: BackoffKind | str, config: RetryConfig) -> BackoffPolicy:
    """Build the backoff policy named by *kind* from *config*'s delays."""
    try:
        policy_cls = _POLICIES[BackoffKind(kind)]
    except ValueError as exc:
        raise ConfigError(f"Unknown retry strategy type: {kind}") from exc
    return policy_cls.from_config(config)


__all__ = [
    "BackoffKind",
    "BackoffPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
    "LinearBackoff",
    "create_backoff",
]
