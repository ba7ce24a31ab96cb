"""Resilience – RetryExecutor.

One executor is created per operation class and reused for many calls.  Its
metrics and circuit-breaker state accumulate across those calls until
:meth:`RetryExecutor.reset_metrics` is called.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from typing import Awaitable, Callable, TypeVar

from pwcli.config.validation import ConfigError
from pwcli.kernel.errors import error_message
from pwcli.observability.metrics import Metrics, NoopMetrics
from pwcli.resilience.circuit_breaker import (
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_FAILURE_THRESHOLD,
    CircuitBreaker,
    CircuitBreakerState,
    CircuitOpenError,
)
from pwcli.resilience.retry.backoff import BackoffKind, BackoffPolicy, create_backoff
from pwcli.resilience.retry.config import OperationCategory, RetryConfig, get_preset
from pwcli.resilience.retry.errors import RetryExhaustedError
from pwcli.resilience.retry.metrics import RetryMetrics
from pwcli.resilience.timeouts import with_timeout

T = TypeVar("T")
logger = logging.getLogger(__name__)

Operation = Callable[[], Awaitable[T]]
Sleep = Callable[[float], Awaitable[None]]

_BREAKER_GAUGE_VALUES = {
    CircuitBreakerState.CLOSED: 0.0,
    CircuitBreakerState.HALF_OPEN: 1.0,
    CircuitBreakerState.OPEN: 2.0,
}


class RetryExecutor:
    """Run one async operation at a time under a retry policy and breaker.

    Each attempt is raced against ``config.timeout_ms``.  Failures whose
    message contains one of ``config.retryable_phrases`` are retried after
    ``policy.delay(attempt)`` milliseconds; any other failure is raised
    unchanged.  When the attempt budget runs out a
    :class:`RetryExhaustedError` is raised instead.

    Concurrent :meth:`execute` calls on the same instance are serialised.

    Parameters
    ----------
    policy:
        Backoff policy used between attempts.
    config:
        Attempt budget, timeout and retryable phrases.
    name:
        Label used in logs and metric labels.
    instruments:
        Optional metrics backend; defaults to :class:`NoopMetrics`.
    sleep:
        Coroutine used for the backoff wait, given seconds.
    failure_threshold, cooldown_seconds:
        Circuit-breaker tuning.
    """

    def __init__(
        self,
        policy: BackoffPolicy,
        config: RetryConfig,
        *,
        name: str = "default",
        instruments: Metrics | None = None,
        sleep: Sleep | None = None,
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        self.policy = policy
        self.config = config
        self.name = name
        self._sleep = sleep or asyncio.sleep
        self._metrics = RetryMetrics()
        self._lock = asyncio.Lock()

        instruments = instruments or NoopMetrics()
        self._labels = {"executor": name}
        self._attempts_counter = instruments.counter("retry.attempts", "Attempts started")
        self._successes_counter = instruments.counter("retry.successes", "Attempts that succeeded")
        self._failures_counter = instruments.counter("retry.failures", "Attempts that failed")
        self._trips_counter = instruments.counter("retry.breaker_trips", "Circuit breaker openings")
        self._duration = instruments.histogram("retry.duration", "Wall time of execute calls", "ms")
        self._breaker_gauge = instruments.gauge("retry.breaker_state", "0=closed 1=half-open 2=open")

        self.breaker = CircuitBreaker(
            name=name,
            failure_threshold=failure_threshold,
            cooldown_seconds=cooldown_seconds,
            on_transition=self._on_breaker_transition,
        )

    @classmethod
    def create(
        cls,
        kind: BackoffKind | str,
        config: RetryConfig | OperationCategory | str,
        **kwargs: object,
    ) -> RetryExecutor:
        """Build an executor from a policy kind and a preset name or config."""
        if not isinstance(config, RetryConfig):
            try:
                category = OperationCategory(config)
            except ValueError as exc:
                raise ConfigError(f"Unknown retry preset: {config}") from exc
            config = get_preset(category)
            kwargs.setdefault("name", category.value)
        return cls(create_backoff(kind, config), config, **kwargs)  # type: ignore[arg-type]

    async def execute(self, operation: Operation[T]) -> T:
        """Run *operation* until it succeeds, fails fatally or runs out of attempts."""
        async with self._lock:
            started = time.monotonic()
            try:
                return await self._execute(operation)
            finally:
                elapsed_ms = (time.monotonic() - started) * 1000
                self._metrics.total_retry_time_ms += elapsed_ms
                self._duration.record(elapsed_ms, labels=self._labels)

    async def _execute(self, operation: Operation[T]) -> T:
        max_attempts = self.config.max_attempts
        last_error: BaseException | None = None

        for attempt in range(1, max_attempts + 1):
            self._metrics.total_attempts += 1
            self._attempts_counter.add(labels=self._labels)

            if self.breaker.is_open:
                exc = CircuitOpenError()
                self._record_failure(exc)
                self._check_breaker()
                logger.warning("retry.blocked name=%s attempt=%d breaker=open", self.name, attempt)
                raise exc

            try:
                result = await with_timeout(operation(), self.config.timeout_ms)
            except Exception as exc:
                last_error = exc
                self._record_failure(exc)

                if not self.config.is_retryable(error_message(exc)):
                    logger.debug("retry.fatal name=%s attempt=%d exc=%r", self.name, attempt, exc)
                    self._check_breaker()
                    raise

                if attempt == max_attempts:
                    break

                delay_ms = self.policy.delay(attempt)
                logger.debug(
                    "retry attempt=%d/%d name=%s delay=%.0fms exc=%r",
                    attempt, max_attempts, self.name, delay_ms, exc,
                )
                await self._sleep(delay_ms / 1000)
                continue

            self._metrics.successful_attempts += 1
            self._successes_counter.add(labels=self._labels)
            self.breaker.record_success()
            return result

        self._check_breaker()
        logger.warning(
            "retry.exhausted name=%s attempts=%d last_error=%r",
            self.name, max_attempts, last_error,
        )
        raise RetryExhaustedError(max_attempts, last_error)  # type: ignore[arg-type]

    def _record_failure(self, exc: BaseException) -> None:
        self._metrics.failed_attempts += 1
        self._metrics.last_error = exc
        self._failures_counter.add(labels=self._labels)

    def _check_breaker(self) -> None:
        if self.breaker.record_failure(self._metrics.failed_attempts):
            self._trips_counter.add(labels=self._labels)

    def _on_breaker_transition(self, state: CircuitBreakerState) -> None:
        self._breaker_gauge.set(_BREAKER_GAUGE_VALUES[state], labels=self._labels)

    def get_metrics(self) -> RetryMetrics:
        """Return a snapshot; later calls do not change it."""
        return dataclasses.replace(self._metrics, breaker_state=self.breaker.state)

    def reset_metrics(self) -> None:
        """Zero all counters and force the breaker back to CLOSED."""
        self._metrics = RetryMetrics()
        self.breaker.reset()

    def close(self) -> None:
        """Cancel the pending breaker recovery timer, if any."""
        self.breaker.cancel_recovery()

    def __repr__(self) -> str:
        return f"RetryExecutor(name={self.name!r}, policy={self.policy!r}, config={self.config!r})"


__all__ = ["RetryExecutor"]
