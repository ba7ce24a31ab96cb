"""Resilience – CircuitBreaker state machine.

The breaker does not count failures itself: the owning executor passes the
cumulative failure count into :meth:`CircuitBreaker.record_failure`.  That
count is never reset when the breaker closes again, so an executor that has
recovered trips on its very next terminal failure.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from pwcli.resilience.circuit_breaker.state import CircuitBreakerState

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_THRESHOLD = 3
DEFAULT_COOLDOWN_SECONDS = 30.0


class CircuitBreaker:
    """Closed / Open / HalfOpen state machine with timer-driven recovery.

    Entering OPEN arms a single ``loop.call_later`` callback that moves the
    breaker to HALF_OPEN after *cooldown_seconds*.  The handle is owned by
    the breaker and is cancelled by :meth:`cancel_recovery` and
    :meth:`reset`.  All callbacks run on the event-loop thread.

    The trip time is also recorded, and reading the state moves an OPEN
    breaker whose cooldown has elapsed to HALF_OPEN.  This covers a timer
    that never fires because its loop was closed first, e.g. an executor
    reused across several ``asyncio.run`` calls.
    """

    def __init__(
        self,
        name: str = "default",
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        on_transition: Callable[[CircuitBreakerState], None] | None = None,
    ) -> None:
        self.name = name
        self.failure_threshold = failure_threshold
        self.cooldown_seconds = cooldown_seconds
        self._on_transition = on_transition
        self._state = CircuitBreakerState.CLOSED
        self._recovery: asyncio.TimerHandle | None = None
        self._opened_at: float | None = None

    @property
    def state(self) -> CircuitBreakerState:
        self._maybe_transition_half_open()
        return self._state

    @property
    def is_open(self) -> bool:
        return self.state == CircuitBreakerState.OPEN

    @property
    def recovery_pending(self) -> bool:
        return self._recovery is not None

    def record_failure(self, failed_attempts: int) -> bool:
        """Trip the breaker if *failed_attempts* reached the threshold.

        Returns ``True`` when this call moved the breaker to OPEN.
        """
        if self.state == CircuitBreakerState.OPEN or failed_attempts < self.failure_threshold:
            return False
        logger.error(
            "circuit_breaker.opened name=%s failed_attempts=%d threshold=%d",
            self.name, failed_attempts, self.failure_threshold,
        )
        self._opened_at = time.monotonic()
        self._transition(CircuitBreakerState.OPEN)
        self._arm_recovery()
        return True

    def record_success(self) -> None:
        if self.state == CircuitBreakerState.HALF_OPEN:
            logger.info("circuit_breaker.closed name=%s", self.name)
            self._transition(CircuitBreakerState.CLOSED)

    def cancel_recovery(self) -> None:
        if self._recovery is not None:
            self._recovery.cancel()
            self._recovery = None

    def reset(self) -> None:
        """Force the breaker back to CLOSED and drop any pending recovery."""
        self.cancel_recovery()
        self._opened_at = None
        if self._state != CircuitBreakerState.CLOSED:
            self._transition(CircuitBreakerState.CLOSED)

    def _arm_recovery(self) -> None:
        self.cancel_recovery()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("circuit_breaker.no_event_loop name=%s recovery not scheduled", self.name)
            return
        self._recovery = loop.call_later(self.cooldown_seconds, self._half_open)

    def _maybe_transition_half_open(self) -> None:
        if (
            self._state == CircuitBreakerState.OPEN
            and self._opened_at is not None
            and time.monotonic() - self._opened_at >= self.cooldown_seconds
        ):
            self.cancel_recovery()
            self._half_open()

    def _half_open(self) -> None:
        self._recovery = None
        self._opened_at = None
        if self._state != CircuitBreakerState.OPEN:
            return
        logger.info("circuit_breaker.half_open name=%s", self.name)
        self._transition(CircuitBreakerState.HALF_OPEN)

    def _transition(self, state: CircuitBreakerState) -> None:
        self._state = state
        if self._on_transition is not None:
            self._on_transition(state)


__all__ = ["DEFAULT_COOLDOWN_SECONDS", "DEFAULT_FAILURE_THRESHOLD", "CircuitBreaker"]
