"""Resilience – timeout race helpers.

Every helper races the awaitable against a timer with
:func:`asyncio.timeout`; when the timer wins, the pending operation is
cancelled rather than left running in the background.
"""
from __future__ import annotations

import asyncio
import dataclasses
import functools
from typing import Any, Awaitable, Callable, TypeVar

from pwcli.resilience.timeouts.errors import OperationTimeoutError

T = TypeVar("T")


async def with_timeout(
    awaitable: Awaitable[T],
    timeout_ms: float,
    operation: str | None = None,
) -> T:
    """Await *awaitable*, raising :class:`OperationTimeoutError` after *timeout_ms*.

    A ``TimeoutError`` raised by the awaitable itself propagates unchanged;
    only expiry of this race's own timer is converted.
    """
    scope = asyncio.timeout(timeout_ms / 1000)
    try:
        async with scope:
            return await awaitable
    except TimeoutError as exc:
        if not scope.expired():
            raise
        raise OperationTimeoutError(timeout_ms, operation, cause=exc) from exc


async def with_timeout_or_default(awaitable: Awaitable[T], timeout_ms: float, default: T) -> T:
    """Like :func:`with_timeout` but return *default* instead of raising on timeout."""
    try:
        return await with_timeout(awaitable, timeout_ms)
    except OperationTimeoutError:
        return default


def timeout_protected(
    func: Callable[..., Awaitable[T]],
    timeout_ms: float = 5000,
) -> Callable[..., Awaitable[T]]:
    """Wrap a coroutine function so every call is bounded by *timeout_ms*."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        return await with_timeout(func(*args, **kwargs), timeout_ms, func.__name__)

    return wrapper


@dataclasses.dataclass(frozen=True)
class TimeoutPolicy:
    """Reusable timeout bound."""
    timeout_ms: float

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        return await with_timeout(func(), self.timeout_ms)


__all__ = ["TimeoutPolicy", "timeout_protected", "with_timeout", "with_timeout_or_default"]
