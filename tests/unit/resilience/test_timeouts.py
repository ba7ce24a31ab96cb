"""Unit tests for the timeout race helpers."""

from __future__ import annotations

import asyncio

import pytest

from pwcli.kernel.errors import TimeoutError as AppTimeoutError
from pwcli.resilience.timeouts import (
    OperationTimeoutError,
    TimeoutPolicy,
    timeout_protected,
    with_timeout,
    with_timeout_or_default,
)


async def slow(seconds: float = 1.0) -> str:
    await asyncio.sleep(seconds)
    return "late"


async def fast() -> str:
    return "done"


class TestWithTimeout:
    def test_fast_call_returns_result(self) -> None:
        assert asyncio.run(with_timeout(fast(), 1000)) == "done"

    def test_slow_call_raises_with_timeout_in_message(self) -> None:
        with pytest.raises(OperationTimeoutError, match="Operation timed out after 20ms") as info:
            asyncio.run(with_timeout(slow(), 20))
        assert info.value.timeout_ms == 20

    def test_operation_name_included(self) -> None:
        with pytest.raises(OperationTimeoutError, match="Operation 'goto' timed out after 20ms"):
            asyncio.run(with_timeout(slow(), 20, "goto"))

    def test_is_application_timeout(self) -> None:
        with pytest.raises(AppTimeoutError):
            asyncio.run(with_timeout(slow(), 10))

    def test_loser_is_cancelled(self) -> None:
        finished: list[str] = []

        async def tracked() -> None:
            await asyncio.sleep(0.2)
            finished.append("yes")

        async def run() -> None:
            with pytest.raises(OperationTimeoutError):
                await with_timeout(tracked(), 10)
            await asyncio.sleep(0.3)

        asyncio.run(run())
        assert finished == []

    def test_operation_error_propagates_unchanged(self) -> None:
        async def boom() -> None:
            raise ValueError("bad selector")

        with pytest.raises(ValueError, match="bad selector"):
            asyncio.run(with_timeout(boom(), 1000))

    def test_operation_timeout_error_is_not_converted(self) -> None:
        async def navigate() -> None:
            raise TimeoutError("navigation timeout of 300ms exceeded")

        with pytest.raises(TimeoutError, match="navigation timeout") as info:
            asyncio.run(with_timeout(navigate(), 1000))
        assert not isinstance(info.value, OperationTimeoutError)


class TestWithTimeoutOrDefault:
    def test_returns_default_on_timeout(self) -> None:
        assert asyncio.run(with_timeout_or_default(slow(), 10, "fallback")) == "fallback"

    def test_returns_result_when_fast(self) -> None:
        assert asyncio.run(with_timeout_or_default(fast(), 1000, "fallback")) == "done"

    def test_operation_timeout_error_is_not_swallowed(self) -> None:
        async def navigate() -> None:
            raise TimeoutError("navigation timeout")

        with pytest.raises(TimeoutError, match="navigation timeout"):
            asyncio.run(with_timeout_or_default(navigate(), 1000, "fallback"))


class TestTimeoutProtected:
    def test_wraps_function_name_into_message(self) -> None:
        guarded = timeout_protected(slow, timeout_ms=10)
        with pytest.raises(OperationTimeoutError, match="Operation 'slow' timed out"):
            asyncio.run(guarded(1.0))

    def test_passes_arguments_through(self) -> None:
        guarded = timeout_protected(slow, timeout_ms=1000)
        assert asyncio.run(guarded(0)) == "late"


class TestTimeoutPolicy:
    def test_execute(self) -> None:
        policy = TimeoutPolicy(timeout_ms=1000)
        assert asyncio.run(policy.execute(fast)) == "done"

    def test_execute_times_out(self) -> None:
        policy = TimeoutPolicy(timeout_ms=10)
        with pytest.raises(OperationTimeoutError):
            asyncio.run(policy.execute(slow))
