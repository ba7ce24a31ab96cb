"""Unit tests for the RetryingCommand helper."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import pytest
from structlog.testing import capture_logs

from pwcli.commands import RetryingCommand
from pwcli.resilience.circuit_breaker import CircuitBreakerState
from pwcli.resilience.retry import (
    BackoffKind,
    ExponentialBackoff,
    LinearBackoff,
    OperationCategory,
    RetryExecutor,
    RetryExhaustedError,
    get_preset,
)
from pwcli.testing.fakes import RecordingSleep


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeBrowserService:
    """Records calls and fails the first *failures* with *message*."""

    def __init__(self, failures: int = 0, message: str = "connection refused") -> None:
        self.failures = failures
        self.message = message
        self.calls: list[tuple[str, int]] = []

    async def _run(self, kind: str, port: int, callback: Callable[[Any], Awaitable[Any]]) -> Any:
        self.calls.append((kind, port))
        if len(self.calls) <= self.failures:
            raise RuntimeError(self.message)
        return await callback(f"{kind}:{port}")

    async def with_browser(self, port: int, callback: Callable[[Any], Awaitable[Any]]) -> Any:
        return await self._run("browser", port, callback)

    async def with_active_page(self, port: int, callback: Callable[[Any], Awaitable[Any]]) -> Any:
        return await self._run("page", port, callback)


def fast_factory(kind: BackoffKind, category: OperationCategory) -> RetryExecutor:
    return RetryExecutor.create(kind, get_preset(category), name=category.value, sleep=RecordingSleep())


def make_command(service: FakeBrowserService) -> RetryingCommand:
    return RetryingCommand("click", service, executor_factory=fast_factory)


async def echo(handle: Any) -> Any:
    return handle


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestRetryingCommand:
    def test_default_executor_is_exponential_browser(self) -> None:
        command = RetryingCommand("open", FakeBrowserService())
        executor = command.executor_for()
        assert isinstance(executor.policy, ExponentialBackoff)
        assert executor.config == get_preset("browser")
        assert executor.name == "open.browser"

    def test_with_browser_retry_retries_connection_errors(self) -> None:
        service = FakeBrowserService(failures=2, message="connect ECONNREFUSED: connection refused")
        command = make_command(service)
        assert asyncio.run(command.with_browser_retry(9222, echo)) == "browser:9222"
        assert len(service.calls) == 3
        assert command.get_retry_metrics("browser").failed_attempts == 2

    def test_with_active_page_retry_uses_interaction_preset(self) -> None:
        service = FakeBrowserService(failures=5, message="element not found: #submit")
        command = make_command(service)
        with pytest.raises(RetryExhaustedError, match="failed after 2 attempts"):
            asyncio.run(command.with_active_page_retry(9222, echo))
        assert service.calls == [("page", 9222), ("page", 9222)]
        assert command.get_retry_metrics(OperationCategory.INTERACTION).failed_attempts == 2
        assert command.get_retry_metrics(OperationCategory.BROWSER).total_attempts == 0

    def test_executors_are_cached_per_category(self) -> None:
        command = make_command(FakeBrowserService())
        assert command.executor_for("network") is command.executor_for(OperationCategory.NETWORK)
        assert command.executor_for("network") is not command.executor_for("file")

    def test_configure_retry_strategy_changes_default(self) -> None:
        command = make_command(FakeBrowserService())
        command.configure_retry_strategy("linear", "network")
        executor = command.executor_for()
        assert isinstance(executor.policy, LinearBackoff)
        assert executor.config.max_attempts == 5

    def test_configure_replaces_existing_executor(self) -> None:
        command = make_command(FakeBrowserService())
        first = command.executor_for("file")
        command.configure_retry_strategy(BackoffKind.FIXED, "file")
        assert command.executor_for("file") is not first

    def test_reset_retry_metrics(self) -> None:
        service = FakeBrowserService(failures=1)
        command = make_command(service)
        asyncio.run(command.with_browser_retry(1, echo))
        command.reset_retry_metrics()
        assert command.get_retry_metrics("browser").total_attempts == 0

    def test_with_retry_uses_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PWCLI_RETRY_FILE_MAX_ATTEMPTS", "1")
        command = RetryingCommand("pdf", FakeBrowserService())

        async def write() -> None:
            raise OSError("resource busy")

        with pytest.raises(RetryExhaustedError, match="failed after 1 attempts"):
            asyncio.run(command.with_retry(write, "file"))


class TestLogRetryMetrics:
    def test_silent_without_failures(self) -> None:
        command = make_command(FakeBrowserService())
        asyncio.run(command.with_browser_retry(1, echo))
        with capture_logs() as logs:
            command.log_retry_metrics()
        assert logs == []

    def test_reports_failures_and_open_breaker(self) -> None:
        service = FakeBrowserService(failures=10)
        command = make_command(service)
        with pytest.raises(RetryExhaustedError):
            asyncio.run(command.with_browser_retry(1, echo))
        assert command.get_retry_metrics("browser").breaker_state == CircuitBreakerState.OPEN

        with capture_logs() as logs:
            command.log_retry_metrics()
        events = [entry["event"] for entry in logs]
        assert events == ["retry.metrics", "retry.circuit_breaker"]
        assert logs[0]["failed_attempts"] == 3
        assert logs[0]["log_level"] == "warning"
        assert logs[1]["state"] == "open"
        command.close()
