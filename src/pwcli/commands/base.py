"""Commands – retry helpers shared by every browser command.

Commands talk to the automation library through a :class:`BrowserService`
and wrap those calls in the retry executor for the matching
:class:`OperationCategory`.  Each command instance keeps one executor per
category so breaker state is isolated per operation class.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, TypeVar

from pwcli.observability.logging import get_logger
from pwcli.observability.metrics import Metrics
from pwcli.resilience.circuit_breaker import CircuitBreakerState
from pwcli.resilience.retry import (
    BackoffKind,
    OperationCategory,
    RetryExecutor,
    RetryMetrics,
    load_retry_config,
)

T = TypeVar("T")


class BrowserService(Protocol):
    """Port: the automation-library session used by commands."""

    async def with_browser(self, port: int, callback: Callable[[Any], Awaitable[T]]) -> T: ...

    async def with_active_page(self, port: int, callback: Callable[[Any], Awaitable[T]]) -> T: ...


class RetryingCommand:
    """Base for commands that run browser operations under retry.

    The default executor uses exponential backoff with the ``browser``
    preset; :meth:`configure_retry_strategy` swaps it for another kind or
    category.
    """

    def __init__(
        self,
        name: str,
        browser_service: BrowserService,
        *,
        instruments: Metrics | None = None,
        executor_factory: Callable[[BackoffKind, OperationCategory], RetryExecutor] | None = None,
    ) -> None:
        self.name = name
        self.browser_service = browser_service
        self._instruments = instruments
        self._executor_factory = executor_factory or self._build_executor
        self._executors: dict[OperationCategory, RetryExecutor] = {}
        self._default_category = OperationCategory.BROWSER
        self._kind = BackoffKind.EXPONENTIAL

    def _build_executor(self, kind: BackoffKind, category: OperationCategory) -> RetryExecutor:
        return RetryExecutor.create(
            kind,
            load_retry_config(category),
            name=f"{self.name}.{category.value}",
            instruments=self._instruments,
        )

    def configure_retry_strategy(self, kind: BackoffKind | str, category: OperationCategory | str) -> None:
        """Use *kind* backoff with the *category* preset as the default executor."""
        kind, category = BackoffKind(kind), OperationCategory(category)
        previous = self._executors.pop(category, None)
        if previous is not None:
            previous.close()
        self._kind = kind
        self._default_category = category
        self._executors[category] = self._executor_factory(kind, category)

    def executor_for(self, category: OperationCategory | str | None = None) -> RetryExecutor:
        category = OperationCategory(category) if category is not None else self._default_category
        executor = self._executors.get(category)
        if executor is None:
            executor = self._executors[category] = self._executor_factory(self._kind, category)
        return executor

    async def with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        category: OperationCategory | str | None = None,
    ) -> T:
        """Run *operation* under the executor for *category* (default executor if ``None``)."""
        return await self.executor_for(category).execute(operation)

    async def with_browser_retry(self, port: int, callback: Callable[[Any], Awaitable[T]]) -> T:
        return await self.with_retry(
            lambda: self.browser_service.with_browser(port, callback),
            OperationCategory.BROWSER,
        )

    async def with_active_page_retry(self, port: int, callback: Callable[[Any], Awaitable[T]]) -> T:
        return await self.with_retry(
            lambda: self.browser_service.with_active_page(port, callback),
            OperationCategory.INTERACTION,
        )

    def get_retry_metrics(self, category: OperationCategory | str | None = None) -> RetryMetrics:
        return self.executor_for(category).get_metrics()

    def reset_retry_metrics(self) -> None:
        for executor in self._executors.values():
            executor.reset_metrics()

    def log_retry_metrics(self) -> None:
        """Warn about executors that saw failures, and about non-closed breakers."""
        log = get_logger(__name__, command=self.name)
        for category, executor in self._executors.items():
            metrics = executor.get_metrics()
            if metrics.failed_attempts == 0:
                continue
            log.warning(
                "retry.metrics",
                category=category.value,
                total_attempts=metrics.total_attempts,
                failed_attempts=metrics.failed_attempts,
                total_retry_time_ms=round(metrics.total_retry_time_ms),
            )
            if metrics.breaker_state != CircuitBreakerState.CLOSED:
                log.warning(
                    "retry.circuit_breaker",
                    category=category.value,
                    state=metrics.breaker_state.value,
                )

    def close(self) -> None:
        for executor in self._executors.values():
            executor.close()
        self._executors.clear()


__all__ = ["BrowserService", "RetryingCommand"]
