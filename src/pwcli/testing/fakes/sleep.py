"""Testing fakes – RecordingSleep."""
from __future__ import annotations

import asyncio


class RecordingSleep:
    """Drop-in for :func:`asyncio.sleep` that records waits instead of waiting.

    Usage::

        sleep = RecordingSleep()
        executor = RetryExecutor(policy, config, sleep=sleep)
        ...
        assert sleep.calls == [0.1, 0.2]
    """

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)

    @property
    def total(self) -> float:
        return sum(self.calls)


__all__ = ["RecordingSleep"]
