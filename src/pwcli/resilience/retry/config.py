"""Resilience – RetryConfig and the per-category presets.

Presets are plain values; every field can be overridden in code with
:meth:`RetryConfig.with_overrides` or from the environment with
:func:`load_retry_config`, which reads ``PWCLI_RETRY_<CATEGORY>_<FIELD>``::

    PWCLI_RETRY_NETWORK_MAX_ATTEMPTS=8
    PWCLI_RETRY_NETWORK_RETRYABLE_PHRASES="socket hang up,econnreset"
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, ClassVar, Sequence

from pwcli.config.settings import EnvSettingsLoader, Settings, SettingsFactory, SettingsLoader
from pwcli.config.validation import InvalidSettingValueError

ENV_PREFIX = "PWCLI_RETRY"


class OperationCategory(str, Enum):
    """Kinds of command operation that get their own retry bookkeeping."""
    BROWSER = "browser"
    INTERACTION = "interaction"
    NETWORK = "network"
    FILE = "file"


@dataclasses.dataclass(frozen=True)
class RetryConfig:
    """Immutable retry parameters.  Durations are milliseconds."""
    max_attempts: int
    base_delay_ms: float
    max_delay_ms: float
    timeout_ms: float
    retryable_phrases: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # lists from callers or env loaders are frozen into a tuple
        object.__setattr__(self, "retryable_phrases", tuple(self.retryable_phrases))
        if self.max_attempts < 1:
            raise InvalidSettingValueError("max_attempts", self.max_attempts, "must be >= 1")
        for name in ("base_delay_ms", "max_delay_ms"):
            if getattr(self, name) < 0:
                raise InvalidSettingValueError(name, getattr(self, name), "must be >= 0")
        if self.timeout_ms <= 0:
            raise InvalidSettingValueError("timeout_ms", self.timeout_ms, "must be > 0")

    def with_overrides(self, **overrides: Any) -> RetryConfig:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **overrides)

    def is_retryable(self, message: str) -> bool:
        """Case-insensitive substring match of *message* against the phrases."""
        lowered = message.lower()
        return any(phrase.lower() in lowered for phrase in self.retryable_phrases)


PRESETS: dict[OperationCategory, RetryConfig] = {
    OperationCategory.BROWSER: RetryConfig(
        max_attempts=3,
        base_delay_ms=1000,
        max_delay_ms=5000,
        timeout_ms=10000,
        retryable_phrases=(
            "no browser running",
            "connection refused",
            "timeout",
            "network error",
            "browser closed",
        ),
    ),
    OperationCategory.INTERACTION: RetryConfig(
        max_attempts=2,
        base_delay_ms=500,
        max_delay_ms=2000,
        timeout_ms=5000,
        retryable_phrases=(
            "element not found",
            "element not visible",
            "element not clickable",
            "timeout waiting for",
            "navigation timeout",
        ),
    ),
    OperationCategory.NETWORK: RetryConfig(
        max_attempts=5,
        base_delay_ms=2000,
        max_delay_ms=10000,
        timeout_ms=15000,
        retryable_phrases=(
            "network error",
            "connection refused",
            "timeout",
            "dns resolution failed",
            "socket hang up",
        ),
    ),
    OperationCategory.FILE: RetryConfig(
        max_attempts=2,
        base_delay_ms=100,
        max_delay_ms=1000,
        timeout_ms=5000,
        retryable_phrases=(
            "file not found",
            "permission denied",
            "resource busy",
            "operation not permitted",
        ),
    ),
}


def get_preset(category: OperationCategory | str, **overrides: Any) -> RetryConfig:
    """Return the preset for *category*, optionally with fields replaced."""
    config = PRESETS[OperationCategory(category)]
    return config.with_overrides(**overrides) if overrides else config


@dataclasses.dataclass
class RetrySettings(Settings):
    """Environment overrides for one preset; ``None`` keeps the preset value."""

    _prefix: ClassVar[str] = ENV_PREFIX

    max_attempts: int | None = None
    base_delay_ms: float | None = None
    max_delay_ms: float | None = None
    timeout_ms: float | None = None
    retryable_phrases: list[str] | None = None

    def as_overrides(self) -> dict[str, Any]:
        return {
            field.name: getattr(self, field.name)
            for field in dataclasses.fields(self)
            if getattr(self, field.name) is not None
        }


def load_retry_config(
    category: OperationCategory | str,
    loaders: Sequence[SettingsLoader] | None = None,
    overrides: dict[str, Any] | None = None,
) -> RetryConfig:
    """Resolve the preset for *category* with environment and explicit overrides.

    Explicit *overrides* win over loader values, which win over the preset.
    """
    category = OperationCategory(category)
    if loaders is None:
        loaders = [EnvSettingsLoader(prefix=f"{ENV_PREFIX}_{category.value}")]
    settings = SettingsFactory.create(RetrySettings, loaders=loaders, overrides=overrides)
    return get_preset(category, **settings.as_overrides())


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "OperationCategory",
    "RetryConfig",
    "RetrySettings",
    "get_preset",
    "load_retry_config",
]
