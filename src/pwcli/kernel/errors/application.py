"""Application-layer errors – cross-cutting concerns at use-case level."""

from __future__ import annotations

from pwcli.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class TimeoutError(ApplicationError):  # noqa: A001
    """Operation timed out."""

    default_code = "timeout"


__all__ = ["ApplicationError", "TimeoutError"]
