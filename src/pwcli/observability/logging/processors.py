"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog

from pwcli.kernel.errors import BaseError


def add_error_details(
    logger: Any,           # noqa: ARG001
    method_name: str,      # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Expand a :class:`BaseError` bound as ``error`` into its dict form.

    Usage::

        log.warning("retry.exhausted", error=exc)
    """
    error = event_dict.get("error")
    if isinstance(error, BaseError):
        event_dict["error"] = error.to_dict()
    elif isinstance(error, BaseException):
        event_dict["error"] = {"type": type(error).__name__, "message": str(error)}
    return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["add_error_details", "get_logger"]
