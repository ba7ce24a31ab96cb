"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from pwcli.observability.logging.processors import add_error_details

RENDERERS = ("json", "console")


class JsonLoggerFactory:
    """Configure structlog for JSON (or console) output.

    Standard-library loggers used inside the resilience modules are routed
    through the same :class:`structlog.stdlib.ProcessorFormatter`, so both
    styles end up in one stream with one format.
    """

    @staticmethod
    def configure(level: int = logging.INFO, renderer: str = "json") -> None:
        if renderer not in RENDERERS:
            raise ValueError(f"Unknown renderer {renderer!r}; expected one of {RENDERERS}")

        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            add_error_details,
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        final: Any = (
            structlog.dev.ConsoleRenderer(colors=False)
            if renderer == "console"
            else structlog.processors.JSONRenderer()
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                final,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory", "RENDERERS"]
