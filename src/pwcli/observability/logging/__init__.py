"""Observability – structured logging helpers."""
from pwcli.observability.logging.factory import JsonLoggerFactory
from pwcli.observability.logging.processors import add_error_details, get_logger

__all__ = ["JsonLoggerFactory", "add_error_details", "get_logger"]
