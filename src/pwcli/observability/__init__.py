"""Observability – logging and metrics."""

from pwcli.observability.logging import JsonLoggerFactory, get_logger
from pwcli.observability.metrics import Counter, Gauge, Histogram, Metrics, NoopMetrics

__all__ = [
    "Counter",
    "Gauge",
    "Histogram",
    "JsonLoggerFactory",
    "Metrics",
    "NoopMetrics",
    "get_logger",
]
