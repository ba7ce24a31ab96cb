"""Observability – metrics ports."""
from pwcli.observability.metrics.ports import Counter, Gauge, Histogram, Metrics
from pwcli.observability.metrics.noop import NoopMetrics

__all__ = ["Counter", "Gauge", "Histogram", "Metrics", "NoopMetrics"]
