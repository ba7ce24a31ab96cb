"""Testing fakes."""
from pwcli.testing.fakes.metrics import FakeMetricsRegistry
from pwcli.testing.fakes.sleep import RecordingSleep

__all__ = ["FakeMetricsRegistry", "RecordingSleep"]
