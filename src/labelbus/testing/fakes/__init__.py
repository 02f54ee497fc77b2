"""Testing fakes – in-memory doubles for kernel ports."""
from labelbus.testing.fakes.metrics import FakeMetricsRegistry
from labelbus.testing.fakes.receiver import InMemoryReceiverClient

__all__ = ["FakeMetricsRegistry", "InMemoryReceiverClient"]
