"""Testing support – in-memory doubles for broker and metrics ports."""

from labelbus.testing.fakes import FakeMetricsRegistry, InMemoryReceiverClient

__all__ = ["FakeMetricsRegistry", "InMemoryReceiverClient"]
