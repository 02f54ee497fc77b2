"""Observability – instruments recorded around each dispatched message."""
from __future__ import annotations

from labelbus.kernel.messaging import DispatchDecision
from labelbus.observability.metrics.ports import Metrics

PROCESSED = "labelbus.messages.processed"
FAILED = "labelbus.messages.failed"
DURATION = "labelbus.messages.duration"


class DispatchMetrics:
    """Counters and latency histogram for one dispatcher."""

    def __init__(self, metrics: Metrics, entity: str = "") -> None:
        self._labels = {"entity": entity} if entity else {}
        self._processed = metrics.counter(PROCESSED, description="Messages settled by decision")
        self._failed = metrics.counter(FAILED, description="Messages whose processing raised")
        self._duration = metrics.histogram(DURATION, description="Message handling time", unit="ms")

    def decided(self, decision: DispatchDecision) -> None:
        self._processed.add(1.0, labels={**self._labels, "decision": decision.kind.value})

    def failed(self) -> None:
        self._failed.add(1.0, labels=self._labels or None)

    def elapsed(self, elapsed_ms: float) -> None:
        self._duration.record(elapsed_ms, labels=self._labels or None)


__all__ = ["DURATION", "DispatchMetrics", "FAILED", "PROCESSED"]
