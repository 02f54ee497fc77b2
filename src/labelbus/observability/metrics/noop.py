"""Observability – NoopMetrics implementation."""
from __future__ import annotations

from labelbus.observability.metrics.ports import Counter, Histogram, Metrics


class _NoopCounter(Counter):
    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        pass


class _NoopHistogram(Histogram):
    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        pass


class NoopMetrics(Metrics):
    """Silent metrics used when no backend is configured."""

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return _NoopCounter()

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram:
        return _NoopHistogram()


__all__ = ["NoopMetrics"]
