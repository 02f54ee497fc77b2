"""Testing fakes – FakeMetricsRegistry."""
from __future__ import annotations

from labelbus.observability.metrics.ports import Counter, Histogram, Metrics


class _FakeCounter(Counter):
    """In-memory counter that records all add() calls."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[float, dict[str, str] | None]] = []
        self.total: float = 0.0

    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self.calls.append((value, labels))
        self.total += value

    def total_for(self, **labels: str) -> float:
        """Sum of values recorded with at least the given labels."""
        return sum(
            value
            for value, recorded in self.calls
            if all((recorded or {}).get(k) == v for k, v in labels.items())
        )


class _FakeHistogram(Histogram):
    """In-memory histogram that records all record() calls."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[float, dict[str, str] | None]] = []

    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        self.calls.append((value, labels))

    @property
    def values(self) -> list[float]:
        return [v for v, _ in self.calls]


class FakeMetricsRegistry(Metrics):
    """In-memory :class:`Metrics` double.

    Usage::

        metrics = FakeMetricsRegistry()
        dispatcher = MessageDispatcher(client, registry, scopes, metrics=metrics)
        ...
        assert metrics.counters["labelbus.messages.processed"].total_for(decision="complete") == 1
    """

    def __init__(self) -> None:
        self.counters: dict[str, _FakeCounter] = {}
        self.histograms: dict[str, _FakeHistogram] = {}

    def counter(self, name: str, description: str = "", unit: str = "") -> _FakeCounter:
        if name not in self.counters:
            self.counters[name] = _FakeCounter(name)
        return self.counters[name]

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> _FakeHistogram:
        if name not in self.histograms:
            self.histograms[name] = _FakeHistogram(name)
        return self.histograms[name]

    def reset(self) -> None:
        self.counters.clear()
        self.histograms.clear()


__all__ = ["FakeMetricsRegistry"]
