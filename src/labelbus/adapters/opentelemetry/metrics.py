"""OpenTelemetry adapter – OtelMetrics."""
from __future__ import annotations

from typing import Any

from labelbus.observability.metrics import Counter, Histogram, Metrics


def _require_otel() -> None:
    try:
        import opentelemetry  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'labelbus[otel]' to use the OpenTelemetry adapter") from exc


class _OtelCounter(Counter):
    def __init__(self, counter: Any) -> None:
        self._c = counter

    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self._c.add(value, attributes=labels)


class _OtelHistogram(Histogram):
    def __init__(self, hist: Any) -> None:
        self._h = hist

    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        self._h.record(value, attributes=labels)


class OtelMetrics(Metrics):
    """Dispatch metrics exported through an OpenTelemetry meter.

    Instruments are created once per name and reused, so several dispatchers
    can share one ``OtelMetrics``.
    """

    def __init__(self, meter_name: str = "labelbus") -> None:
        _require_otel()
        from opentelemetry import metrics  # type: ignore[import-untyped]
        self._meter = metrics.get_meter(meter_name)
        self._instruments: dict[str, Any] = {}

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        if name not in self._instruments:
            self._instruments[name] = _OtelCounter(
                self._meter.create_counter(name, description=description, unit=unit)
            )
        return self._instruments[name]

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram:
        if name not in self._instruments:
            self._instruments[name] = _OtelHistogram(
                self._meter.create_histogram(name, description=description, unit=unit)
            )
        return self._instruments[name]


__all__ = ["OtelMetrics"]
