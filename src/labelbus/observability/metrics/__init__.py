"""Observability – metrics ports and dispatch instruments."""
from labelbus.observability.metrics.ports import Counter, Histogram, Metrics
from labelbus.observability.metrics.noop import NoopMetrics
from labelbus.observability.metrics.dispatch import DispatchMetrics

__all__ = ["Counter", "DispatchMetrics", "Histogram", "Metrics", "NoopMetrics"]
