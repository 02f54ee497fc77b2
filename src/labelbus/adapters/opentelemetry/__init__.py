"""OpenTelemetry adapter – metrics export."""
from labelbus.adapters.opentelemetry.metrics import OtelMetrics

__all__ = ["OtelMetrics"]
