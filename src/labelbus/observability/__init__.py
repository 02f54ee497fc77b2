"""Observability – log correlation, structured logging, metrics."""

from labelbus.observability.correlation import (
    CorrelationContext,
    CorrelationScope,
    LogCorrelationHandler,
    LogCorrelationOptions,
    MessageCorrelation,
)
from labelbus.observability.logging import CorrelationProcessor, JsonLoggerFactory, Logger, get_logger
from labelbus.observability.metrics import Metrics, NoopMetrics

__all__ = [
    "CorrelationContext",
    "CorrelationProcessor",
    "CorrelationScope",
    "JsonLoggerFactory",
    "LogCorrelationHandler",
    "LogCorrelationOptions",
    "Logger",
    "MessageCorrelation",
    "Metrics",
    "NoopMetrics",
    "get_logger",
]
