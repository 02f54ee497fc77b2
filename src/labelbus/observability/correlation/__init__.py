"""Observability – per-message log correlation."""
from labelbus.observability.correlation.context import CorrelationContext, MessageCorrelation
from labelbus.observability.correlation.log_correlation import (
    CorrelationScope,
    LogCorrelationHandler,
    LogCorrelationOptions,
)

__all__ = [
    "CorrelationContext",
    "CorrelationScope",
    "LogCorrelationHandler",
    "LogCorrelationOptions",
    "MessageCorrelation",
]
