"""Application – handler registration and message dispatch."""

from labelbus.application.dispatch import (
    DispatcherSet,
    InvocationResult,
    MessageDispatcher,
    MessagingService,
    aggregate_outcomes,
    decide,
)
from labelbus.application.handlers import (
    HandlerRegistry,
    Lifetime,
    ResolutionScope,
    ScopeFactory,
    handles,
)

__all__ = [
    "DispatcherSet",
    "HandlerRegistry",
    "InvocationResult",
    "Lifetime",
    "MessageDispatcher",
    "MessagingService",
    "ResolutionScope",
    "ScopeFactory",
    "aggregate_outcomes",
    "decide",
    "handles",
]
