"""Application dispatch – aggregation, MessageDispatcher, DispatcherSet, MessagingService."""
from labelbus.application.dispatch.aggregation import InvocationResult, aggregate_outcomes, decide
from labelbus.application.dispatch.dispatcher import MessageDispatcher
from labelbus.application.dispatch.dispatcher_set import DispatcherSet
from labelbus.application.dispatch.service import MessagingService

__all__ = [
    "DispatcherSet",
    "InvocationResult",
    "MessageDispatcher",
    "MessagingService",
    "aggregate_outcomes",
    "decide",
]
