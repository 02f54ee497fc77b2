"""Kernel messaging – inbound envelope, outcomes, decisions and broker ports."""
from labelbus.kernel.messaging.message import InboundMessage
from labelbus.kernel.messaging.outcome import (
    DecisionKind,
    DispatchDecision,
    HandlerOutcome,
    OutcomeStatus,
)
from labelbus.kernel.messaging.receiver import (
    DEAD_LETTER_REASON,
    ExceptionContext,
    ExceptionHandler,
    MessageCallback,
    ReceiverClient,
    ReceiverClientFactory,
)
from labelbus.kernel.messaging.serializer import JsonMessageSerializer, MessageSerializer

__all__ = [
    "DEAD_LETTER_REASON",
    "DecisionKind",
    "DispatchDecision",
    "ExceptionContext",
    "ExceptionHandler",
    "HandlerOutcome",
    "InboundMessage",
    "JsonMessageSerializer",
    "MessageCallback",
    "MessageSerializer",
    "OutcomeStatus",
    "ReceiverClient",
    "ReceiverClientFactory",
]
