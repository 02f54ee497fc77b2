"""Kernel messaging – handler outcomes and dispatch decisions."""
from __future__ import annotations

import dataclasses
from enum import Enum


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    ABORT = "abort"


@dataclasses.dataclass(frozen=True)
class HandlerOutcome:
    """Result of one handling operation.

    * ``success()`` – the handler processed the payload.
    * ``failed()`` – transient failure, leave the message for redelivery.
    * ``abort(reason)`` – the payload is unprocessable, dead-letter it.
    """

    status: OutcomeStatus
    reason: str | None = None

    @classmethod
    def success(cls) -> "HandlerOutcome":
        return _SUCCESS

    @classmethod
    def failed(cls) -> "HandlerOutcome":
        return _FAILED

    @classmethod
    def abort(cls, reason: str) -> "HandlerOutcome":
        return cls(OutcomeStatus.ABORT, reason)

    @property
    def is_success(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED

    @property
    def is_abort(self) -> bool:
        return self.status is OutcomeStatus.ABORT


_SUCCESS = HandlerOutcome(OutcomeStatus.SUCCESS)
_FAILED = HandlerOutcome(OutcomeStatus.FAILED)


class DecisionKind(str, Enum):
    COMPLETE = "complete"
    DEAD_LETTER = "dead_letter"
    LEAVE = "leave"


@dataclasses.dataclass(frozen=True)
class DispatchDecision:
    """Terminal disposition of one inbound message, computed once."""

    kind: DecisionKind
    reason: str | None = None

    @classmethod
    def complete(cls) -> "DispatchDecision":
        return cls(DecisionKind.COMPLETE)

    @classmethod
    def dead_letter(cls, reason: str) -> "DispatchDecision":
        return cls(DecisionKind.DEAD_LETTER, reason)

    @classmethod
    def leave(cls) -> "DispatchDecision":
        return cls(DecisionKind.LEAVE)


__all__ = ["DecisionKind", "DispatchDecision", "HandlerOutcome", "OutcomeStatus"]
