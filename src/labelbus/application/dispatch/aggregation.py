"""Application dispatch – two-level outcome aggregation.

Level one folds the outcomes of every operation on one handler instance into
an :class:`InvocationResult`. Level two folds the results of every handler
instance into the single :class:`DispatchDecision` for the message:

* any abort → ``dead_letter(<first abort reason>)``
* else any failure → ``leave`` (no broker call, redelivered after lock expiry)
* else → ``complete``
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from labelbus.kernel.messaging import DispatchDecision, HandlerOutcome


@dataclasses.dataclass(frozen=True)
class InvocationResult:
    """Verdict of one handler instance for one payload."""

    ok: bool
    abort_reason: str | None = None

    @property
    def aborted(self) -> bool:
        return self.abort_reason is not None


OK = InvocationResult(ok=True)
NOT_OK = InvocationResult(ok=False)


def aggregate_outcomes(outcomes: Iterable[HandlerOutcome]) -> InvocationResult:
    failed = False
    for outcome in outcomes:
        if outcome.is_abort:
            return InvocationResult(ok=False, abort_reason=outcome.reason or "")
        if outcome.is_failed:
            failed = True
    return NOT_OK if failed else OK


def decide(results: Iterable[InvocationResult]) -> DispatchDecision:
    all_ok = True
    for result in results:
        if result.aborted:
            return DispatchDecision.dead_letter(result.abort_reason or "")
        all_ok = all_ok and result.ok
    return DispatchDecision.complete() if all_ok else DispatchDecision.leave()


__all__ = ["InvocationResult", "NOT_OK", "OK", "aggregate_outcomes", "decide"]
