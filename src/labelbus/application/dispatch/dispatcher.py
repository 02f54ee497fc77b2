"""Application dispatch – MessageDispatcher.

One dispatcher serves one queue or subscription. For every delivery it
resolves the payload type from the message label, decodes the body, invokes
every registered handler concurrently inside a per-message resolution scope
and settles the message exactly once from the aggregated outcomes:

* label missing → dead-letter ``"Message label is not set."``
* label unknown → complete (nobody here is interested)
* body undecodable → dead-letter with the decode error text
* handler abort → dead-letter with the first abort reason
* handler failure → leave locked for broker redelivery
* anything else → logged and re-raised to the broker client
"""
from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from labelbus.application.dispatch.aggregation import OK, InvocationResult, aggregate_outcomes, decide
from labelbus.application.handlers import HandlerRegistry, ScopeFactory
from labelbus.kernel.errors import (
    DispatchCancelledError,
    HandlerContractError,
    MissingLabelError,
    SerializationError,
)
from labelbus.kernel.messaging import (
    DEAD_LETTER_REASON,
    DecisionKind,
    DispatchDecision,
    ExceptionHandler,
    HandlerOutcome,
    InboundMessage,
    MessageSerializer,
    ReceiverClient,
)
from labelbus.observability.correlation import LogCorrelationHandler
from labelbus.observability.logging import get_logger, truncate_body
from labelbus.observability.metrics import DispatchMetrics, Metrics, NoopMetrics

T = TypeVar("T")

UNEXPECTED_ERROR = "unexpected_error"


async def _gather_all(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Wait for every awaitable, then raise the first failure if any."""
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results  # type: ignore[return-value]


async def _invoke(operation: Callable[[Any], Any], payload: Any) -> HandlerOutcome:
    outcome = operation(payload)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    if not isinstance(outcome, HandlerOutcome):
        raise HandlerContractError(operation.__qualname__, outcome)
    return outcome


class MessageDispatcher:
    """Route deliveries from one receiver client to registered handlers."""

    def __init__(
        self,
        client: ReceiverClient,
        registry: HandlerRegistry,
        scope_factory: ScopeFactory,
        log_correlation: LogCorrelationHandler | None = None,
        *,
        serializer: MessageSerializer[Any] | None = None,
        metrics: Metrics | None = None,
        logger: Any = None,
        entity: str = "",
        log_body_max_length: int = 4096,
    ) -> None:
        self._client = client
        self._registry = registry
        self._scope_factory = scope_factory
        self._log_correlation = log_correlation or LogCorrelationHandler.disabled()
        self._serializer = serializer or registry.serializer
        self._metrics = DispatchMetrics(metrics or NoopMetrics(), entity)
        if logger is None:
            logger = get_logger(__name__, entity=entity) if entity else get_logger(__name__)
        self._log = logger
        self._entity = entity
        self._body_limit = log_body_max_length

    @property
    def client(self) -> ReceiverClient:
        return self._client

    @property
    def entity(self) -> str:
        return self._entity

    async def process(self, message: InboundMessage, cancellation: asyncio.Event | None = None) -> None:
        """Handle one delivery; the broker client's pump calls this once per message."""
        with self._log_correlation.begin_scope(message) as correlation:
            log = correlation.bind(self._log)
            body = truncate_body(message.text, self._body_limit)
            started = time.perf_counter()
            log.debug("message_received", sequence_number=message.sequence_number, body=body)
            try:
                decision = await self._decide(message, body, log, cancellation)
                await self._settle(message, decision, body, log)
            except Exception:
                self._metrics.failed()
                log.exception(
                    "message_handling_failed",
                    label=message.label,
                    body=body,
                    sequence_number=message.sequence_number,
                    error_category=UNEXPECTED_ERROR,
                )
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            self._metrics.decided(decision)
            self._metrics.elapsed(elapsed_ms)
            log.debug(
                "message_handled",
                decision=decision.kind.value,
                handling_time_ms=round(elapsed_ms, 3),
            )

    async def dispatch(
        self,
        label: str,
        body: bytes,
        *,
        log: Any = None,
        cancellation: asyncio.Event | None = None,
    ) -> DispatchDecision:
        """Resolve, decode and invoke handlers for a labelled body.

        Raises :class:`SerializationError` when the body does not decode into
        the type registered for *label*.
        """
        log = log or self._log
        payload_type = self._registry.resolve_type(label)
        if payload_type is None:
            log.debug(
                "no_handler_registered",
                label=label,
                body=truncate_body(body.decode("utf-8", errors="replace"), self._body_limit),
            )
            return DispatchDecision.complete()

        payload = self._serializer.deserialize(body, payload_type)

        async with self._scope_factory.new_scope() as scope:
            handlers = self._registry.resolve_handlers(payload_type, scope)
            if cancellation is not None and cancellation.is_set():
                raise DispatchCancelledError(f"Processing of '{label}' was cancelled")
            results = await _gather_all(
                self._call_handler(handler, payload, payload_type, log) for handler in handlers
            )
        return decide(results)

    async def _decide(
        self,
        message: InboundMessage,
        body: str,
        log: Any,
        cancellation: asyncio.Event | None,
    ) -> DispatchDecision:
        if message.label is None or not message.label.strip():
            error = MissingLabelError()
            log.error("message_label_missing", label=message.label, body=body, **error.log_fields())
            return DispatchDecision.dead_letter(error.message)
        try:
            return await self.dispatch(message.label, message.body, log=log, cancellation=cancellation)
        except SerializationError as exc:
            log.error(
                "message_deserialization_failed",
                label=message.label,
                body=body,
                **exc.log_fields(),
            )
            return DispatchDecision.dead_letter(exc.message)

    async def _call_handler(
        self,
        handler: Any,
        payload: Any,
        payload_type: type[Any],
        log: Any,
    ) -> InvocationResult:
        operations = self._registry.operations_for(handler, payload_type)
        if not operations:
            return OK
        handler_name = type(handler).__qualname__
        if len(operations) > 1:
            log.warning(
                "multiple_handler_operations",
                handler_type=handler_name,
                payload_type=payload_type.__qualname__,
                count=len(operations),
            )

        outcomes = await _gather_all(_invoke(operation, payload) for operation in operations)
        result = aggregate_outcomes(outcomes)
        if result.aborted:
            log.warning("handler_aborted", handler_type=handler_name, reason=result.abort_reason)
        elif not result.ok:
            log.warning("handler_failed", handler_type=handler_name)
        return result

    async def _settle(
        self,
        message: InboundMessage,
        decision: DispatchDecision,
        body: str,
        log: Any,
    ) -> None:
        if decision.kind is DecisionKind.COMPLETE:
            await self._client.complete(message.lock_token)
        elif decision.kind is DecisionKind.DEAD_LETTER:
            log.warning(
                "message_dead_lettered",
                label=message.label,
                body=body,
                reason=decision.reason,
                error_category="dead_letter",
            )
            await self._client.dead_letter(message.lock_token, DEAD_LETTER_REASON, decision.reason or "")
        else:
            log.warning(
                "message_left_for_redelivery",
                label=message.label,
                body=body,
                sequence_number=message.sequence_number,
                error_category="handler_failed",
            )

    def register_message_handler(self, exception_handler: ExceptionHandler) -> None:
        self._client.register_message_handler(self.process, exception_handler)

    async def close(self) -> None:
        await self._client.close()


__all__ = ["MessageDispatcher"]
