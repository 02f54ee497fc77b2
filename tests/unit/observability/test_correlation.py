"""Unit tests for per-message log correlation."""

from __future__ import annotations

import asyncio
import uuid

import pytest

from labelbus.kernel.messaging import InboundMessage
from labelbus.observability.correlation import (
    CorrelationContext,
    CorrelationScope,
    LogCorrelationHandler,
    LogCorrelationOptions,
    MessageCorrelation,
)


def _message(**properties: object) -> InboundMessage:
    return InboundMessage(body=b"{}", lock_token="t", label="X", user_properties=properties)


class TestCorrelationContext:
    def test_default_is_none(self) -> None:
        assert CorrelationContext.get() is None

    def test_set_and_reset(self) -> None:
        token = CorrelationContext.set(MessageCorrelation("abc"))
        try:
            assert CorrelationContext.require().correlation_id == "abc"
        finally:
            CorrelationContext.reset(token)
        assert CorrelationContext.get() is None

    def test_require_without_context_raises(self) -> None:
        with pytest.raises(RuntimeError):
            CorrelationContext.require()

    def test_as_log_fields(self) -> None:
        assert MessageCorrelation("abc", "TraceId").as_log_fields() == {"TraceId": "abc"}


class TestLogCorrelationHandler:
    def test_reuses_message_property(self) -> None:
        handler = LogCorrelationHandler(LogCorrelationOptions(enabled=True))
        with handler.begin_scope(_message(logCorrelationId="corr-1")) as scope:
            assert scope.correlation_id == "corr-1"
            assert scope.log_fields == {"CorrelationId": "corr-1"}
            assert CorrelationContext.require().correlation_id == "corr-1"
        assert CorrelationContext.get() is None

    def test_non_string_property_is_stringified(self) -> None:
        handler = LogCorrelationHandler()
        assert handler.resolve_correlation_id(_message(logCorrelationId=42)) == "42"

    def test_property_present_with_null_value_is_reused(self) -> None:
        handler = LogCorrelationHandler()
        with handler.begin_scope(_message(logCorrelationId=None)) as scope:
            assert scope.correlation_id == "None"

    def test_generates_distinct_ids_when_absent(self) -> None:
        handler = LogCorrelationHandler()
        with handler.begin_scope(_message()) as first:
            pass
        with handler.begin_scope(_message()) as second:
            pass
        assert first.correlation_id != second.correlation_id
        uuid.UUID(first.correlation_id or "")
        uuid.UUID(second.correlation_id or "")

    def test_custom_property_names(self) -> None:
        handler = LogCorrelationHandler(
            LogCorrelationOptions(log_property_name="TraceId", message_property_name="trace")
        )
        with handler.begin_scope(_message(trace="t-9", logCorrelationId="ignored")) as scope:
            assert scope.log_fields == {"TraceId": "t-9"}

    def test_callback_receives_assigned_id(self) -> None:
        assigned: list[str] = []
        handler = LogCorrelationHandler(LogCorrelationOptions(on_correlation_id_assigned=assigned.append))
        with handler.begin_scope(_message(logCorrelationId="c-7")):
            pass
        with handler.begin_scope(_message()) as scope:
            pass
        assert assigned == ["c-7", scope.correlation_id]

    def test_disabled_scope_is_inert(self) -> None:
        assigned: list[str] = []
        handler = LogCorrelationHandler(
            LogCorrelationOptions(enabled=False, on_correlation_id_assigned=assigned.append)
        )
        with handler.begin_scope(_message(logCorrelationId="c-1")) as scope:
            assert scope == CorrelationScope()
            assert scope.correlation_id is None
            assert scope.log_fields == {}
            assert CorrelationContext.get() is None
        assert assigned == []

    def test_context_restored_on_error(self) -> None:
        handler = LogCorrelationHandler()
        with pytest.raises(ValueError):
            with handler.begin_scope(_message(logCorrelationId="c")):
                raise ValueError("boom")
        assert CorrelationContext.get() is None

    def test_bind_adds_field_to_logger(self) -> None:
        class FakeLogger:
            def __init__(self) -> None:
                self.bound: dict[str, str] = {}

            def bind(self, **fields: str) -> "FakeLogger":
                self.bound.update(fields)
                return self

        logger = FakeLogger()
        with LogCorrelationHandler().begin_scope(_message(logCorrelationId="c-3")) as scope:
            scope.bind(logger)
        assert logger.bound == {"CorrelationId": "c-3"}

    def test_disabled_bind_returns_logger_unchanged(self) -> None:
        sentinel = object()
        with LogCorrelationHandler.disabled().begin_scope(_message()) as scope:
            assert scope.bind(sentinel) is sentinel

    def test_concurrent_messages_are_isolated(self) -> None:
        handler = LogCorrelationHandler()
        seen: dict[str, str] = {}

        async def process(correlation_id: str, delay: float) -> None:
            with handler.begin_scope(_message(logCorrelationId=correlation_id)):
                await asyncio.sleep(delay)
                seen[correlation_id] = CorrelationContext.require().correlation_id

        async def run() -> None:
            await asyncio.gather(process("a", 0.02), process("b", 0.0), process("c", 0.01))

        asyncio.run(run())
        assert seen == {"a": "a", "b": "b", "c": "c"}
