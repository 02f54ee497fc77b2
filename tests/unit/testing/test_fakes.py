"""Unit tests for the in-memory testing doubles."""

from __future__ import annotations

import asyncio

import pytest

from labelbus.kernel.messaging import ExceptionContext, InboundMessage
from labelbus.testing import FakeMetricsRegistry, InMemoryReceiverClient


class TestInMemoryReceiverClient:
    def test_records_settlements(self) -> None:
        client = InMemoryReceiverClient()

        async def run() -> None:
            await client.complete("a")
            await client.dead_letter("b", "Invalid message", "why")
            await client.close()

        asyncio.run(run())
        assert client.completed == ["a"]
        assert client.dead_lettered == [("b", "Invalid message", "why")]
        assert client.settlements == 2
        assert client.closed

    def test_deliver_without_registration_raises(self) -> None:
        with pytest.raises(RuntimeError):
            asyncio.run(InMemoryReceiverClient().deliver(InboundMessage(b"", "t")))

    def test_deliver_passes_cancellation_event(self) -> None:
        client = InMemoryReceiverClient()
        seen: list[asyncio.Event | None] = []

        async def callback(message: InboundMessage, cancellation: asyncio.Event | None) -> None:
            seen.append(cancellation)

        async def on_error(context: ExceptionContext) -> None:
            pass

        client.register_message_handler(callback, on_error)
        assert client.registered
        asyncio.run(client.deliver(InboundMessage(b"", "t")))
        assert seen == [client.cancellation]

    def test_callback_failure_goes_to_exception_handler(self) -> None:
        client = InMemoryReceiverClient("orders/subscriptions/billing")
        errors: list[ExceptionContext] = []

        async def callback(message: InboundMessage, cancellation: asyncio.Event | None) -> None:
            raise KeyError("x")

        async def on_error(context: ExceptionContext) -> None:
            errors.append(context)

        client.register_message_handler(callback, on_error)
        asyncio.run(client.deliver(InboundMessage(b"", "t")))
        assert errors[0].entity_path == "orders/subscriptions/billing"
        assert errors[0].action == "UserCallback"
        assert isinstance(errors[0].exception, KeyError)


class TestFakeMetricsRegistry:
    def test_counter_totals(self) -> None:
        metrics = FakeMetricsRegistry()
        counter = metrics.counter("c")
        counter.add(1, labels={"decision": "complete", "entity": "q"})
        counter.add(2, labels={"decision": "leave"})
        assert metrics.counter("c") is counter
        assert counter.total == 3
        assert counter.total_for(decision="complete") == 1
        assert counter.total_for(entity="q", decision="leave") == 0

    def test_histogram_values_and_reset(self) -> None:
        metrics = FakeMetricsRegistry()
        metrics.histogram("h").record(1.0)
        metrics.histogram("h").record(2.0, labels={"entity": "q"})
        assert metrics.histograms["h"].values == [1.0, 2.0]
        metrics.reset()
        assert metrics.counters == {}
        assert metrics.histograms == {}
