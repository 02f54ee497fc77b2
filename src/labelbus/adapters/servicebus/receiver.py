"""Azure Service Bus adapter – ServiceBusReceiverClient.

Peek-lock receiver for one queue or topic subscription. A background pump
receives batches and runs the registered callback for each message, at most
``max_concurrent_calls`` at a time. Settlement is keyed by lock token; the
adapter keeps the received message object for every in-flight token because
the SDK settles message objects, not tokens.
"""
from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic_core import to_json

from labelbus.config.settings.sources import parse_connection_string
from labelbus.kernel.errors import BrokerError
from labelbus.kernel.messaging import (
    ExceptionContext,
    ExceptionHandler,
    InboundMessage,
    MessageCallback,
    ReceiverClient,
)
from labelbus.observability.logging import get_logger

RECEIVE = "Receive"
USER_CALLBACK = "UserCallback"
COMPLETE = "Complete"
DEAD_LETTER = "DeadLetter"


def _require_servicebus() -> Any:
    try:
        import azure.servicebus.aio as servicebus_aio  # type: ignore[import-untyped]
        return servicebus_aio
    except ImportError as exc:
        raise ImportError("Install 'labelbus[servicebus]' to use the Service Bus adapter") from exc


def _text(value: Any) -> Any:
    return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value


_BINARY = (bytes, bytearray, memoryview)


def _body_bytes(body: Any) -> bytes:
    """Flatten an AMQP body: data sections are joined, value and sequence bodies become JSON."""
    if body is None:
        return b""
    if isinstance(body, _BINARY):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, Mapping) or not isinstance(body, Iterable):
        return to_json(body, serialize_unknown=True)
    sections = list(body)
    if all(isinstance(section, _BINARY) for section in sections):
        return b"".join(bytes(section) for section in sections)
    return to_json(sections, serialize_unknown=True)


def to_inbound_message(received: Any) -> InboundMessage:
    """Convert an SDK ``ServiceBusReceivedMessage`` into an :class:`InboundMessage`."""
    properties: Mapping[Any, Any] = received.application_properties or {}
    return InboundMessage(
        body=_body_bytes(received.body),
        lock_token=str(received.lock_token),
        label=received.subject,
        sequence_number=received.sequence_number or 0,
        user_properties={_text(k): _text(v) for k, v in properties.items()},
        message_id=received.message_id,
    )


class ServiceBusReceiverClient(ReceiverClient):
    """``azure-servicebus`` backed :class:`ReceiverClient`."""

    def __init__(
        self,
        connection_string: str,
        *,
        queue_name: str | None = None,
        topic_name: str | None = None,
        subscription_name: str | None = None,
        max_concurrent_calls: int = 1,
        max_wait_time: float | None = 5.0,
        receive_error_delay: float = 1.0,
        drain_timeout: float = 30.0,
        **receiver_kwargs: Any,
    ) -> None:
        servicebus_aio = _require_servicebus()
        if subscription_name is None and queue_name is None:
            raise ValueError("Either queue_name or topic_name/subscription_name is required")

        self._client = servicebus_aio.ServiceBusClient.from_connection_string(connection_string)
        if subscription_name is not None:
            self._receiver = self._client.get_subscription_receiver(
                topic_name=topic_name,
                subscription_name=subscription_name,
                **receiver_kwargs,
            )
            self._entity_path = f"{topic_name}/subscriptions/{subscription_name}"
        else:
            self._receiver = self._client.get_queue_receiver(queue_name=queue_name, **receiver_kwargs)
            self._entity_path = str(queue_name)

        self._endpoint = parse_connection_string(connection_string).get("Endpoint", "")
        self._max_concurrent_calls = max_concurrent_calls
        self._max_wait_time = max_wait_time
        self._receive_error_delay = receive_error_delay
        self._drain_timeout = drain_timeout
        self._semaphore = asyncio.Semaphore(max_concurrent_calls)
        self._in_flight: dict[str, Any] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._pump: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()
        self._cancellation = asyncio.Event()
        self._log = get_logger(__name__, entity_path=self._entity_path)

    @property
    def entity_path(self) -> str:
        return self._entity_path

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def register_message_handler(
        self,
        callback: MessageCallback,
        exception_handler: ExceptionHandler,
    ) -> None:
        if self._pump is not None:
            raise RuntimeError(f"A message handler is already registered for {self._entity_path}")
        self._pump = asyncio.get_running_loop().create_task(
            self._run_pump(callback, exception_handler),
            name=f"labelbus-pump:{self._entity_path}",
        )

    async def complete(self, lock_token: str) -> None:
        await self._receiver.complete_message(self._received(lock_token, COMPLETE))

    async def dead_letter(self, lock_token: str, reason: str, description: str) -> None:
        await self._receiver.dead_letter_message(
            self._received(lock_token, DEAD_LETTER),
            reason=reason,
            error_description=description,
        )

    async def close(self) -> None:
        self._stopping.set()
        if self._pump is not None:
            self._pump.cancel()
            await asyncio.gather(self._pump, return_exceptions=True)
            self._pump = None
        if self._tasks:
            _, pending = await asyncio.wait(set(self._tasks), timeout=self._drain_timeout)
            if pending:
                self._log.warning("in_flight_messages_abandoned", count=len(pending))
                self._cancellation.set()
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)
        await self._receiver.close()
        await self._client.close()

    def _received(self, lock_token: str, action: str) -> Any:
        try:
            return self._in_flight[lock_token]
        except KeyError:
            raise BrokerError(
                f"{action} failed: no in-flight message for lock token on {self._entity_path}",
                lock_token=lock_token,
            ) from None

    async def _run_pump(self, callback: MessageCallback, exception_handler: ExceptionHandler) -> None:
        while not self._stopping.is_set():
            try:
                batch = await self._receiver.receive_messages(
                    max_message_count=self._max_concurrent_calls,
                    max_wait_time=self._max_wait_time,
                )
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001 – reported through the exception hook
                await exception_handler(self._context(exc, RECEIVE))
                await asyncio.sleep(self._receive_error_delay)
                continue

            for received in batch:
                await self._semaphore.acquire()
                task = asyncio.create_task(self._handle(received, callback, exception_handler))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

    async def _handle(
        self,
        received: Any,
        callback: MessageCallback,
        exception_handler: ExceptionHandler,
    ) -> None:
        lock_token: str | None = None
        try:
            message = to_inbound_message(received)
            lock_token = message.lock_token
            self._in_flight[lock_token] = received
            await callback(message, self._cancellation)
        except Exception as exc:  # noqa: BLE001 – reported through the exception hook
            await exception_handler(self._context(exc, USER_CALLBACK))
        finally:
            if lock_token is not None:
                self._in_flight.pop(lock_token, None)
            self._semaphore.release()

    def _context(self, exc: BaseException, action: str) -> ExceptionContext:
        return ExceptionContext(
            exception=exc,
            endpoint=self._endpoint,
            entity_path=self._entity_path,
            action=action,
        )


__all__ = ["ServiceBusReceiverClient", "to_inbound_message"]
