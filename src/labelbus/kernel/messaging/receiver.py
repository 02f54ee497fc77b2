"""Kernel messaging – broker receiver client ports."""
from __future__ import annotations

import abc
import asyncio
import dataclasses
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from labelbus.kernel.messaging.message import InboundMessage

if TYPE_CHECKING:
    from labelbus.config.settings.sources import QueueSource, SubscriptionSource

DEAD_LETTER_REASON = "Invalid message"


@dataclasses.dataclass(frozen=True)
class ExceptionContext:
    """Pump-level failure reported through the out-of-band exception hook."""

    exception: BaseException
    endpoint: str = ""
    entity_path: str = ""
    action: str = ""


type MessageCallback = Callable[[InboundMessage, asyncio.Event | None], Awaitable[None]]
type ExceptionHandler = Callable[[ExceptionContext], Awaitable[None]]


class ReceiverClient(abc.ABC):
    """Port: a peek-lock receiver for one queue or subscription.

    Settlement operations are keyed by lock token and must be safe to call
    concurrently for distinct messages.
    """

    @abc.abstractmethod
    def register_message_handler(
        self,
        callback: MessageCallback,
        exception_handler: ExceptionHandler,
    ) -> None:
        """Start pumping deliveries into *callback*; auto-complete stays off."""
        ...

    @abc.abstractmethod
    async def complete(self, lock_token: str) -> None: ...

    @abc.abstractmethod
    async def dead_letter(self, lock_token: str, reason: str, description: str) -> None: ...

    @abc.abstractmethod
    async def close(self) -> None: ...


class ReceiverClientFactory(abc.ABC):
    """Port: build receiver clients for configured message sources."""

    @abc.abstractmethod
    def create_subscription_client(self, source: "SubscriptionSource") -> ReceiverClient: ...

    @abc.abstractmethod
    def create_queue_client(self, source: "QueueSource") -> ReceiverClient: ...


__all__ = [
    "DEAD_LETTER_REASON",
    "ExceptionContext",
    "ExceptionHandler",
    "MessageCallback",
    "ReceiverClient",
    "ReceiverClientFactory",
]
