"""Application dispatch – DispatcherSet.

Builds one :class:`MessageDispatcher` per configured subscription, then one
per configured queue, and fans lifecycle calls out to all of them.
"""
from __future__ import annotations

import asyncio
from collections.abc import Iterator
from typing import Any

from labelbus.application.dispatch.dispatcher import MessageDispatcher
from labelbus.application.handlers import HandlerRegistry, ScopeFactory
from labelbus.config.settings import MessageSources
from labelbus.kernel.messaging import ExceptionHandler, MessageSerializer, ReceiverClientFactory
from labelbus.observability.correlation import LogCorrelationHandler
from labelbus.observability.logging import get_logger
from labelbus.observability.metrics import Metrics


class DispatcherSet:
    """All dispatchers of one process."""

    def __init__(
        self,
        sources: MessageSources,
        registry: HandlerRegistry,
        scope_factory: ScopeFactory,
        log_correlation: LogCorrelationHandler,
        client_factory: ReceiverClientFactory,
        *,
        serializer: MessageSerializer[Any] | None = None,
        metrics: Metrics | None = None,
        log_body_max_length: int = 4096,
    ) -> None:
        def build(client: Any, entity: str) -> MessageDispatcher:
            return MessageDispatcher(
                client,
                registry,
                scope_factory,
                log_correlation,
                serializer=serializer,
                metrics=metrics,
                logger=get_logger("labelbus.dispatcher", entity=entity),
                entity=entity,
                log_body_max_length=log_body_max_length,
            )

        self._dispatchers: list[MessageDispatcher] = [
            build(
                client_factory.create_subscription_client(subscription),
                f"{subscription.topic_name}/subscriptions/{subscription.name}",
            )
            for subscription in sources.subscriptions
        ] + [
            build(client_factory.create_queue_client(queue), queue.queue_name)
            for queue in sources.queues
        ]

    @property
    def dispatchers(self) -> list[MessageDispatcher]:
        return list(self._dispatchers)

    def __iter__(self) -> Iterator[MessageDispatcher]:
        return iter(self._dispatchers)

    def __len__(self) -> int:
        return len(self._dispatchers)

    def register_message_handlers(self, exception_handler: ExceptionHandler) -> None:
        for dispatcher in self._dispatchers:
            dispatcher.register_message_handler(exception_handler)

    async def close(self) -> None:
        await asyncio.gather(*(dispatcher.close() for dispatcher in self._dispatchers))


__all__ = ["DispatcherSet"]
