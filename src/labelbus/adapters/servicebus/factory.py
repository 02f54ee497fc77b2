"""Azure Service Bus adapter – ServiceBusClientFactory."""
from __future__ import annotations

from typing import Any

from labelbus.adapters.servicebus.receiver import ServiceBusReceiverClient
from labelbus.config.settings import QueueSource, SubscriptionSource
from labelbus.kernel.messaging import ReceiverClient, ReceiverClientFactory


class ServiceBusClientFactory(ReceiverClientFactory):
    """Build one :class:`ServiceBusReceiverClient` per configured source.

    Topic and queue names fall back to the connection string's ``EntityPath``.
    Extra keyword arguments are passed to every receiver.
    """

    def __init__(self, *, max_concurrent_calls: int = 1, **receiver_kwargs: Any) -> None:
        self._max_concurrent_calls = max_concurrent_calls
        self._receiver_kwargs = receiver_kwargs

    def create_subscription_client(self, source: SubscriptionSource) -> ReceiverClient:
        return ServiceBusReceiverClient(
            source.connection_string,
            topic_name=source.topic_name,
            subscription_name=source.name,
            max_concurrent_calls=self._max_concurrent_calls,
            **self._receiver_kwargs,
        )

    def create_queue_client(self, source: QueueSource) -> ReceiverClient:
        return ServiceBusReceiverClient(
            source.connection_string,
            queue_name=source.queue_name,
            max_concurrent_calls=self._max_concurrent_calls,
            **self._receiver_kwargs,
        )


__all__ = ["ServiceBusClientFactory"]
