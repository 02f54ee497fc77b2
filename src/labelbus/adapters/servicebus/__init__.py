"""Azure Service Bus adapter – peek-lock receiver client and factory."""
from labelbus.adapters.servicebus.receiver import ServiceBusReceiverClient, to_inbound_message
from labelbus.adapters.servicebus.factory import ServiceBusClientFactory

__all__ = ["ServiceBusClientFactory", "ServiceBusReceiverClient", "to_inbound_message"]
