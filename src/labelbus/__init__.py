"""
labelbus – label-routed message dispatch for broker queues and subscriptions.

Import path convention::

    from labelbus.application.handlers import HandlerRegistry, handles
    from labelbus.application.dispatch import MessageDispatcher, MessagingService
    from labelbus.kernel.messaging import HandlerOutcome, InboundMessage
    from labelbus.adapters.servicebus import ServiceBusClientFactory
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
