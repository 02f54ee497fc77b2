"""Application dispatch – MessagingService.

Hosted lifecycle for a :class:`DispatcherSet`::

    service = MessagingService(dispatchers, shutdown_grace_seconds=1.0)
    async with service:
        await stop_event.wait()
"""
from __future__ import annotations

import asyncio
from typing import Any

from labelbus.application.dispatch.dispatcher_set import DispatcherSet
from labelbus.kernel.messaging import ExceptionContext
from labelbus.observability.logging import get_logger


class MessagingService:
    """Start and stop every dispatcher of the process."""

    def __init__(
        self,
        dispatchers: DispatcherSet,
        *,
        shutdown_grace_seconds: float = 1.0,
        logger: Any = None,
    ) -> None:
        self._dispatchers = dispatchers
        self._grace = shutdown_grace_seconds
        self._log = logger or get_logger(__name__)
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        try:
            self._dispatchers.register_message_handlers(self.on_exception)
        except Exception:
            self._log.exception("message_handler_registration_failed")
            raise
        self._started = True
        self._log.info("messaging_started", dispatchers=len(self._dispatchers))

    async def on_exception(self, context: ExceptionContext) -> None:
        """Out-of-band hook for pump-level failures reported by broker clients."""
        self._log.error(
            "message_handler_exception",
            endpoint=context.endpoint,
            entity_path=context.entity_path,
            action=context.action,
            exc_info=context.exception,
        )

    async def stop(self) -> None:
        self._log.info("messaging_stopping", reason="signal received, shutting down gracefully")
        try:
            await self._dispatchers.close()
        finally:
            self._started = False
        if self._grace > 0:
            await asyncio.sleep(self._grace)

    async def serve(self, stop: asyncio.Event) -> None:
        """Run until *stop* is set, then shut down."""
        await self.start()
        try:
            await stop.wait()
        finally:
            await self.stop()

    async def __aenter__(self) -> "MessagingService":
        await self.start()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.stop()


__all__ = ["MessagingService"]
