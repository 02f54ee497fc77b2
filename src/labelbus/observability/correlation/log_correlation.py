"""Observability – LogCorrelationHandler.

Derives or assigns a correlation identifier for each inbound message and
exposes it to logging for the duration of ``process``::

    handler = LogCorrelationHandler(LogCorrelationOptions(enabled=True))
    with handler.begin_scope(message) as scope:
        log = scope.bind(logger)
        log.info("handling")          # carries CorrelationId=<id>

The identifier travels two ways: explicitly, bound onto the logger the
dispatcher threads through its call chain, and through
:class:`CorrelationContext` for log lines emitted by handler code.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any
from uuid import uuid4

from labelbus.kernel.messaging import InboundMessage
from labelbus.observability.correlation.context import CorrelationContext, MessageCorrelation


@dataclasses.dataclass(frozen=True)
class LogCorrelationOptions:
    enabled: bool = True
    log_property_name: str = "CorrelationId"
    message_property_name: str = "logCorrelationId"
    on_correlation_id_assigned: Callable[[str], None] | None = None


@dataclasses.dataclass(frozen=True)
class CorrelationScope:
    """Handle returned by :meth:`LogCorrelationHandler.begin_scope`.

    ``correlation`` is ``None`` when correlation logging is disabled.
    """
    correlation: MessageCorrelation | None = None

    @property
    def correlation_id(self) -> str | None:
        return self.correlation.correlation_id if self.correlation else None

    @property
    def log_fields(self) -> dict[str, str]:
        return self.correlation.as_log_fields() if self.correlation else {}

    def bind(self, logger: Any) -> Any:
        if self.correlation is None:
            return logger
        return logger.bind(**self.correlation.as_log_fields())


_INERT_SCOPE = CorrelationScope()


class LogCorrelationHandler:
    """Open a correlation scope around the processing of one message."""

    def __init__(self, options: LogCorrelationOptions | None = None) -> None:
        self._options = options or LogCorrelationOptions()

    @classmethod
    def disabled(cls) -> "LogCorrelationHandler":
        return cls(LogCorrelationOptions(enabled=False))

    @property
    def options(self) -> LogCorrelationOptions:
        return self._options

    def begin_scope(self, message: InboundMessage) -> AbstractContextManager[CorrelationScope]:
        if not self._options.enabled:
            return _INERT
        return self._correlated_scope(message)

    def resolve_correlation_id(self, message: InboundMessage) -> str:
        properties = message.user_properties
        name = self._options.message_property_name
        if name not in properties:
            return str(uuid4())
        return str(properties[name])

    @contextmanager
    def _correlated_scope(self, message: InboundMessage) -> Iterator[CorrelationScope]:
        correlation = MessageCorrelation(
            correlation_id=self.resolve_correlation_id(message),
            log_property_name=self._options.log_property_name,
        )
        if self._options.on_correlation_id_assigned is not None:
            self._options.on_correlation_id_assigned(correlation.correlation_id)
        token = CorrelationContext.set(correlation)
        try:
            yield CorrelationScope(correlation)
        finally:
            CorrelationContext.reset(token)


class _InertScope(AbstractContextManager[CorrelationScope]):
    __slots__ = ()

    def __enter__(self) -> CorrelationScope:
        return _INERT_SCOPE

    def __exit__(self, *_: Any) -> None:
        return None


_INERT = _InertScope()


__all__ = ["CorrelationScope", "LogCorrelationHandler", "LogCorrelationOptions"]
