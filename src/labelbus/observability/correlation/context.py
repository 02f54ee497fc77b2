"""Observability – MessageCorrelation, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar, Token


@dataclasses.dataclass(frozen=True)
class MessageCorrelation:
    """Correlation identifier of the message currently being processed."""
    correlation_id: str
    log_property_name: str = "CorrelationId"

    def as_log_fields(self) -> dict[str, str]:
        return {self.log_property_name: self.correlation_id}


_CTX_VAR: ContextVar[MessageCorrelation | None] = ContextVar("_labelbus_correlation", default=None)


class CorrelationContext:
    """Correlation of the current message stored in a ``ContextVar``.

    Each asyncio task gets its own copy, so concurrently processed messages
    never observe each other's identifier.
    """

    @staticmethod
    def set(correlation: MessageCorrelation) -> Token[MessageCorrelation | None]:
        return _CTX_VAR.set(correlation)

    @staticmethod
    def reset(token: Token[MessageCorrelation | None]) -> None:
        _CTX_VAR.reset(token)

    @staticmethod
    def get() -> MessageCorrelation | None:
        return _CTX_VAR.get()

    @staticmethod
    def require() -> MessageCorrelation:
        correlation = _CTX_VAR.get()
        if correlation is None:
            raise RuntimeError("No MessageCorrelation in current context")
        return correlation

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)


__all__ = ["CorrelationContext", "MessageCorrelation"]
