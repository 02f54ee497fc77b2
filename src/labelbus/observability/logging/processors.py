"""Observability – structlog processors and logging helpers.

CorrelationProcessor: injects the current message's correlation id into log events.
get_logger(name): returns a bound structlog logger.
"""
from __future__ import annotations

from typing import Any

import structlog

from labelbus.observability.correlation import CorrelationContext


class CorrelationProcessor:
    """structlog processor that injects context from :class:`CorrelationContext`.

    When a message is being processed the event gains one field, named after
    the scope's ``log_property_name`` (``CorrelationId`` by default). Fields
    already bound on the logger win.

    Usage::

        import structlog
        from labelbus.observability.logging import CorrelationProcessor

        structlog.configure(processors=[CorrelationProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        correlation = CorrelationContext.get()
        if correlation is not None:
            event_dict.setdefault(correlation.log_property_name, correlation.correlation_id)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def truncate_body(body: str, limit: int) -> str:
    """Shorten *body* for logging, marking how much was cut."""
    if limit <= 0 or len(body) <= limit:
        return body
    return f"{body[:limit]}... [{len(body) - limit} more chars]"


__all__ = ["CorrelationProcessor", "get_logger", "truncate_body"]
