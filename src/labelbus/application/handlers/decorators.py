"""Application handlers – @handles method decorator."""
from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

_HANDLES_ATTR = "__labelbus_handles__"


def handles(payload_type: type[Any]) -> Callable[[F], F]:
    """Mark a method as the handling operation for *payload_type*.

    Usage::

        class BillingHandler:
            @handles(OrderPlaced)
            async def on_order_placed(self, event: OrderPlaced) -> HandlerOutcome:
                ...
                return HandlerOutcome.success()

    The operation takes exactly the payload and returns a ``HandlerOutcome``,
    directly or as an awaitable. Operations are collected once, when the
    class is passed to :meth:`HandlerRegistry.register_handler`.
    """
    def decorator(func: F) -> F:
        setattr(func, _HANDLES_ATTR, payload_type)
        return func

    return decorator


def handled_type(func: Any) -> type[Any] | None:
    """Return the payload type *func* was marked with, if any."""
    return getattr(func, _HANDLES_ATTR, None)


__all__ = ["handled_type", "handles"]
