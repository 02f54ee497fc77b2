"""Dispatch errors: routing, handler contract and registration failures."""

from __future__ import annotations

from typing import Any

from labelbus.kernel.errors.base import BaseError


class DispatchError(BaseError):
    """Failure while routing a message to its handlers."""

    default_code = "dispatch_error"


class MissingLabelError(DispatchError):
    """The inbound message carries no usable type label."""

    default_code = "routing_error"

    def __init__(self, message: str = "Message label is not set.", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class HandlerContractError(DispatchError):
    """A handling operation returned something other than a ``HandlerOutcome``."""

    default_code = "handler_contract_error"

    def __init__(self, handler: str, returned: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Handler '{handler}' returned {type(returned).__name__}, expected HandlerOutcome",
            **kwargs,
        )
        self.handler = handler
        self.detail.setdefault("handler_type", handler)


class HandlerRegistrationError(DispatchError):
    """Conflicting or ambiguous handler / message type registration."""

    default_code = "handler_registration_error"


class DispatchCancelledError(DispatchError):
    """Processing was cancelled before the handlers were invoked."""

    default_code = "dispatch_cancelled"


__all__ = [
    "DispatchCancelledError",
    "DispatchError",
    "HandlerContractError",
    "HandlerRegistrationError",
    "MissingLabelError",
]
