"""Infrastructure errors: payload decoding and broker I/O failures."""

from __future__ import annotations

from typing import Any

from labelbus.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a routing decision."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to decode a message body into its resolved payload type."""

    default_code = "decode_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type
        if payload_type is not None:
            self.detail.setdefault("payload_type", payload_type)


class BrokerError(InfrastructureError):
    """The broker client rejected or could not perform a settlement."""

    default_code = "broker_error"

    def __init__(
        self,
        message: str,
        *,
        lock_token: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.lock_token = lock_token
        if lock_token is not None:
            self.detail.setdefault("lock_token", lock_token)


__all__ = ["BrokerError", "InfrastructureError", "SerializationError"]
