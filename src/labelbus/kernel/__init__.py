"""Kernel – framework-agnostic message and error primitives."""

from labelbus.kernel.errors import (
    BaseError,
    BrokerError,
    DispatchCancelledError,
    DispatchError,
    HandlerContractError,
    HandlerRegistrationError,
    InfrastructureError,
    MissingLabelError,
    SerializationError,
)

__all__ = [
    "BaseError",
    "BrokerError",
    "DispatchCancelledError",
    "DispatchError",
    "HandlerContractError",
    "HandlerRegistrationError",
    "InfrastructureError",
    "MissingLabelError",
    "SerializationError",
]
