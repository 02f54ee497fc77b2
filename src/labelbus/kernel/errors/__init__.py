"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DispatchError            (dispatch.py)
    │   ├── MissingLabelError
    │   ├── HandlerContractError
    │   ├── HandlerRegistrationError
    │   └── DispatchCancelledError
    └── InfrastructureError      (infrastructure.py)
        ├── SerializationError
        └── BrokerError
"""

from labelbus.kernel.errors.base import BaseError
from labelbus.kernel.errors.dispatch import (
    DispatchCancelledError,
    DispatchError,
    HandlerContractError,
    HandlerRegistrationError,
    MissingLabelError,
)
from labelbus.kernel.errors.infrastructure import (
    BrokerError,
    InfrastructureError,
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
