"""Application handlers – HandlerRegistry.

Maps type labels to payload types and payload types to handler
registrations. Everything is populated once at startup; lookups during
dispatch only read.

Usage::

    registry = HandlerRegistry()
    registry.register_handler(BillingHandler)                  # scoped
    registry.register_handler(AuditHandler, lifetime=Lifetime.SINGLETON)
    registry.register_message_type(OrderPlaced, label="order.placed")

    payload_type = registry.resolve_type("order.placed")
    async with scope_factory.new_scope() as scope:
        handlers = registry.resolve_handlers(payload_type, scope)
"""
from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable
from typing import Any

from labelbus.application.handlers.decorators import handled_type
from labelbus.application.handlers.scope import InstanceFactory, Lifetime, ResolutionScope
from labelbus.kernel.errors import HandlerRegistrationError, SerializationError
from labelbus.kernel.messaging import JsonMessageSerializer, MessageSerializer
from labelbus.observability.logging import get_logger


@dataclasses.dataclass(frozen=True)
class HandlerRegistration:
    """One handler class with the operation names it exposes per payload type."""

    handler_type: type[Any]
    factory: InstanceFactory
    lifetime: Lifetime
    operations: dict[type[Any], tuple[str, ...]]


def _default_factory(handler_type: type[Any]) -> InstanceFactory:
    return lambda _scope: handler_type()


class HandlerRegistry:
    """Label → payload type → handler registrations.

    With ``strict=True`` a class exposing more than one operation for the
    same payload type is rejected instead of logged. Payload types are
    checked against *serializer* when registered; dispatchers built on this
    registry decode with the same serializer unless given their own.
    """

    def __init__(
        self,
        *,
        strict: bool = False,
        serializer: MessageSerializer[Any] | None = None,
        logger: Any = None,
    ) -> None:
        self._strict = strict
        self._serializer = serializer or JsonMessageSerializer()
        self._log = logger or get_logger(__name__)
        self._types: dict[str, type[Any]] = {}
        self._handlers: dict[type[Any], list[HandlerRegistration]] = {}
        self._by_class: dict[type[Any], HandlerRegistration] = {}

    @property
    def labels(self) -> dict[str, type[Any]]:
        return dict(self._types)

    @property
    def serializer(self) -> MessageSerializer[Any]:
        return self._serializer

    def register_message_type(self, payload_type: type[Any], label: str | None = None) -> None:
        label = label or payload_type.__name__
        existing = self._types.get(label)
        if existing is not None and existing is not payload_type:
            raise HandlerRegistrationError(
                f"Label '{label}' is already bound to {existing.__qualname__}",
                detail={"label": label, "payload_type": payload_type.__qualname__},
            )
        self._check_decodable(payload_type)
        self._types[label] = payload_type

    def register_handler(
        self,
        handler_type: type[Any],
        factory: InstanceFactory | None = None,
        *,
        lifetime: Lifetime = Lifetime.SCOPED,
    ) -> HandlerRegistration:
        if handler_type in self._by_class:
            raise HandlerRegistrationError(f"{handler_type.__qualname__} is already registered")

        operations = self._collect_operations(handler_type)
        if not operations:
            raise HandlerRegistrationError(
                f"{handler_type.__qualname__} exposes no @handles operation"
            )

        for payload_type in operations:
            self._check_decodable(payload_type)

        registration = HandlerRegistration(
            handler_type=handler_type,
            factory=factory or _default_factory(handler_type),
            lifetime=lifetime,
            operations=operations,
        )
        for payload_type in operations:
            if payload_type not in self._types.values():
                self.register_message_type(payload_type)
            self._handlers.setdefault(payload_type, []).append(registration)
        self._by_class[handler_type] = registration
        self._log.debug(
            "handler_registered",
            handler_type=handler_type.__qualname__,
            payload_types=[t.__qualname__ for t in operations],
            lifetime=lifetime.value,
        )
        return registration

    def resolve_type(self, label: str) -> type[Any] | None:
        return self._types.get(label)

    def resolve_handlers(self, payload_type: type[Any], scope: ResolutionScope) -> list[Any]:
        return [
            scope.resolve(registration.handler_type, registration.factory, registration.lifetime)
            for registration in self._handlers.get(payload_type, [])
        ]

    def operations_for(self, handler: Any, payload_type: type[Any]) -> list[Callable[[Any], Any]]:
        """Bound handling operations *handler* exposes for exactly *payload_type*."""
        registration = self._by_class.get(type(handler))
        if registration is None:
            return []
        return [getattr(handler, name) for name in registration.operations.get(payload_type, ())]

    def _check_decodable(self, payload_type: type[Any]) -> None:
        try:
            self._serializer.validate_type(payload_type)
        except SerializationError as exc:
            raise HandlerRegistrationError(
                f"{payload_type.__qualname__} cannot be decoded by {type(self._serializer).__name__}: {exc.message}",
                detail={"payload_type": payload_type.__qualname__},
                cause=exc,
            ) from exc

    def _collect_operations(self, handler_type: type[Any]) -> dict[type[Any], tuple[str, ...]]:
        found: dict[type[Any], list[str]] = {}
        for name, member in inspect.getmembers(handler_type, callable):
            payload_type = handled_type(member)
            if payload_type is not None:
                found.setdefault(payload_type, []).append(name)

        for payload_type, names in found.items():
            if len(names) < 2:
                continue
            if self._strict:
                raise HandlerRegistrationError(
                    f"{handler_type.__qualname__} has more than one operation for "
                    f"{payload_type.__qualname__}: {', '.join(names)}"
                )
            self._log.warning(
                "ambiguous_handler_operations",
                handler_type=handler_type.__qualname__,
                payload_type=payload_type.__qualname__,
                operations=names,
                note="every operation will be invoked for each message",
            )
        return {payload_type: tuple(names) for payload_type, names in found.items()}


__all__ = ["HandlerRegistration", "HandlerRegistry"]
