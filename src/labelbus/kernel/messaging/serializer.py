"""Kernel messaging – payload serializer port and pydantic JSON implementation."""
from __future__ import annotations

import abc
import functools
from typing import Any, Generic, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from labelbus.kernel.errors import SerializationError

T = TypeVar("T")


class MessageSerializer(abc.ABC, Generic[T]):
    """Port: serialize / deserialize message payloads."""

    @abc.abstractmethod
    def serialize(self, payload: T) -> bytes: ...

    @abc.abstractmethod
    def deserialize(self, data: bytes, target_type: type[T]) -> T: ...

    def validate_type(self, target_type: type[T]) -> None:
        """Raise :class:`SerializationError` if *target_type* can never be decoded.

        Called when a payload type is registered, so an unusable type fails
        at startup instead of on every delivery.
        """


@functools.lru_cache(maxsize=256)
def _adapter(target_type: type[Any]) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", repr(target_type))


def _adapter_for(target_type: type[Any]) -> TypeAdapter[Any]:
    try:
        return _adapter(target_type)
    except PydanticUserError as exc:
        # PydanticSchemaGenerationError for arbitrary classes pydantic cannot build
        raise SerializationError(
            f"No JSON schema for {_type_name(target_type)}: {exc}",
            payload_type=_type_name(target_type),
            cause=exc,
        ) from exc


class JsonMessageSerializer(MessageSerializer[Any]):
    """JSON codec backed by pydantic ``TypeAdapter``.

    Works for pydantic models, dataclasses, ``TypedDict`` and plain types.
    Any validation failure (including malformed JSON) surfaces as
    :class:`SerializationError` carrying pydantic's error text. Arbitrary
    classes without a pydantic schema are rejected by :meth:`validate_type`.
    """

    def serialize(self, payload: Any) -> bytes:
        if isinstance(payload, bytes):
            return payload
        return _adapter_for(type(payload)).dump_json(payload)

    def deserialize(self, data: bytes, target_type: type[Any]) -> Any:
        adapter = _adapter_for(target_type)
        try:
            return adapter.validate_json(data)
        except ValidationError as exc:
            raise SerializationError(
                str(exc), payload_type=_type_name(target_type), cause=exc
            ) from exc

    def validate_type(self, target_type: type[Any]) -> None:
        _adapter_for(target_type)


__all__ = ["JsonMessageSerializer", "MessageSerializer"]
