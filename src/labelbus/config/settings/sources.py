"""Config settings – queue and subscription bindings.

Sources are usually kept in a JSON document next to the rest of the service
configuration::

    {
      "Subscriptions": [
        {"ConnectionString": "Endpoint=sb://...;EntityPath=orders", "Name": "billing"}
      ],
      "Queues": [
        {"ConnectionString": "Endpoint=sb://...", "Name": "invoices"}
      ]
    }

Both PascalCase and snake_case keys are accepted.
"""
from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Mapping
from typing import Any

from labelbus.config.validation import ConfigError, InvalidSettingValueError

DEFAULT_SOURCES_ENV = "LABELBUS_MESSAGE_SOURCES"


def parse_connection_string(connection_string: str) -> dict[str, str]:
    """Split ``Key=Value;Key=Value`` into a dict (values may contain ``=``)."""
    parts: dict[str, str] = {}
    for segment in connection_string.split(";"):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        if not sep:
            raise InvalidSettingValueError("connection_string", segment, "expected Key=Value")
        parts[key.strip()] = value.strip()
    return parts


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclasses.dataclass(frozen=True)
class QueueSource:
    connection_string: str
    name: str = ""

    @property
    def queue_name(self) -> str:
        name = self.name or parse_connection_string(self.connection_string).get("EntityPath", "")
        if not name:
            raise InvalidSettingValueError("name", self.name, "queue name missing and no EntityPath")
        return name


@dataclasses.dataclass(frozen=True)
class SubscriptionSource:
    connection_string: str
    name: str
    topic: str = ""

    @property
    def topic_name(self) -> str:
        topic = self.topic or parse_connection_string(self.connection_string).get("EntityPath", "")
        if not topic:
            raise InvalidSettingValueError("topic", self.topic, "topic missing and no EntityPath")
        return topic


@dataclasses.dataclass
class MessageSources:
    """All queues and subscriptions a process listens to."""

    subscriptions: list[SubscriptionSource] = dataclasses.field(default_factory=list)
    queues: list[QueueSource] = dataclasses.field(default_factory=list)

    def __len__(self) -> int:
        return len(self.subscriptions) + len(self.queues)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MessageSources":
        try:
            subscriptions = [
                SubscriptionSource(
                    connection_string=_pick(item, "ConnectionString", "connection_string"),
                    name=_pick(item, "Name", "name"),
                    topic=_pick(item, "Topic", "topic", default=""),
                )
                for item in _pick(data, "Subscriptions", "subscriptions", default=[])
            ]
            queues = [
                QueueSource(
                    connection_string=_pick(item, "ConnectionString", "connection_string"),
                    name=_pick(item, "Name", "name", default=""),
                )
                for item in _pick(data, "Queues", "queues", default=[])
            ]
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Malformed message sources: {exc}", cause=exc) from exc

        for source in [*subscriptions, *queues]:
            if not source.connection_string:
                raise InvalidSettingValueError("connection_string", source.connection_string, "required")
        for subscription in subscriptions:
            if not subscription.name:
                raise InvalidSettingValueError("name", subscription.name, "subscription name required")
        return cls(subscriptions=subscriptions, queues=queues)

    @classmethod
    def from_json(cls, document: str) -> "MessageSources":
        try:
            data = json.loads(document)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Message sources are not valid JSON: {exc}", cause=exc) from exc
        if not isinstance(data, Mapping):
            raise ConfigError("Message sources must be a JSON object")
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, variable: str = DEFAULT_SOURCES_ENV) -> "MessageSources":
        raw = os.environ.get(variable)
        if raw is None:
            return cls()
        return cls.from_json(raw)


__all__ = ["MessageSources", "QueueSource", "SubscriptionSource", "parse_connection_string"]
