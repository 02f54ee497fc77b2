"""Kernel messaging – inbound broker envelope."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any


@dataclasses.dataclass(frozen=True)
class InboundMessage:
    """One delivery handed to the dispatcher by the broker client.

    ``label`` is the type discriminator, ``lock_token`` identifies this
    delivery attempt for completion or dead-lettering.
    """

    body: bytes
    lock_token: str
    label: str | None = None
    sequence_number: int = 0
    user_properties: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    message_id: str | None = None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


__all__ = ["InboundMessage"]
