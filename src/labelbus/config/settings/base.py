"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class Settings:
    """Dataclass read from ``<PREFIX>_<FIELD>`` environment variables.

    ``MessagingSettings`` uses the ``LABELBUS`` prefix, so its
    ``max_concurrent_calls`` field comes from ``LABELBUS_MAX_CONCURRENT_CALLS``.
    Range checks go in ``_validate`` and raise ``InvalidSettingValueError``
    naming the field.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        pass


__all__ = ["Settings"]
