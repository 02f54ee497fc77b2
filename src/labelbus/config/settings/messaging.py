"""Config settings – MessagingSettings."""
from __future__ import annotations

import dataclasses
from collections.abc import Callable

from labelbus.config.settings.base import Settings
from labelbus.config.validation import InvalidSettingValueError
from labelbus.observability.correlation import LogCorrelationOptions


@dataclasses.dataclass
class MessagingSettings(Settings):
    """Dispatcher behaviour, loaded from ``LABELBUS_*`` variables."""

    _prefix: dataclasses.ClassVar[str] = "LABELBUS"

    correlation_logging: bool = True
    log_property_name: str = "CorrelationId"
    message_property_name: str = "logCorrelationId"
    max_concurrent_calls: int = 1
    shutdown_grace_seconds: float = 1.0
    log_body_max_length: int = 4096

    def _validate(self) -> None:
        if not self.log_property_name.strip():
            raise InvalidSettingValueError("log_property_name", self.log_property_name, "must not be blank")
        if not self.message_property_name.strip():
            raise InvalidSettingValueError(
                "message_property_name", self.message_property_name, "must not be blank"
            )
        if self.max_concurrent_calls < 1:
            raise InvalidSettingValueError("max_concurrent_calls", self.max_concurrent_calls, "must be >= 1")
        if self.shutdown_grace_seconds < 0:
            raise InvalidSettingValueError(
                "shutdown_grace_seconds", self.shutdown_grace_seconds, "must be >= 0"
            )

    def correlation_options(
        self, on_correlation_id_assigned: Callable[[str], None] | None = None
    ) -> LogCorrelationOptions:
        return LogCorrelationOptions(
            enabled=self.correlation_logging,
            log_property_name=self.log_property_name,
            message_property_name=self.message_property_name,
            on_correlation_id_assigned=on_correlation_id_assigned,
        )


__all__ = ["MessagingSettings"]
