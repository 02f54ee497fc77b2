"""Config – env-based settings and message source bindings."""

from labelbus.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    MessageSources,
    MessagingSettings,
    QueueSource,
    Settings,
    SettingsLoader,
    SubscriptionSource,
)
from labelbus.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MessageSources",
    "MessagingSettings",
    "MissingRequiredSettingError",
    "QueueSource",
    "Settings",
    "SettingsLoader",
    "SubscriptionSource",
]
