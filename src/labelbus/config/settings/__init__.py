"""Config settings – env-based messaging configuration."""
from labelbus.config.settings.base import Settings
from labelbus.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from labelbus.config.settings.messaging import MessagingSettings
from labelbus.config.settings.sources import MessageSources, QueueSource, SubscriptionSource

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MessageSources",
    "MessagingSettings",
    "QueueSource",
    "Settings",
    "SettingsLoader",
    "SubscriptionSource",
]
