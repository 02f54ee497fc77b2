"""Settings errors shared by the env loaders and the message-source parser.

``InvalidSettingValueError.detail`` never carries the rejected value, since
connection strings hold shared access keys.
"""
from labelbus.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
