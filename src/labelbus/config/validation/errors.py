"""Errors raised while loading dispatcher and message-source settings."""
from labelbus.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be loaded; the dispatcher set is never started."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default has no value in the environment."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' is required and has no default",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot drive a dispatcher (bad number, blank name, missing entity)."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' rejected ({reason}): {value!r}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
