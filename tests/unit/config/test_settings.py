"""Unit tests for env-driven settings."""

import pathlib
from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from labelbus.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MessagingSettings,
    MissingRequiredSettingError,
    Settings,
)


# ---------------------------------------------------------------------------
# Settings classes used across tests
# ---------------------------------------------------------------------------


@dataclass
class WorkerSettings(Settings):
    _prefix: ClassVar[str] = "WORKER"

    namespace: str
    batch: int = 1
    ratio: float = 0.5
    verbose: bool = False
    topics: list[str] = field(default_factory=list)


_MESSAGING_VARS = [
    "LABELBUS_CORRELATION_LOGGING",
    "LABELBUS_LOG_PROPERTY_NAME",
    "LABELBUS_MESSAGE_PROPERTY_NAME",
    "LABELBUS_MAX_CONCURRENT_CALLS",
    "LABELBUS_SHUTDOWN_GRACE_SECONDS",
    "LABELBUS_LOG_BODY_MAX_LENGTH",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _MESSAGING_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_coerces_field_types(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKER_NAMESPACE", "orders-ns")
        monkeypatch.setenv("WORKER_BATCH", "16")
        monkeypatch.setenv("WORKER_RATIO", "0.25")
        monkeypatch.setenv("WORKER_VERBOSE", "yes")
        monkeypatch.setenv("WORKER_TOPICS", "orders, payments,")
        settings = EnvSettingsLoader().load(WorkerSettings)
        assert settings == WorkerSettings(
            namespace="orders-ns", batch=16, ratio=0.25, verbose=True, topics=["orders", "payments"]
        )

    def test_env_key_uses_prefix(self) -> None:
        assert WorkerSettings.env_key("batch") == "WORKER_BATCH"
        assert MessagingSettings.env_key("max_concurrent_calls") == "LABELBUS_MAX_CONCURRENT_CALLS"
        assert Settings.env_key("batch") == "BATCH"

    def test_missing_required_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WORKER_NAMESPACE", raising=False)
        with pytest.raises(MissingRequiredSettingError) as info:
            EnvSettingsLoader().load(WorkerSettings)
        assert info.value.setting_name == "WORKER_NAMESPACE"
        assert info.value.detail == {"setting": "WORKER_NAMESPACE"}
        assert info.value.code == "missing_required_setting"

    def test_bad_int_raises_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKER_NAMESPACE", "ns")
        monkeypatch.setenv("WORKER_BATCH", "many")
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader().load(WorkerSettings)
        assert info.value.setting_name == "WORKER_BATCH"
        assert info.value.detail["setting"] == "WORKER_BATCH"
        assert "many" not in info.value.detail.values()
        assert isinstance(info.value, ConfigError)


# ---------------------------------------------------------------------------
# MessagingSettings
# ---------------------------------------------------------------------------


class TestMessagingSettings:
    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = EnvSettingsLoader().load(MessagingSettings)
        assert settings.correlation_logging is True
        assert settings.log_property_name == "CorrelationId"
        assert settings.message_property_name == "logCorrelationId"
        assert settings.max_concurrent_calls == 1
        assert settings.shutdown_grace_seconds == 1.0
        assert settings.log_body_max_length == 4096

    def test_loads_from_prefixed_env(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("LABELBUS_CORRELATION_LOGGING", "false")
        clean_env.setenv("LABELBUS_MAX_CONCURRENT_CALLS", "8")
        clean_env.setenv("LABELBUS_SHUTDOWN_GRACE_SECONDS", "2.5")
        clean_env.setenv("LABELBUS_LOG_PROPERTY_NAME", "TraceId")
        settings = EnvSettingsLoader().load(MessagingSettings)
        assert settings.correlation_logging is False
        assert settings.max_concurrent_calls == 8
        assert settings.shutdown_grace_seconds == 2.5
        assert settings.log_property_name == "TraceId"

    @pytest.mark.parametrize(
        "variable,value",
        [
            ("LABELBUS_MAX_CONCURRENT_CALLS", "0"),
            ("LABELBUS_SHUTDOWN_GRACE_SECONDS", "-1"),
            ("LABELBUS_LOG_PROPERTY_NAME", "  "),
            ("LABELBUS_MESSAGE_PROPERTY_NAME", ""),
        ],
    )
    def test_validation_rejects(self, clean_env: pytest.MonkeyPatch, variable: str, value: str) -> None:
        clean_env.setenv(variable, value)
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(MessagingSettings)

    def test_correlation_options(self) -> None:
        assigned: list[str] = []
        options = MessagingSettings(
            correlation_logging=True, log_property_name="TraceId", message_property_name="trace"
        ).correlation_options(assigned.append)
        assert options.enabled is True
        assert options.log_property_name == "TraceId"
        assert options.message_property_name == "trace"
        assert options.on_correlation_id_assigned == assigned.append


class TestDotenvSettingsLoader:
    def test_loads_env_file(self, clean_env: pytest.MonkeyPatch, tmp_path: pathlib.Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("LABELBUS_MAX_CONCURRENT_CALLS=4\nLABELBUS_CORRELATION_LOGGING=0\n")
        settings = DotenvSettingsLoader(str(env_file)).load(MessagingSettings)
        assert settings.max_concurrent_calls == 4
        assert settings.correlation_logging is False

    def test_existing_env_wins_without_override(
        self, clean_env: pytest.MonkeyPatch, tmp_path: pathlib.Path
    ) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("LABELBUS_MAX_CONCURRENT_CALLS=4\n")
        clean_env.setenv("LABELBUS_MAX_CONCURRENT_CALLS", "2")
        assert DotenvSettingsLoader(str(env_file)).load(MessagingSettings).max_concurrent_calls == 2
