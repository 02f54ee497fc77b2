"""Unit tests for structlog helpers."""

from __future__ import annotations

import json
import logging

import structlog
from structlog.testing import capture_logs

from labelbus.observability.correlation import CorrelationContext, MessageCorrelation
from labelbus.observability.logging import (
    CorrelationProcessor,
    JsonLoggerFactory,
    Logger,
    get_logger,
    truncate_body,
)


class TestCorrelationProcessor:
    def test_no_context_leaves_event_unchanged(self) -> None:
        event = CorrelationProcessor()(None, "info", {"event": "x"})
        assert event == {"event": "x"}

    def test_injects_current_correlation(self) -> None:
        token = CorrelationContext.set(MessageCorrelation("c-1", "CorrelationId"))
        try:
            event = CorrelationProcessor()(None, "info", {"event": "x"})
        finally:
            CorrelationContext.reset(token)
        assert event["CorrelationId"] == "c-1"

    def test_bound_value_wins(self) -> None:
        token = CorrelationContext.set(MessageCorrelation("c-1"))
        try:
            event = CorrelationProcessor()(None, "info", {"event": "x", "CorrelationId": "bound"})
        finally:
            CorrelationContext.reset(token)
        assert event["CorrelationId"] == "bound"


class TestGetLogger:
    def test_initial_values_are_bound(self) -> None:
        with capture_logs() as logs:
            get_logger("labelbus.test", entity="orders").info("hello")
        assert logs == [{"event": "hello", "entity": "orders", "log_level": "info"}]

    def test_satisfies_logger_protocol(self) -> None:
        assert isinstance(get_logger("labelbus.test", a=1), Logger)


class TestTruncateBody:
    def test_short_body_untouched(self) -> None:
        assert truncate_body("abc", 10) == "abc"

    def test_long_body_marked(self) -> None:
        assert truncate_body("abcdefghij", 4) == "abcd... [6 more chars]"

    def test_non_positive_limit_disables(self) -> None:
        assert truncate_body("abcdef", 0) == "abcdef"


class TestJsonLoggerFactory:
    def test_configure_emits_json_with_correlation(self, capsys: object) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            JsonLoggerFactory.configure(logging.DEBUG)
            token = CorrelationContext.set(MessageCorrelation("c-json"))
            try:
                structlog.get_logger("labelbus.json").info("message_handled", decision="complete")
            finally:
                CorrelationContext.reset(token)
            err = capsys.readouterr().err  # type: ignore[attr-defined]
        finally:
            structlog.reset_defaults()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        line = json.loads(err.strip().splitlines()[-1])
        assert line["event"] == "message_handled"
        assert line["decision"] == "complete"
        assert line["CorrelationId"] == "c-json"
        assert line["level"] == "info"
        assert line["logger"] == "labelbus.json"
        assert "timestamp" in line
