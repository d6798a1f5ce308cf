"""Tests for structured JSON logging."""

from __future__ import annotations

import json
import logging

from datetime import date, datetime, timezone

from flagleague.db.games import GameStatus
from flagleague.logging_config import JSONFormatter, _normalize_log_level, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="flagleague.routers.games",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="game_updated %s",
        args=(42,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_core_fields(self) -> None:
        formatter = JSONFormatter(service="flagleague-api", environment="development")
        payload = json.loads(formatter.format(_record()))

        assert payload["message"] == "game_updated 42"
        assert payload["level"] == "info"
        assert payload["logger"] == "flagleague.routers.games"
        assert payload["service"] == "flagleague-api"
        assert payload["environment"] == "development"
        assert "timestamp" in payload

    def test_extras_included(self) -> None:
        formatter = JSONFormatter(service="flagleague-api", environment="development")
        payload = json.loads(formatter.format(_record(game_id=42, fields=["score"])))

        assert payload["game_id"] == 42
        assert payload["fields"] == ["score"]
        assert "args" not in payload

    def test_enums_and_dates_serialised(self) -> None:
        formatter = JSONFormatter(service="flagleague-api", environment="development")
        payload = json.loads(
            formatter.format(
                _record(
                    status=GameStatus.completed,
                    scheduled=datetime(2026, 10, 18, 15, 0, tzinfo=timezone.utc),
                    registered=date(2026, 1, 5),
                )
            )
        )

        assert payload["status"] == "completed"
        assert payload["scheduled"] == "2026-10-18T15:00:00+00:00"
        assert payload["registered"] == "2026-01-05"

    def test_extras_do_not_override_core_fields(self) -> None:
        formatter = JSONFormatter(service="flagleague-api", environment="development")
        payload = json.loads(formatter.format(_record(service="other", level="loud")))

        assert payload["service"] == "flagleague-api"
        assert payload["level"] == "info"


class TestNormalizeLogLevel:
    def test_explicit_level(self) -> None:
        assert _normalize_log_level("warning", "production") == logging.WARNING

    def test_environment_defaults(self) -> None:
        assert _normalize_log_level(None, "production") == logging.INFO
        assert _normalize_log_level(None, "development") == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert _normalize_log_level("chatty", "development") == logging.INFO


class TestConfigureLogging:
    def test_root_handler_and_quiet_loggers(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(service="flagleague-api", environment="production", log_level=None)

            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert root.level == logging.INFO
            assert logging.getLogger("uvicorn.access").level == logging.WARNING
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
