"""Tests for the logging setup."""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog
from hypothesis import given, settings, strategies as st

from game_collection.services.logging import APP_LOG_FILE, ERROR_LOG_FILE, _renders_json, configure_logging


RESERVED_KEYS = {"event", "level", "logger", "timestamp", "exc_info", "exception", "stack_info"}


def read_records(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


class TestConfigureLogging:

    def test_console_handler_in_development(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            handlers = configure_logging(log_level="debug")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert root_logger.handlers == handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    def test_files_without_console(self, tmp_path: Path) -> None:
        handlers = configure_logging(log_dir=tmp_path, console=False)

        assert len(handlers) == 2
        assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)
        assert handlers[1].level == logging.ERROR

    def test_no_console_and_no_dir_installs_nothing(self) -> None:
        assert configure_logging(console=False) == []
        assert logging.getLogger().handlers == []

    def test_unknown_level_falls_back_to_info(self) -> None:
        _ = configure_logging(log_level="chatty", console=False)
        assert logging.getLogger().level == logging.INFO

    def test_reconfiguring_replaces_handlers(self, tmp_path: Path) -> None:
        first = configure_logging(log_dir=tmp_path, console=False)
        second = configure_logging(console=True)

        assert logging.getLogger().handlers == second
        assert all(h not in logging.getLogger().handlers for h in first)

    def test_file_logging_writes_json(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            _ = configure_logging(log_level="INFO", log_dir=tmp_path, console=False)

        structlog.stdlib.get_logger("collection").info("Game added", title="Hades")

        records = read_records(tmp_path / APP_LOG_FILE)
        assert records[-1]["event"] == "Game added"
        assert records[-1]["title"] == "Hades"
        assert records[-1]["level"] == "info"
        assert records[-1]["logger"] == "collection"
        assert "timestamp" in records[-1]

    def test_only_errors_reach_error_log(self, tmp_path: Path) -> None:
        _ = configure_logging(log_level="DEBUG", log_dir=tmp_path, console=False)

        logger = structlog.stdlib.get_logger("data_manager")
        logger.info("Collection saved")
        logger.error("Failed to save record", path="/data/gamedata.json")

        errors = read_records(tmp_path / ERROR_LOG_FILE)
        assert [record["event"] for record in errors] == ["Failed to save record"]
        assert errors[0]["path"] == "/data/gamedata.json"
        assert len(read_records(tmp_path / APP_LOG_FILE)) == 2

    def test_level_filters_records(self, tmp_path: Path) -> None:
        _ = configure_logging(log_level="WARNING", log_dir=tmp_path, console=False)

        logger = structlog.stdlib.get_logger("test")
        logger.info("ignored")
        logger.warning("kept")

        assert [record["event"] for record in read_records(tmp_path / APP_LOG_FILE)] == ["kept"]


@pytest.mark.parametrize(
    ("environment", "log_dir", "expected"),
    [
        ("development", None, False),
        ("production", None, True),
        ("development", Path("logs"), True),
    ],
)
def test_json_rendering_choice(environment: str, log_dir: Path | None, expected: bool) -> None:
    with patch.dict(os.environ, {"ENVIRONMENT": environment}):
        assert _renders_json(log_dir) is expected


@given(
    log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    logger_name=st.text(min_size=1, max_size=30).filter(lambda x: x.isidentifier()),
    message=st.text(min_size=1, max_size=100).filter(lambda x: "\n" not in x and "\r" not in x),
    context_data=st.dictionaries(
        keys=st.text(min_size=1, max_size=20).filter(lambda x: x.isidentifier() and x not in RESERVED_KEYS),
        values=st.one_of(st.text(max_size=50), st.integers(), st.booleans()),
        max_size=4,
    ),
)
@settings(deadline=None, max_examples=30)
def test_structured_records_keep_context(
    tmp_path_factory: pytest.TempPathFactory,
    log_level: str,
    logger_name: str,
    message: str,
    context_data: dict[str, str | int | bool],
) -> None:
    """Every record carries event, level, timestamp, logger and the bound context."""
    log_dir = tmp_path_factory.mktemp("logs")
    _ = configure_logging(log_level="DEBUG", log_dir=log_dir, console=False)

    logger = structlog.stdlib.get_logger(logger_name)
    getattr(logger, log_level.lower())(message, **context_data)

    for handler in logging.getLogger().handlers:
        handler.flush()
    parsed = read_records(log_dir / APP_LOG_FILE)[-1]

    assert parsed["event"] == message
    assert parsed["level"] == log_level.lower()
    assert parsed["logger"] == logger_name
    assert "T" in parsed["timestamp"]
    for key, value in context_data.items():
        assert parsed[key] == value


def test_exceptions_include_traceback(tmp_path: Path) -> None:
    _ = configure_logging(log_level="DEBUG", log_dir=tmp_path, console=False)
    logger = structlog.stdlib.get_logger("test")

    try:
        raise OSError("disk full")
    except OSError:
        logger.error("Failed to save record", exc_info=True, error_type="OSError")

    parsed = read_records(tmp_path / ERROR_LOG_FILE)[-1]
    assert parsed["error_type"] == "OSError"
    assert "Traceback" in parsed["exception"]
    assert "disk full" in parsed["exception"]
