"""Tests for logging configuration."""

import json
import logging

import pytest

from cmatrix.core.config import Settings
from cmatrix.core.logging import (
    StructuredFormatter,
    TextFormatter,
    get_context_logger,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_package_logger():
    """Restore the cmatrix logger after setup_logging() replaced its handlers."""
    package_logger = logging.getLogger("cmatrix")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="cmatrix.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Test JSON and text formatters."""

    def test_structured_formatter_emits_json(self):
        payload = json.loads(StructuredFormatter().format(_record()))
        assert payload["level"] == "INFO"
        assert payload["logger"] == "cmatrix.test"
        assert payload["message"] == "hello"
        assert "timestamp" in payload

    def test_structured_formatter_merges_extra_data(self):
        record = _record(extra_data={"operation": "plus", "shapes": [(1, 2)]})
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["operation"] == "plus"
        assert payload["shapes"] == [[1, 2]]

    def test_text_formatter(self):
        line = TextFormatter().format(_record("text message"))
        assert "cmatrix.test - INFO - text message" in line


class TestSetupLogging:
    """Test handler configuration."""

    def test_setup_logging_json(self, restore_package_logger, capsys):
        setup_logging(Settings(LOG_LEVEL="DEBUG", LOG_FORMAT="json"))
        get_logger("cmatrix.demo").debug("configured")
        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["message"] == "configured"
        assert payload["logger"] == "cmatrix.demo"

    def test_setup_logging_respects_level(self, restore_package_logger, capsys):
        setup_logging(Settings(LOG_LEVEL="WARNING", LOG_FORMAT="text"))
        get_logger("cmatrix.demo").info("hidden")
        get_logger("cmatrix.demo").warning("shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_setup_logging_file(self, restore_package_logger, tmp_path):
        log_file = tmp_path / "logs" / "cmatrix.log"
        setup_logging(Settings(LOG_LEVEL="INFO", LOG_FILE=str(log_file)))
        get_logger("cmatrix.demo").info("to file")
        for handler in restore_package_logger.handlers:
            handler.flush()
        assert "to file" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_does_not_duplicate_handlers(self, restore_package_logger):
        setup_logging(Settings())
        setup_logging(Settings())
        assert len(restore_package_logger.handlers) == 1


class TestContextLogger:
    """Test the structured context adapter."""

    def test_context_is_attached(self, caplog):
        logger = get_context_logger("cmatrix.demo", operation="determinant")
        with caplog.at_level(logging.INFO, logger="cmatrix.demo"):
            logger.info("expanding", extra_data={"size": 4})
        record = caplog.records[-1]
        assert record.extra_data == {"operation": "determinant", "size": 4}
