"""
Tests for the logging configuration helpers.
"""
import logging
import pytest
from unittest.mock import patch
from core.logging_config import (
    ColoredFormatter,
    LLMLogger,
    setup_logging,
    get_llm_logger,
    configure_logging_from_settings,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_console_and_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "weaver.log"

        root = setup_logging(log_level="debug", log_format="simple", log_file=log_file, enable_colors=False)
        logging.getLogger("services.agent_weaver").debug("hello from the weaver")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert "hello from the weaver" in log_file.read_text()

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        root = setup_logging(log_level="chatty")
        assert root.level == logging.INFO

    def test_debug_setting_forces_debug(self, restore_root_logger):
        with patch("core.config.settings") as mock_settings:
            mock_settings.debug = True
            mock_settings.log_level = "WARNING"
            configure_logging_from_settings()

        assert restore_root_logger.level == logging.DEBUG


class TestFormatters:
    """Test the formatter and LLM logger helpers."""

    def test_colored_formatter_colors_level(self):
        formatter = ColoredFormatter("%(levelname)s - %(message)s")
        record = logging.LogRecord("test", logging.ERROR, __file__, 1, "failed", None, None)

        output = formatter.format(record)

        assert "failed" in output
        assert "\033[" in output

    def test_llm_logger_truncates(self, caplog):
        llm_logger = LLMLogger(logging.getLogger("test.llm"), preview_length=10)

        with caplog.at_level(logging.INFO, logger="test.llm"):
            llm_logger.log_llm_request("claude-test", "system", "x" * 50, request_id="abc")
            llm_logger.log_llm_error("claude-test", "boom", request_id="abc")

        assert "claude-test" in caplog.text
        assert "x" * 50 not in caplog.text
        assert "boom" in caplog.text

    def test_get_llm_logger(self):
        assert isinstance(get_llm_logger("services.agent_weaver"), LLMLogger)
