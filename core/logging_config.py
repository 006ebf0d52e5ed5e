"""
Centralized logging configuration for the agent weaver.

Features:
- Colored console output keyed on log level
- Detailed, simple and JSON-ish line formats
- Completion request/response logging with clear separators
- Optional file output without colors
"""

import logging
import re
import sys
from typing import Optional, Union
from pathlib import Path


RESET = "\033[0m"
TIMESTAMP_COLOR = "\033[96m"
NAME_COLOR = "\033[94m"
DEFAULT_LEVEL_COLOR = "\033[97m"

# ANSI color per level name
LEVEL_COLORS = {
    "DEBUG": "\033[90m",
    "INFO": "\033[92m",
    "WARNING": "\033[93m",
    "ERROR": "\033[91m",
    "CRITICAL": "\033[95m",
}

TIMESTAMP_PATTERN = re.compile(r'(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})')

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s - %(message)s"
JSON_FORMAT = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name, timestamp and logger name"""

    def format(self, record):
        line = super().format(record)
        color = LEVEL_COLORS.get(record.levelname, DEFAULT_LEVEL_COLOR)

        line = line.replace(record.levelname, f"{color}{record.levelname}{RESET}", 1)
        line = TIMESTAMP_PATTERN.sub(f"{TIMESTAMP_COLOR}\\1{RESET}", line, count=1)
        if record.name:
            line = line.replace(f"{record.name} - ", f"{NAME_COLOR}{record.name}{RESET} - ", 1)
        return line


class LLMLogger:
    """Logs completion-service traffic with separators so prompts stand out"""

    def __init__(self, logger: logging.Logger, preview_length: int = 500):
        self.logger = logger
        self.preview_length = preview_length
        self.divider = "-" * 60

    def _preview(self, text: str) -> str:
        if len(text) > self.preview_length:
            return f"{text[:self.preview_length]}..."
        return text

    def log_llm_request(self, model: str, system_prompt: str, user_prompt: str,
                        request_id: Optional[str] = None):
        """Log a completion request"""
        self.logger.info(self.divider)
        self.logger.info(f"LLM REQUEST - {model}" + (f" [{request_id}]" if request_id else ""))
        self.logger.debug(f"System prompt: {self._preview(system_prompt)}")
        self.logger.info(f"User prompt: {self._preview(user_prompt)}")
        self.logger.info(self.divider)

    def log_llm_response(self, model: str, response: str, request_id: Optional[str] = None,
                         duration_ms: Optional[float] = None):
        """Log a completion response"""
        self.logger.info(self.divider)
        self.logger.info(f"LLM RESPONSE - {model}" + (f" [{request_id}]" if request_id else ""))
        if duration_ms is not None:
            self.logger.info(f"Response time: {duration_ms:.2f}ms")
        self.logger.info(f"Response: {self._preview(response)}")
        self.logger.info(self.divider)

    def log_llm_error(self, model: str, error: str, request_id: Optional[str] = None):
        """Log a failed completion request"""
        self.logger.error(self.divider)
        self.logger.error(f"LLM ERROR - {model}" + (f" [{request_id}]" if request_id else ""))
        self.logger.error(f"Error: {error}")
        self.logger.error(self.divider)


def _build_formatter(log_format: str, enable_colors: bool) -> logging.Formatter:
    use_colors = enable_colors and sys.stdout.isatty()
    if log_format == "simple":
        return ColoredFormatter(SIMPLE_FORMAT) if use_colors else logging.Formatter(SIMPLE_FORMAT)
    if log_format == "json":
        return logging.Formatter(JSON_FORMAT)
    if use_colors:
        return ColoredFormatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "detailed",
    log_file: Optional[Union[str, Path]] = None,
    enable_colors: bool = True
) -> logging.Logger:
    """
    Replace the root logger's handlers with a console handler and,
    optionally, a plain-text file handler.

    log_level is a level name; unknown names fall back to INFO. log_format
    is one of 'simple', 'detailed' or 'json'. Colors are only used when
    stdout is a terminal.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_build_formatter(log_format, enable_colors))
    handlers = [console]

    if log_file:
        to_file = logging.FileHandler(log_file)
        # File output never carries color codes
        to_file.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(to_file)

    root = logging.getLogger()
    for stale in root.handlers[:]:
        root.removeHandler(stale)
    for handler in handlers:
        handler.setLevel(level)
        root.addHandler(handler)
    root.setLevel(level)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name"""
    return logging.getLogger(name)


def get_llm_logger(name: str) -> LLMLogger:
    """Get an LLM logger for the specified logger name"""
    return LLMLogger(logging.getLogger(name))


def configure_logging_from_settings():
    """Configure logging based on application settings"""
    from core.config import settings

    log_level = "DEBUG" if settings.debug else settings.log_level
    setup_logging(log_level=log_level, log_format="detailed", enable_colors=True)

    get_logger(__name__).info(f"Logging configured with level: {log_level}")
