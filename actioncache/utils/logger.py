# Copyright 2026 Firefly Software Solutions Inc
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging configuration for actioncache.

All modules log through ``logging.getLogger(__name__)``, so records flow
into the ``actioncache`` logger configured here. The output format is
chosen with ``ACTIONCACHE_LOG_FORMAT`` (json, human, text) and the level
with ``ACTIONCACHE_LOG_LEVEL``.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

__all__ = [
    "logger",
    "setup_logger",
    "configure_logging",
    "get_log_level",
    "get_formatter",
    "LogFormat",
    "JsonFormatter",
    "HumanFormatter",
    "TextFormatter",
]

ROOT_LOGGER_NAME = "actioncache"

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "message", "taskName",
    "thread", "threadName",
}


class LogFormat(str, Enum):
    """Supported log output formats."""

    JSON = "json"
    HUMAN = "human"
    TEXT = "text"


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Each record becomes one JSON object per line. Values passed through
    ``extra=`` (cache key, pattern label, confidence) are kept under
    ``"extra"`` so log pipelines can filter on them.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            k: v for k, v in record.__dict__.items()
            if k not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter with ANSI level colors for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            level_str = f"{color}{self.BOLD}[{level:>8}]{self.RESET}"
            time_str = f"{self.DIM}{timestamp}{self.RESET}"
        else:
            level_str = f"[{level:>8}]"
            time_str = timestamp

        output = f"{time_str} {level_str} {record.getMessage()}"

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if self.use_colors:
                exc_text = f"{self.COLORS['ERROR']}{exc_text}{self.RESET}"
            output += f"\n{exc_text}"

        return output


class TextFormatter(logging.Formatter):
    """Plain text formatter."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )


def get_log_level(level_str: str) -> int:
    """
    Convert a level name to a logging constant.

    Unknown names fall back to INFO.
    """
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def get_formatter(log_format: LogFormat, use_colors: bool = True) -> logging.Formatter:
    """Return the formatter for ``log_format``."""
    if log_format == LogFormat.JSON:
        return JsonFormatter()
    elif log_format == LogFormat.HUMAN:
        return HumanFormatter(use_colors=use_colors)
    else:
        return TextFormatter()


def configure_logging(
    level: str = "INFO",
    log_format: LogFormat = LogFormat.JSON,
    human_readable: bool = False,
) -> None:
    """
    Reconfigure the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format
        human_readable: Force the human format regardless of ``log_format``
    """
    if human_readable:
        log_format = LogFormat.HUMAN

    log_level = get_log_level(level)

    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(get_formatter(log_format))
    logger.addHandler(handler)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Create (or reset) a stdout logger honoring the ACTIONCACHE_* variables.

    Args:
        name: Logger name
        level: Default level when ACTIONCACHE_LOG_LEVEL is unset
        format_string: Custom ``logging.Formatter`` format string

    Returns:
        Configured logger instance
    """
    log = logging.getLogger(name)
    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    env_format = os.environ.get("ACTIONCACHE_LOG_FORMAT", "json").lower()
    env_level = os.environ.get("ACTIONCACHE_LOG_LEVEL", "")

    if env_level:
        level = get_log_level(env_level)
        log.setLevel(level)
        handler.setLevel(level)

    if format_string is not None:
        formatter = logging.Formatter(format_string)
    elif env_format == LogFormat.HUMAN.value:
        formatter = HumanFormatter()
    elif env_format == LogFormat.TEXT.value:
        formatter = TextFormatter()
    else:
        formatter = JsonFormatter()

    handler.setFormatter(formatter)
    log.addHandler(handler)

    return log


# Package logger; every ``actioncache.*`` module logger propagates here
logger = setup_logger()
