"""Public package surface for the leveled logging facility.

``get_default_logger()`` returns a ready-to-use logger writing coloured lines
to stdout; :class:`Logger`, the handlers, and :class:`MessageFormatter` cover
custom setups, and :func:`build_logger` assembles one from ``LOG_*``
configuration.
"""

from __future__ import annotations

from .adapters import (
    DEFAULT_TEMPLATE,
    DEFAULT_TIME_FORMAT,
    PLAIN_TEMPLATE,
    FileMessageHandler,
    MessageFormatter,
    MessageHandler,
    StreamMessageHandler,
)
from .composition import build_logger, get_default_logger
from .config import LoggerConfig, load_config
from .domain import (
    ConfigurationError,
    HandlerWriteError,
    LevelColor,
    LoggingError,
    LogLevel,
    MessageFilter,
    MessageRecord,
    all_of,
    allow_all,
    level_color,
    level_name,
    register_level,
)
from .lib_log_leveled import summary_info
from .logger import Logger

DEBUG = LogLevel.DEBUG
INFO = LogLevel.INFO
WARNING = LogLevel.WARNING
ERROR = LogLevel.ERROR
CRITICAL = LogLevel.CRITICAL

__all__ = [
    "CRITICAL",
    "DEBUG",
    "DEFAULT_TEMPLATE",
    "DEFAULT_TIME_FORMAT",
    "ERROR",
    "INFO",
    "PLAIN_TEMPLATE",
    "WARNING",
    "ConfigurationError",
    "FileMessageHandler",
    "HandlerWriteError",
    "LevelColor",
    "LogLevel",
    "Logger",
    "LoggerConfig",
    "LoggingError",
    "MessageFilter",
    "MessageFormatter",
    "MessageHandler",
    "MessageRecord",
    "StreamMessageHandler",
    "all_of",
    "allow_all",
    "build_logger",
    "get_default_logger",
    "level_color",
    "level_name",
    "load_config",
    "register_level",
    "summary_info",
]
