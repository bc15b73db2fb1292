"""Domain entities and value objects used by the logging facility."""

from __future__ import annotations

from .errors import ConfigurationError, HandlerWriteError, LoggingError
from .filters import MessageFilter, all_of, allow_all
from .levels import LogLevel, coerce_rank, level_name, register_level, unregister_level
from .palettes import NO_COLOR, LevelColor, level_color
from .records import CallSite, MessageRecord, build_record, capture_call_site, render_message

__all__ = [
    "CallSite",
    "ConfigurationError",
    "HandlerWriteError",
    "LevelColor",
    "LogLevel",
    "LoggingError",
    "MessageFilter",
    "MessageRecord",
    "NO_COLOR",
    "all_of",
    "allow_all",
    "build_record",
    "capture_call_site",
    "coerce_rank",
    "level_color",
    "level_name",
    "register_level",
    "render_message",
    "unregister_level",
]
