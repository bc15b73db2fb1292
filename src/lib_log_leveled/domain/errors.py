"""Exceptions raised by the logging facility."""

from __future__ import annotations


class LoggingError(Exception):
    """Base class for errors raised by :mod:`lib_log_leveled`."""


class ConfigurationError(LoggingError, ValueError):
    """Raised at construction time for malformed templates or unusable destinations."""


class HandlerWriteError(LoggingError, OSError):
    """Raised by a handler when its destination refuses a write."""

    def __init__(self, handler_name: str, cause: BaseException) -> None:
        super().__init__(f"{handler_name} failed to write: {cause}")
        self.handler_name = handler_name
        self.cause = cause


__all__ = ["ConfigurationError", "HandlerWriteError", "LoggingError"]
