"""Logger façade orchestrating level gating, record capture, and fan-out.

Purpose
-------
Expose the per-severity logging methods host code calls, and own the
configuration those calls are checked against: the logger's minimum level, an
optional logger-wide filter, and the attached handlers.

Contents
--------
* :class:`SystemClock` - local wall-clock implementation of :class:`ClockPort`.
* :class:`Logger` - the orchestrator.

System Role
-----------
Every call runs synchronously on the caller's thread: level gate, record
construction, then :func:`create_dispatch` fan-out. The record is a local
value passed down the call, so concurrent calls on one logger share nothing
but the handlers themselves (each serialises its own writes). Loggers are
ordinary objects; any number of independently configured instances may exist.
"""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import Any, Iterable

from .adapters.handlers import MessageHandler
from .application.ports import ClockPort
from .application.use_cases.dispatch import DiagnosticHook, DispatchResult, create_dispatch
from .domain.errors import ConfigurationError
from .domain.filters import MessageFilter, allow_all
from .domain.levels import LogLevel, coerce_rank
from .domain.records import build_record


class SystemClock(ClockPort):
    """Clock returning the timezone-aware local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class Logger:
    """Leveled logger dispatching records to its handlers.

    Parameters
    ----------
    level:
        Minimum rank a call needs before a record is even built.
    filter:
        Optional predicate ``(logger, record) -> bool`` consulted once per
        record before any handler; ``False`` suppresses every handler.
    handlers:
        Handlers to attach, see :meth:`add_handler`.
    clock:
        Source of record timestamps; defaults to :class:`SystemClock`.
    diagnostic_hook:
        Optional callable receiving ``(event, payload)`` for handler failures
        and filter rejections.

    Examples
    --------
    >>> from io import BytesIO
    >>> from lib_log_leveled.adapters import MessageFormatter, StreamMessageHandler
    >>> sink = BytesIO()
    >>> log = Logger(level="INFO", handlers=[StreamMessageHandler(sink, formatter=MessageFormatter("{level_name}: {message}"))])
    >>> log.debug("hidden")
    >>> log.warning("%d files left", 3)
    >>> sink.getvalue()
    b'WARNING: 3 files left\\n'
    """

    def __init__(
        self,
        *,
        level: LogLevel | int | str = LogLevel.DEBUG,
        filter: MessageFilter | None = None,
        handlers: Iterable[MessageHandler] = (),
        clock: ClockPort | None = None,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        self._level = coerce_rank(level)
        self._filter: MessageFilter = filter if filter is not None else allow_all
        self._handlers: list[MessageHandler] = []
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._dispatch = create_dispatch(diagnostic=diagnostic_hook)
        self._errors_lock = Lock()
        self._error_count = 0
        self._last_error: Exception | None = None
        for handler in handlers:
            self.add_handler(handler)

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: LogLevel | int | str) -> None:
        self._level = coerce_rank(value)

    @property
    def filter(self) -> MessageFilter:
        return self._filter

    @filter.setter
    def filter(self, value: MessageFilter | None) -> None:
        self._filter = value if value is not None else allow_all

    @property
    def handlers(self) -> tuple[MessageHandler, ...]:
        """Attached handlers in dispatch order."""
        return tuple(self._handlers)

    @property
    def error_count(self) -> int:
        """Number of handler or filter failures observed since creation."""
        return self._error_count

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def add_handler(self, handler: MessageHandler) -> None:
        """Attach ``handler``; stream handlers always dispatch before file handlers.

        Raises
        ------
        ConfigurationError
            When ``handler`` is already attached or shares its destination with
            an attached handler.
        """
        for existing in self._handlers:
            if existing is handler:
                raise ConfigurationError(f"{handler!r} is already attached")
            if existing.destination is handler.destination:
                raise ConfigurationError(f"{handler!r} shares its destination with {existing!r}")
        self._handlers.append(handler)
        self._handlers.sort(key=lambda item: item.dispatch_order)

    def remove_handler(self, handler: MessageHandler) -> None:
        """Detach ``handler`` if attached; the handler is not closed."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def is_enabled_for(self, level: LogLevel | int | str) -> bool:
        return coerce_rank(level) >= self._level

    def close(self) -> None:
        """Close and detach every handler."""
        handlers, self._handlers = self._handlers, []
        for handler in handlers:
            handler.close()

    def reset_errors(self) -> None:
        with self._errors_lock:
            self._error_count = 0
            self._last_error = None

    def log(self, level: LogLevel | int | str, fmt: str, *args: Any, stacklevel: int = 1) -> None:
        """Log ``fmt % args`` at ``level``; custom integer ranks are accepted."""
        self._log(coerce_rank(level), fmt, args, stacklevel)

    def debug(self, fmt: str, *args: Any, stacklevel: int = 1) -> None:
        self._log(LogLevel.DEBUG, fmt, args, stacklevel)

    def info(self, fmt: str, *args: Any, stacklevel: int = 1) -> None:
        self._log(LogLevel.INFO, fmt, args, stacklevel)

    def warning(self, fmt: str, *args: Any, stacklevel: int = 1) -> None:
        self._log(LogLevel.WARNING, fmt, args, stacklevel)

    def error(self, fmt: str, *args: Any, stacklevel: int = 1) -> None:
        self._log(LogLevel.ERROR, fmt, args, stacklevel)

    def critical(self, fmt: str, *args: Any, stacklevel: int = 1) -> None:
        self._log(LogLevel.CRITICAL, fmt, args, stacklevel)

    def _log(self, level: int, fmt: str, args: tuple[Any, ...], stacklevel: int) -> None:
        if level < self._level:
            return
        record = build_record(level, fmt, args, timestamp=self._clock.now(), stacklevel=stacklevel)
        result = self._dispatch(
            self,
            record,
            logger_filter=self._filter,
            handlers=tuple(self._handlers),
        )
        if result["failures"]:
            self._note_failures(result)

    def _note_failures(self, result: DispatchResult) -> None:
        with self._errors_lock:
            self._error_count += len(result["failures"])
            self._last_error = result["failures"][-1].error

    def __repr__(self) -> str:
        return f"<Logger level={self._level} handlers={len(self._handlers)}>"


__all__ = ["Logger", "SystemClock"]
