"""Stream- and file-backed message handlers.

Purpose
-------
A handler owns one destination and decides, through its own minimum level and
filter, whether a record reaches it. Eligible records are rendered by the
handler's formatter and written directly, one write and flush per record.

Contents
--------
* :class:`MessageHandler` - shared gating, rendering, and write logic.
* :class:`StreamMessageHandler` - console-like streams (``sys.stdout`` default).
* :class:`FileMessageHandler` - files opened unbuffered at construction.

System Role
-----------
Handlers never special-case colour; whether escape sequences appear in the
output is decided entirely by the formatter template. Write failures are
raised as :class:`HandlerWriteError` so the dispatch use case can isolate them.
"""

from __future__ import annotations

import io
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import IO, TYPE_CHECKING, Any

from lib_log_leveled.adapters.formatter import MessageFormatter
from lib_log_leveled.application.ports import DestinationPort
from lib_log_leveled.domain.errors import ConfigurationError, HandlerWriteError
from lib_log_leveled.domain.filters import MessageFilter, allow_all
from lib_log_leveled.domain.levels import LogLevel, coerce_rank
from lib_log_leveled.domain.records import MessageRecord

if TYPE_CHECKING:  # pragma: no cover
    from lib_log_leveled.logger import Logger


class MessageHandler(ABC):
    """Abstract base holding level, formatter, and filter for one destination.

    Subclasses must implement :meth:`_write`, the raw write of rendered bytes
    to their destination, and set :attr:`dispatch_order` so loggers can order
    handlers by kind. :meth:`write` wraps :meth:`_write` with the handler lock
    and error translation.
    """

    dispatch_order: int = 100

    def __init__(
        self,
        *,
        level: LogLevel | int | str = LogLevel.DEBUG,
        formatter: MessageFormatter | None = None,
        filter: MessageFilter | None = None,
        name: str | None = None,
    ) -> None:
        self._level = coerce_rank(level)
        self._formatter = formatter if formatter is not None else MessageFormatter()
        self._filter: MessageFilter = filter if filter is not None else allow_all
        self.name = name or type(self).__name__
        self._lock = RLock()

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: LogLevel | int | str) -> None:
        self._level = coerce_rank(value)

    @property
    def formatter(self) -> MessageFormatter:
        return self._formatter

    @formatter.setter
    def formatter(self, value: MessageFormatter | None) -> None:
        self._formatter = value if value is not None else MessageFormatter()

    @property
    def filter(self) -> MessageFilter:
        return self._filter

    @filter.setter
    def filter(self, value: MessageFilter | None) -> None:
        self._filter = value if value is not None else allow_all

    @property
    def destination(self) -> Any:
        """Underlying writer; used to keep destinations exclusive per logger."""
        return self

    def is_eligible(self, logger: "Logger", record: MessageRecord) -> bool:
        """Level gate first, then the handler filter."""
        if record.level < self._level:
            return False
        return bool(self._filter(logger, record))

    def emit(self, record: MessageRecord) -> None:
        """Render ``record`` with this handler's formatter and write it."""
        self.write(self._formatter.render(record))

    def write(self, data: bytes) -> None:
        """Write ``data`` to the destination and flush.

        Raises
        ------
        HandlerWriteError
            When the destination refuses the write (closed file, broken pipe).
        """
        with self._lock:
            try:
                self._write(data)
            except (OSError, ValueError) as exc:
                raise HandlerWriteError(self.name, exc) from exc

    @abstractmethod
    def _write(self, data: bytes) -> None:
        """Write ``data`` to the destination; called with the handler lock held."""

    def close(self) -> None:
        """Release resources owned by the handler."""

    def __enter__(self) -> "MessageHandler":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} level={self._level}>"


class StreamMessageHandler(MessageHandler):
    """Write records to a console-like stream, ``sys.stdout`` by default.

    Binary streams receive the rendered bytes. Text streams receive them
    through their ``buffer`` when they expose one (after flushing pending
    text), otherwise as decoded text. Other writers get bytes first and
    decoded text when they reject bytes with :class:`TypeError`. The stream
    is borrowed: :meth:`close` never closes it.
    """

    dispatch_order = 0

    def __init__(
        self,
        stream: IO[Any] | None = None,
        *,
        level: LogLevel | int | str = LogLevel.DEBUG,
        formatter: MessageFormatter | None = None,
        filter: MessageFilter | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(level=level, formatter=formatter, filter=filter, name=name)
        self._stream = stream if stream is not None else sys.stdout
        if not isinstance(self._stream, DestinationPort):
            raise ConfigurationError(f"Stream destination {self._stream!r} has no write() method")

    @property
    def stream(self) -> IO[Any]:
        return self._stream

    @property
    def destination(self) -> Any:
        return self._stream

    def _write(self, data: bytes) -> None:
        stream = self._stream
        if isinstance(stream, io.TextIOBase):
            buffer = getattr(stream, "buffer", None)
            if buffer is not None:
                stream.flush()
                buffer.write(data)
                buffer.flush()
                return
            stream.write(data.decode(self._encoding_of(stream), errors="replace"))
        else:
            try:
                stream.write(data)
            except TypeError:
                # Duck-typed text writers such as console wrappers accept str only.
                stream.write(data.decode(self._encoding_of(stream), errors="replace"))
        flush = getattr(stream, "flush", None)
        if callable(flush):
            flush()

    @staticmethod
    def _encoding_of(stream: IO[Any]) -> str:
        return getattr(stream, "encoding", None) or "utf-8"


class FileMessageHandler(MessageHandler):
    """Append records to a file opened unbuffered in binary mode.

    The file is opened during construction so an unusable path fails fast with
    :class:`ConfigurationError`. The handler owns the file and closes it in
    :meth:`close`.

    Examples
    --------
    >>> import tempfile
    >>> from datetime import datetime, timezone
    >>> from lib_log_leveled.adapters.formatter import PLAIN_TEMPLATE
    >>> record = MessageRecord(20, "saved", "store", "db.py", 3, datetime(2025, 1, 1, tzinfo=timezone.utc))
    >>> with tempfile.TemporaryDirectory() as folder:
    ...     target = Path(folder) / "app.log"
    ...     with FileMessageHandler(target, formatter=MessageFormatter(PLAIN_TEMPLATE)) as handler:
    ...         handler.emit(record)
    ...     target.read_text()
    '[2025-01-01 00:00:00]     INFO  store db.py 3 saved\\n'
    """

    dispatch_order = 10

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        mode: str = "a",
        level: LogLevel | int | str = LogLevel.DEBUG,
        formatter: MessageFormatter | None = None,
        filter: MessageFilter | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(level=level, formatter=formatter, filter=filter, name=name)
        if mode not in {"a", "w", "x"}:
            raise ConfigurationError(f"Unsupported file mode {mode!r}; expected 'a', 'w', or 'x'")
        self._path = Path(path)
        try:
            self._file = open(self._path, mode + "b", buffering=0)
        except OSError as exc:
            raise ConfigurationError(f"Cannot open log file {str(self._path)!r}: {exc}") from exc

    @property
    def path(self) -> Path:
        return self._path

    @property
    def destination(self) -> Any:
        return self._file

    @property
    def closed(self) -> bool:
        return self._file.closed

    def _write(self, data: bytes) -> None:
        self._file.write(data)

    def close(self) -> None:
        with self._lock:
            if not self._file.closed:
                self._file.close()


__all__ = ["FileMessageHandler", "MessageHandler", "StreamMessageHandler"]
