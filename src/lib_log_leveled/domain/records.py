"""Immutable snapshot of a single log call.

Purpose
-------
Capture everything a formatter needs about one log event: severity, rendered
message text, call-site metadata, and the wall-clock time of the call.

Contents
--------
* :class:`CallSite` and :func:`capture_call_site` for resolving the public call
  site, independent of how many internal frames the call passed through.
* :func:`render_message` applying ``%``-style positional arguments.
* :class:`MessageRecord` dataclass and the :func:`build_record` factory.

System Role
-----------
Records are built once per call that passes the logger's level gate and are
handed down the dispatch explicitly; nothing here keeps state between calls.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from types import FrameType
from typing import Any, Callable, Sequence

from .levels import level_name

_PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_INTERNAL_SOURCES = frozenset(
    os.path.normcase(os.path.join(_PACKAGE_ROOT, relative))
    for relative in (
        "logger.py",
        os.path.join("domain", "records.py"),
    )
)
# Frames from these files are dispatch plumbing, never a caller's call site.


@lru_cache(maxsize=512)
def _is_internal_source(filename: str) -> bool:
    return os.path.normcase(os.path.abspath(filename)) in _INTERNAL_SOURCES


@dataclass(slots=True, frozen=True)
class CallSite:
    """Function, short file name, and line of a log invocation."""

    func_name: str
    file_name: str
    line: int


UNKNOWN_CALL_SITE = CallSite("(unknown function)", "(unknown file)", 0)


def capture_call_site(stacklevel: int = 1) -> CallSite:
    """Return the first caller frame outside the logging internals.

    ``stacklevel`` follows :mod:`logging` semantics: ``1`` is the frame that
    called the public logging method, ``2`` its caller, and so on. Helpers that
    wrap a logger pass ``stacklevel=2`` so their callers are reported instead.
    """
    frame: FrameType | None = sys._getframe(1)
    while frame is not None and _is_internal_source(frame.f_code.co_filename):
        frame = frame.f_back
    for _ in range(max(stacklevel, 1) - 1):
        if frame is None or frame.f_back is None:
            break
        frame = frame.f_back
    if frame is None:
        return UNKNOWN_CALL_SITE
    code = frame.f_code
    return CallSite(
        func_name=code.co_name,
        file_name=os.path.basename(code.co_filename),
        line=frame.f_lineno,
    )


def render_message(fmt: str, args: Sequence[Any]) -> str:
    """Apply positional ``%`` formatting; mismatched arguments never raise.

    Examples
    --------
    >>> render_message("%s has %d items", ("cart", 3))
    'cart has 3 items'
    >>> render_message("100%", ())
    '100%'
    >>> render_message("%d items", ("many",))
    "%d items 'many'"
    """
    if isinstance(fmt, str):
        text = fmt
    else:
        text = _safe_text(fmt, str)
    if not args:
        return text
    try:
        return text % tuple(args)
    except Exception:
        # Arguments may fail in __str__ or __format__; the call must still log.
        return " ".join([text, *(_safe_text(arg, repr) for arg in args)])


def _safe_text(value: Any, convert: Callable[[Any], str]) -> str:
    """Return ``convert(value)`` or a type placeholder when ``value`` cannot be printed.

    Examples
    --------
    >>> class Broken:
    ...     def __repr__(self):
    ...         raise RuntimeError("no repr")
    >>> _safe_text(Broken(), repr)
    '<unprintable Broken>'
    """
    try:
        return convert(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


@dataclass(slots=True, frozen=True)
class MessageRecord:
    """Immutable log record handed to filters and formatters.

    Attributes
    ----------
    level:
        Integer severity rank; canonical members of :class:`LogLevel` or any
        custom rank.
    message:
        Message text after the caller's arguments were applied.
    func_name, file_name, line:
        Public call site of the log invocation; ``file_name`` is a basename.
    timestamp:
        Timezone-aware wall-clock time of the call.
    """

    level: int
    message: str
    func_name: str
    file_name: str
    line: int
    timestamp: datetime

    @property
    def level_name(self) -> str:
        return level_name(self.level)


def build_record(
    level: int,
    fmt: str,
    args: Sequence[Any],
    *,
    timestamp: datetime,
    stacklevel: int = 1,
) -> MessageRecord:
    """Build the record for one log call; performs no output."""
    site = capture_call_site(stacklevel)
    return MessageRecord(
        level=int(level),
        message=render_message(fmt, args),
        func_name=site.func_name,
        file_name=site.file_name,
        line=site.line,
        timestamp=timestamp,
    )


__all__ = [
    "CallSite",
    "MessageRecord",
    "UNKNOWN_CALL_SITE",
    "build_record",
    "capture_call_site",
    "render_message",
]
