"""Template-driven rendering of records into output bytes.

Why
---
Stream and file handlers accept the same ``str.format`` placeholders. Building
the placeholder payload in one place keeps both in sync and lets templates be
validated once, when the formatter is constructed, instead of on the first
log call.

Contents
--------
* :data:`DEFAULT_TEMPLATE`, :data:`PLAIN_TEMPLATE`, :data:`DEFAULT_TIME_FORMAT`.
* :func:`build_format_payload` - placeholder values for one record.
* :class:`MessageFormatter` - validated template plus time pattern.

Placeholders
------------
``color``, ``time``, ``level_name``, ``level``, ``func_name``, ``file_name``,
``line``, ``color_clear``, ``message``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from string import Formatter
from typing import Any

from lib_log_leveled.domain.errors import ConfigurationError
from lib_log_leveled.domain.levels import LogLevel, level_name
from lib_log_leveled.domain.palettes import NO_COLOR, level_color
from lib_log_leveled.domain.records import MessageRecord

DEFAULT_TEMPLATE = "{color}[{time}] {level_name:>8}  {func_name} {file_name} {line} {color_clear} {message}"
PLAIN_TEMPLATE = "[{time}] {level_name:>8}  {func_name} {file_name} {line} {message}"
DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

TEMPLATE_FIELDS = frozenset(
    {
        "color",
        "time",
        "level_name",
        "level",
        "func_name",
        "file_name",
        "line",
        "color_clear",
        "message",
    }
)

_SAMPLE_RECORD = MessageRecord(
    level=LogLevel.INFO,
    message="sample",
    func_name="sample",
    file_name="sample.py",
    line=1,
    timestamp=datetime(2000, 1, 1, tzinfo=timezone.utc),
)


def build_format_payload(record: MessageRecord, *, time_format: str, colorize: bool = True) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to templates."""

    color = level_color(record.level) if colorize else NO_COLOR
    return {
        "color": color.start,
        "time": record.timestamp.strftime(time_format),
        "level_name": level_name(record.level),
        "level": int(record.level),
        "func_name": record.func_name,
        "file_name": record.file_name,
        "line": record.line,
        "color_clear": color.clear,
        "message": record.message,
    }


def _validate_template(template: str) -> None:
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as exc:
        raise ConfigurationError(f"Malformed log template {template!r}: {exc}") from exc
    for _literal, field, _spec, _conversion in parsed:
        if field is None:
            continue
        root = field.split(".", 1)[0].split("[", 1)[0]
        if not root or root.isdigit():
            raise ConfigurationError(f"Log template {template!r} uses positional fields; name every field")
        if root not in TEMPLATE_FIELDS:
            known = ", ".join(sorted(TEMPLATE_FIELDS))
            raise ConfigurationError(f"Unknown field {root!r} in log template {template!r}; expected one of: {known}")


class MessageFormatter:
    """Render records with a ``str.format`` template and a ``strftime`` pattern.

    Rendering is a pure function of the record: no state is kept between
    calls, so identical records render to identical bytes.

    Parameters
    ----------
    template:
        ``str.format`` template using the placeholders listed in the module
        docstring. Width and alignment specs are allowed.
    time_format:
        ``strftime`` pattern used for the ``time`` placeholder.
    colorize:
        When ``False`` the colour placeholders render as empty strings.
    encoding:
        Encoding of the produced bytes; unencodable characters are replaced.

    Raises
    ------
    ConfigurationError
        When ``template`` is malformed or references unknown fields.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> record = MessageRecord(40, "boom", "run", "job.py", 12, datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
    >>> MessageFormatter(PLAIN_TEMPLATE).render(record)
    b'[2025-09-30 12:00:00]    ERROR  run job.py 12 boom\\n'
    """

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        time_format: str = DEFAULT_TIME_FORMAT,
        *,
        colorize: bool = True,
        encoding: str = "utf-8",
    ) -> None:
        if not isinstance(template, str):
            raise ConfigurationError(f"Log template must be a string, got {type(template).__name__}")
        if not isinstance(time_format, str):
            raise ConfigurationError(f"Time format must be a string, got {type(time_format).__name__}")
        _validate_template(template)
        try:
            "".encode(encoding)
        except LookupError as exc:
            raise ConfigurationError(f"Unknown output encoding {encoding!r}") from exc
        self._template = template
        self._time_format = time_format
        self._colorize = colorize
        self._encoding = encoding
        try:
            self.format(_SAMPLE_RECORD)
        except (ValueError, TypeError, AttributeError, IndexError, KeyError) as exc:
            raise ConfigurationError(f"Log template {template!r} cannot be rendered: {exc}") from exc

    @property
    def template(self) -> str:
        return self._template

    @property
    def time_format(self) -> str:
        return self._time_format

    @property
    def colorize(self) -> bool:
        return self._colorize

    def format(self, record: MessageRecord) -> str:
        """Return the rendered line for ``record`` without the trailing newline."""
        payload = build_format_payload(record, time_format=self._time_format, colorize=self._colorize)
        return self._template.format(**payload)

    def render(self, record: MessageRecord) -> bytes:
        """Return the encoded line for ``record``, newline-terminated."""
        return (self.format(record) + "\n").encode(self._encoding, errors="replace")

    def __repr__(self) -> str:
        return f"MessageFormatter(template={self._template!r}, time_format={self._time_format!r}, colorize={self._colorize!r})"


__all__ = [
    "DEFAULT_TEMPLATE",
    "DEFAULT_TIME_FORMAT",
    "PLAIN_TEMPLATE",
    "TEMPLATE_FIELDS",
    "MessageFormatter",
    "build_format_payload",
]
