"""Configuration loading: ``LOG_*`` environment overrides and ``.env`` support.

Purpose
-------
Translate environment variables and keyword arguments into a
:class:`LoggerConfig` consumed by :func:`lib_log_leveled.composition.build_logger`.

Precedence
----------
Environment variables win over keyword arguments, which win over defaults, so
operators can retune a deployed application without code changes.

``.env`` files
--------------
:func:`enable_dotenv` loads the nearest ``.env`` (searching upwards from the
working directory) through :mod:`dotenv`. Existing environment variables are
never overridden. The CLI decides whether to call it via
:func:`should_use_dotenv`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable

from dotenv import find_dotenv, load_dotenv

from .adapters.formatter import DEFAULT_TEMPLATE, DEFAULT_TIME_FORMAT, PLAIN_TEMPLATE
from .domain.levels import LogLevel, coerce_rank

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
COLOR_MODES = ("always", "never", "auto")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_ATTEMPTED = False
_DOTENV_PATH: Path | None = None


@dataclass(frozen=True)
class LoggerConfig:
    """Resolved settings for one logger.

    Attributes
    ----------
    level:
        Logger-wide minimum rank.
    stream_enabled, stream_level, stream_template:
        Console handler toggle, minimum rank, and template.
    file_path, file_level, file_template:
        Optional file handler; ``None`` disables it. The file template has no
        colour placeholders by default.
    time_format:
        ``strftime`` pattern shared by both handlers.
    color:
        ``"always"``, ``"never"``, or ``"auto"`` (ask Rich whether the stream
        supports colour).
    """

    level: int = LogLevel.DEBUG
    stream_enabled: bool = True
    stream_level: int = LogLevel.DEBUG
    stream_template: str = DEFAULT_TEMPLATE
    file_path: Path | None = None
    file_level: int = LogLevel.DEBUG
    file_template: str = PLAIN_TEMPLATE
    time_format: str = DEFAULT_TIME_FORMAT
    color: str = "always"


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ValueError(f"expected one of {sorted(_TRUTHY | _FALSY)}")


def _parse_path(value: Any) -> Path | None:
    if value is None:
        return None
    text = str(value).strip()
    return Path(text).expanduser() if text else None


def _parse_color(value: Any) -> str:
    text = str(value).strip().lower()
    if text not in COLOR_MODES:
        raise ValueError(f"expected one of {', '.join(COLOR_MODES)}")
    return text


def _parse_text(value: Any) -> str:
    return str(value)


_ENV_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "LOG_LEVEL": ("level", coerce_rank),
    "LOG_STREAM_ENABLED": ("stream_enabled", _parse_bool),
    "LOG_STREAM_LEVEL": ("stream_level", coerce_rank),
    "LOG_STREAM_TEMPLATE": ("stream_template", _parse_text),
    "LOG_FILE": ("file_path", _parse_path),
    "LOG_FILE_LEVEL": ("file_level", coerce_rank),
    "LOG_FILE_TEMPLATE": ("file_template", _parse_text),
    "LOG_TIME_FORMAT": ("time_format", _parse_text),
    "LOG_COLOR": ("color", _parse_color),
}
"""Environment variable -> (config field, parser)."""

_FIELD_PARSERS = {field_name: parser for field_name, parser in _ENV_FIELDS.values()}


def load_config(**overrides: Any) -> LoggerConfig:
    """Resolve a :class:`LoggerConfig` from keyword overrides and ``LOG_*`` variables.

    Raises
    ------
    ValueError
        When an override or environment variable cannot be parsed; the message
        names the offending key.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop("LOG_LEVEL", None)
    >>> load_config(level="warning").level
    30
    """
    known = {item.name for item in fields(LoggerConfig)}
    values: dict[str, Any] = {}
    for key, raw in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown logger setting: {key!r}")
        if raw is None and key != "file_path":
            continue
        values[key] = _convert(key, raw, key)
    for env_name, (field_name, _parser) in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        values[field_name] = _convert(field_name, raw, env_name)
    return replace(LoggerConfig(), **values)


def _convert(field_name: str, raw: Any, source: str) -> Any:
    try:
        return _FIELD_PARSERS[field_name](raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {source} value {raw!r}: {exc}") from exc


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` once; return its path or ``None``.

    The search starts in the working directory and walks upwards
    (:func:`dotenv.find_dotenv`). Variables already set keep their values.
    """
    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    if _DOTENV_ATTEMPTED:
        return _DOTENV_PATH
    _DOTENV_ATTEMPTED = True
    found = find_dotenv(usecwd=True)
    if found:
        load_dotenv(dotenv_path=found, override=False)
        _DOTENV_PATH = Path(found).resolve()
    return _DOTENV_PATH


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    _DOTENV_ATTEMPTED = False
    _DOTENV_PATH = None


__all__ = [
    "COLOR_MODES",
    "DOTENV_ENV_VAR",
    "LoggerConfig",
    "enable_dotenv",
    "load_config",
    "should_use_dotenv",
]
