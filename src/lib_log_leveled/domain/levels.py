"""Severity scale shared by loggers, handlers, and formatters.

Purpose
-------
Provide the ordered set of named severities together with helpers that keep
the numeric scale open for custom levels.

Contents
--------
* :class:`LogLevel` enum with integer ranks and conversion helpers.
* :func:`coerce_rank`, :func:`level_name`, :func:`register_level` helpers for
  working with ranks that are not one of the five canonical members.

System Role
-----------
Every gate in the dispatch pipeline compares plain integer ranks. The enum
members are integers themselves, so ``LogLevel.INFO >= 15`` and custom ranks
such as ``25`` participate in the same comparisons without conversion.
"""

from __future__ import annotations

from enum import IntEnum
from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .palettes import LevelColor


class LogLevel(IntEnum):
    """Enumerated logging levels; ranks are spaced by ten for extension."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name."""

        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_CUSTOM_NAMES: dict[int, str] = {}
_REGISTRY_LOCK = RLock()


def coerce_rank(level: LogLevel | int | str) -> int:
    """Normalise a level given as enum, integer, or name into an integer rank.

    Examples
    --------
    >>> coerce_rank("warning")
    30
    >>> coerce_rank(25)
    25
    >>> coerce_rank(LogLevel.ERROR)
    40
    """
    if isinstance(level, bool):
        raise ValueError(f"Unsupported log level: {level!r}")
    if isinstance(level, int):
        return int(level)
    if isinstance(level, str):
        text = level.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        with _REGISTRY_LOCK:
            for rank, name in _CUSTOM_NAMES.items():
                if name == text.upper():
                    return rank
        return int(LogLevel.from_name(text))
    raise ValueError(f"Unsupported log level: {level!r}")


def level_name(rank: int) -> str:
    """Return the display name for ``rank``; unknown ranks never raise.

    Examples
    --------
    >>> level_name(30)
    'WARNING'
    >>> level_name(35)
    'LEVEL35'
    """
    try:
        return LogLevel(rank).name
    except ValueError:
        pass
    with _REGISTRY_LOCK:
        custom = _CUSTOM_NAMES.get(rank)
    return custom if custom is not None else f"LEVEL{rank}"


def register_level(rank: int, name: str, color: "LevelColor | None" = None) -> None:
    """Name a custom rank and optionally give it a colour pair.

    Canonical ranks keep their names; registering one of them raises
    :class:`ValueError`.
    """
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise ValueError(f"Level rank must be an integer, got {rank!r}")
    normalized = name.strip().upper()
    if not normalized:
        raise ValueError("Level name must not be empty")
    if rank in LogLevel._value2member_map_:
        raise ValueError(f"Cannot rename canonical level {LogLevel(rank).name}")
    if normalized in LogLevel.__members__:
        raise ValueError(f"Level name {normalized!r} is reserved")
    with _REGISTRY_LOCK:
        _CUSTOM_NAMES[rank] = normalized
    if color is not None:
        from .palettes import register_color

        register_color(rank, color)


def unregister_level(rank: int) -> None:
    """Forget a custom rank registered through :func:`register_level`."""
    with _REGISTRY_LOCK:
        _CUSTOM_NAMES.pop(rank, None)
    from .palettes import unregister_color

    unregister_color(rank)


__all__ = ["LogLevel", "coerce_rank", "level_name", "register_level", "unregister_level"]
