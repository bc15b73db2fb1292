"""ANSI colour pairs keyed by severity rank.

The colour table lives apart from the name table in :mod:`.levels` so either
can change without touching the other. Ranks without an entry render with
:data:`NO_COLOR`, an empty start and clear sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Mapping

from .levels import LogLevel

COLOR_RED = 31
COLOR_GREEN = 32
COLOR_YELLOW = 33
COLOR_BLUE = 34
COLOR_MAGENTA = 35

STYLE_NORMAL = 0
STYLE_EMPHASIS = 1

COLOR_SEQ_CLEAR = "\x1b[0m"


def color_sequence(color: int, style: int = STYLE_NORMAL) -> str:
    """Return the ANSI start sequence for ``color`` in ``style``.

    Examples
    --------
    >>> color_sequence(COLOR_RED, STYLE_EMPHASIS)
    '\\x1b[1;31m'
    """
    return f"\x1b[{style};{color}m"


@dataclass(slots=True, frozen=True)
class LevelColor:
    """Start and clear escape sequences wrapped around a coloured segment."""

    start: str
    clear: str = COLOR_SEQ_CLEAR

    @classmethod
    def ansi(cls, color: int, style: int = STYLE_NORMAL) -> "LevelColor":
        return cls(color_sequence(color, style), COLOR_SEQ_CLEAR)


NO_COLOR = LevelColor("", "")

DEFAULT_LEVEL_COLORS: Mapping[int, LevelColor] = {
    LogLevel.DEBUG: LevelColor.ansi(COLOR_BLUE),
    LogLevel.INFO: LevelColor.ansi(COLOR_GREEN),
    LogLevel.WARNING: LevelColor.ansi(COLOR_YELLOW),
    LogLevel.ERROR: LevelColor.ansi(COLOR_RED, STYLE_EMPHASIS),
    LogLevel.CRITICAL: LevelColor.ansi(COLOR_MAGENTA, STYLE_EMPHASIS),
}

_CUSTOM_COLORS: dict[int, LevelColor] = {}
_COLORS_LOCK = RLock()


def level_color(rank: int) -> LevelColor:
    """Return the colour pair for ``rank`` or :data:`NO_COLOR`."""
    color = DEFAULT_LEVEL_COLORS.get(rank)
    if color is not None:
        return color
    with _COLORS_LOCK:
        return _CUSTOM_COLORS.get(rank, NO_COLOR)


def register_color(rank: int, color: LevelColor) -> None:
    if rank in DEFAULT_LEVEL_COLORS:
        raise ValueError(f"Cannot recolour canonical level {LogLevel(rank).name}")
    with _COLORS_LOCK:
        _CUSTOM_COLORS[rank] = color


def unregister_color(rank: int) -> None:
    with _COLORS_LOCK:
        _CUSTOM_COLORS.pop(rank, None)


__all__ = [
    "COLOR_BLUE",
    "COLOR_GREEN",
    "COLOR_MAGENTA",
    "COLOR_RED",
    "COLOR_SEQ_CLEAR",
    "COLOR_YELLOW",
    "DEFAULT_LEVEL_COLORS",
    "LevelColor",
    "NO_COLOR",
    "STYLE_EMPHASIS",
    "STYLE_NORMAL",
    "color_sequence",
    "level_color",
    "register_color",
    "unregister_color",
]
