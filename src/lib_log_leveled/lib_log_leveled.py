"""Convenience helpers shared by the CLI and documentation examples.

Contents
--------
* :func:`summary_info` - metadata banner used by ``lib_log_leveled info``.
* :func:`logdemo` - emit one sample message per severity through a logger
  built from configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any

from .composition import build_logger
from .config import load_config
from .domain.levels import LogLevel

DEMO_MESSAGES: tuple[tuple[LogLevel, str], ...] = (
    (LogLevel.DEBUG, "Debug message"),
    (LogLevel.INFO, "Information message"),
    (LogLevel.WARNING, "Warning message"),
    (LogLevel.ERROR, "Error message"),
    (LogLevel.CRITICAL, "Critical message"),
)


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point and docs.

    Outputs
    -------
    str
        Multi-line banner ending with a newline.
    """

    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def logdemo(
    *,
    level: str | int | None = None,
    file_path: str | Path | None = None,
    file_level: str | int | None = None,
    color: str | None = None,
    stream: IO[Any] | None = None,
) -> dict[str, Any]:
    """Emit one sample message per severity and report what happened.

    Parameters
    ----------
    level:
        Logger minimum level; ``LOG_LEVEL`` still takes precedence.
    file_path, file_level:
        Optional file handler target and minimum level.
    color:
        Colour mode for the stream handler (``always``, ``never``, ``auto``).
    stream:
        Console destination; defaults to ``sys.stdout``.

    Returns
    -------
    dict[str, Any]
        ``emitted`` (messages that passed the logger gate), ``levels`` (their
        names), ``file`` (resolved file path or ``None``), and ``errors``
        (handler failures observed).
    """

    overrides: dict[str, Any] = {"level": level, "file_level": file_level, "color": color}
    if file_path is not None:
        overrides["file_path"] = file_path
    config = load_config(**overrides)
    logger = build_logger(config, stream=stream)
    emitted: list[str] = []
    try:
        for severity, message in DEMO_MESSAGES:
            if logger.is_enabled_for(severity):
                emitted.append(severity.name)
            logger.log(severity, "%s from logdemo", message)
    finally:
        logger.close()
    return {
        "emitted": len(emitted),
        "levels": emitted,
        "file": str(config.file_path) if config.file_path is not None else None,
        "errors": logger.error_count,
    }


__all__ = ["DEMO_MESSAGES", "logdemo", "summary_info"]
