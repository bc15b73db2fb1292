"""Composition helpers assembling ready-to-use loggers.

Purpose
-------
Turn a :class:`LoggerConfig` into a wired :class:`Logger` and provide the
documented default logger.

Contents
--------
* :func:`get_default_logger` - DEBUG logger with one coloured stdout handler.
* :func:`build_logger` - logger assembled from configuration.
* :func:`resolve_colorize` - colour decision for a stream, using Rich for
  ``auto`` detection.
"""

from __future__ import annotations

import sys
from typing import IO, Any

from rich.console import Console

from .adapters.formatter import DEFAULT_TEMPLATE, DEFAULT_TIME_FORMAT, MessageFormatter
from .adapters.handlers import FileMessageHandler, StreamMessageHandler
from .application.ports import ClockPort
from .application.use_cases.dispatch import DiagnosticHook
from .config import LoggerConfig
from .domain.levels import LogLevel
from .logger import Logger


def get_default_logger() -> Logger:
    """Return a new logger at DEBUG with one coloured stdout handler at DEBUG.

    Each call returns an independent instance; share one per application if a
    process-wide logger is wanted.
    """

    return Logger(
        level=LogLevel.DEBUG,
        handlers=[
            StreamMessageHandler(
                sys.stdout,
                level=LogLevel.DEBUG,
                formatter=MessageFormatter(DEFAULT_TEMPLATE, DEFAULT_TIME_FORMAT),
            )
        ],
    )


def resolve_colorize(mode: str, stream: IO[Any]) -> bool:
    """Return whether colour placeholders should render for ``stream``.

    ``auto`` defers to Rich, which honours terminals, ``NO_COLOR`` and
    ``FORCE_COLOR`` when deciding.
    """

    if mode == "always":
        return True
    if mode == "never":
        return False
    if mode == "auto":
        return Console(file=stream).color_system is not None
    raise ValueError(f"Unknown colour mode: {mode!r}")


def build_logger(
    config: LoggerConfig | None = None,
    *,
    stream: IO[Any] | None = None,
    clock: ClockPort | None = None,
    diagnostic_hook: DiagnosticHook = None,
) -> Logger:
    """Assemble a logger from ``config``.

    The stream handler (when enabled) precedes the file handler (when a path is
    configured). Malformed templates or an unopenable file raise
    :class:`~lib_log_leveled.domain.errors.ConfigurationError` here, before any
    message is logged.
    """

    settings = config if config is not None else LoggerConfig()
    target = stream if stream is not None else sys.stdout
    logger = Logger(level=settings.level, clock=clock, diagnostic_hook=diagnostic_hook)
    if settings.stream_enabled:
        logger.add_handler(
            StreamMessageHandler(
                target,
                level=settings.stream_level,
                formatter=MessageFormatter(
                    settings.stream_template,
                    settings.time_format,
                    colorize=resolve_colorize(settings.color, target),
                ),
            )
        )
    if settings.file_path is not None:
        logger.add_handler(
            FileMessageHandler(
                settings.file_path,
                level=settings.file_level,
                formatter=MessageFormatter(settings.file_template, settings.time_format),
            )
        )
    return logger


__all__ = ["build_logger", "get_default_logger", "resolve_colorize"]
