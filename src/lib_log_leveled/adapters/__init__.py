"""Adapter implementations for formatting and writing records."""

from __future__ import annotations

from .formatter import DEFAULT_TEMPLATE, DEFAULT_TIME_FORMAT, PLAIN_TEMPLATE, MessageFormatter, build_format_payload
from .handlers import FileMessageHandler, MessageHandler, StreamMessageHandler

__all__ = [
    "DEFAULT_TEMPLATE",
    "DEFAULT_TIME_FORMAT",
    "FileMessageHandler",
    "MessageFormatter",
    "MessageHandler",
    "PLAIN_TEMPLATE",
    "StreamMessageHandler",
    "build_format_payload",
]
