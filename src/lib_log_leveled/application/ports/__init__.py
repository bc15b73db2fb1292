"""Protocols the application layer depends on."""

from __future__ import annotations

from .destination import DestinationPort
from .handler import HandlerPort
from .time import ClockPort

__all__ = ["ClockPort", "DestinationPort", "HandlerPort"]
