"""Port describing what the dispatch use case needs from a handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lib_log_leveled.domain.records import MessageRecord

if TYPE_CHECKING:  # pragma: no cover
    from lib_log_leveled.logger import Logger


@runtime_checkable
class HandlerPort(Protocol):
    """Gate, render, and write a record to one owned destination."""

    name: str

    def is_eligible(self, logger: "Logger", record: MessageRecord) -> bool:
        """Return ``True`` when the handler's level and filter admit ``record``."""

    def emit(self, record: MessageRecord) -> None:
        """Render ``record`` and write it; raise on write failure."""


__all__ = ["HandlerPort"]
