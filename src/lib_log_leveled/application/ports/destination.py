"""Destination port describing the byte sinks handlers write to.

Purpose
-------
Handlers only need a "write these bytes" capability from whatever the
embedding application supplies: a console stream, an open file, a socket-like
test double.

Contents
--------
* :class:`DestinationPort` - runtime-checkable protocol with a single
  ``write`` method.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DestinationPort(Protocol):
    """Accept rendered output; failures surface as exceptions."""

    def write(self, data: Any, /) -> Any:
        """Write ``data`` (bytes or text, depending on the destination)."""


__all__ = ["DestinationPort"]
