"""Predicates deciding suppression beyond level gating."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from .records import MessageRecord

if TYPE_CHECKING:  # pragma: no cover
    from lib_log_leveled.logger import Logger

MessageFilter = Callable[["Logger", MessageRecord], bool]
"""Pure predicate receiving the dispatching logger and the record in flight."""


def allow_all(logger: "Logger", record: MessageRecord) -> bool:
    """Pass-through filter used wherever no filter was configured."""
    return True


def all_of(*filters: MessageFilter) -> MessageFilter:
    """Combine ``filters``; the result allows a record only if every filter does.

    Examples
    --------
    >>> deny = lambda logger, record: False
    >>> all_of(allow_all, deny)(None, None)
    False
    >>> all_of()(None, None)
    True
    """
    chain = tuple(filters)

    def _combined(logger: "Logger", record: MessageRecord) -> bool:
        return all(predicate(logger, record) for predicate in chain)

    return _combined


__all__ = ["MessageFilter", "all_of", "allow_all"]
