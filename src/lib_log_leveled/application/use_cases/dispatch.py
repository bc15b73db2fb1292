"""Use case fanning a built record out to the logger's handlers.

Purpose
-------
Apply the logger-wide filter, then walk the handlers in order, letting each
one gate on its own level and filter before rendering and writing.

Contents
--------
* :class:`HandlerFailure` and :class:`DispatchResult` describing the outcome.
* :func:`build_diagnostic_emitter` wrapping the optional diagnostic hook.
* :func:`create_dispatch` factory returning the per-call dispatch callable.

System Role
-----------
Invoked by :class:`lib_log_leveled.logger.Logger` after its own level gate and
record construction. Failures on one handler never stop the remaining
handlers and never propagate to the caller of the log method; they are
reported through the result, the diagnostic hook, and this module's
:mod:`logging` logger.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypedDict

from lib_log_leveled.application.ports import HandlerPort
from lib_log_leveled.domain import MessageFilter, MessageRecord

if TYPE_CHECKING:  # pragma: no cover
    from lib_log_leveled.logger import Logger

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


@dataclass(slots=True, frozen=True)
class HandlerFailure:
    """A handler that raised while filtering, rendering, or writing."""

    handler: str
    stage: str
    error: Exception


class DispatchResult(TypedDict):
    """Outcome of one dispatch.

    ``ok`` is ``False`` when any eligible handler failed; ``reason`` is set when
    the logger-wide filter rejected the record before any handler ran.
    """

    ok: bool
    reason: str | None
    delivered: list[str]
    skipped: list[str]
    failures: list[HandlerFailure]


class DispatchCallable(Protocol):
    def __call__(
        self,
        owner: "Logger",
        record: MessageRecord,
        *,
        logger_filter: MessageFilter,
        handlers: Sequence[HandlerPort],
    ) -> DispatchResult: ...


def build_diagnostic_emitter(
    diagnostic: DiagnosticHook,
) -> Callable[[str, dict[str, Any]], None]:
    """Return an emitter forwarding pipeline events to ``diagnostic``.

    Exceptions raised by the hook are logged at DEBUG and discarded so a faulty
    hook cannot break logging.
    """

    def emit(event: str, payload: dict[str, Any]) -> None:
        logger.debug("dispatch event %s: %s", event, payload)
        if diagnostic is None:
            return
        try:
            diagnostic(event, payload)
        except Exception:
            logger.debug("diagnostic hook raised for %s", event, exc_info=True)

    return emit


def create_dispatch(*, diagnostic: DiagnosticHook = None) -> DispatchCallable:
    """Build the fan-out callable used by a logger.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_leveled.domain import allow_all
    >>> class Recorder:
    ...     name = "recorder"
    ...     def __init__(self):
    ...         self.messages = []
    ...     def is_eligible(self, logger, record):
    ...         return record.level >= 20
    ...     def emit(self, record):
    ...         self.messages.append(record.message)
    >>> record = MessageRecord(30, "disk low", "check", "disk.py", 7, datetime(2025, 1, 1, tzinfo=timezone.utc))
    >>> handler = Recorder()
    >>> result = create_dispatch()(None, record, logger_filter=allow_all, handlers=[handler])
    >>> result["ok"], result["delivered"], handler.messages
    (True, ['recorder'], ['disk low'])
    """
    emit = build_diagnostic_emitter(diagnostic)

    def dispatch(
        owner: "Logger",
        record: MessageRecord,
        *,
        logger_filter: MessageFilter,
        handlers: Sequence[HandlerPort],
    ) -> DispatchResult:
        result: DispatchResult = {
            "ok": True,
            "reason": None,
            "delivered": [],
            "skipped": [],
            "failures": [],
        }
        try:
            admitted = logger_filter(owner, record)
        except Exception as exc:
            failure = HandlerFailure(handler="<logger>", stage="filter", error=exc)
            result.update(ok=False, reason="filter_failed")
            result["failures"].append(failure)
            emit("filter_failed", _failure_payload(failure, record))
            return result
        if not admitted:
            result["reason"] = "logger_filter_rejected"
            emit("logger_filter_rejected", {"level": record.level, "line": record.line})
            return result

        for handler in handlers:
            name = handler.name
            try:
                eligible = handler.is_eligible(owner, record)
            except Exception as exc:
                _record_failure(result, emit, record, HandlerFailure(name, "filter", exc))
                continue
            if not eligible:
                result["skipped"].append(name)
                continue
            try:
                handler.emit(record)
            except Exception as exc:
                _record_failure(result, emit, record, HandlerFailure(name, "write", exc))
                continue
            result["delivered"].append(name)
        return result

    return dispatch


def _record_failure(
    result: DispatchResult,
    emit: Callable[[str, dict[str, Any]], None],
    record: MessageRecord,
    failure: HandlerFailure,
) -> None:
    result["ok"] = False
    result["failures"].append(failure)
    event = "filter_failed" if failure.stage == "filter" else "handler_failed"
    emit(event, _failure_payload(failure, record))


def _failure_payload(failure: HandlerFailure, record: MessageRecord) -> dict[str, Any]:
    return {
        "handler": failure.handler,
        "stage": failure.stage,
        "error": repr(failure.error),
        "level": record.level,
    }


__all__ = [
    "DiagnosticHook",
    "DispatchCallable",
    "DispatchResult",
    "HandlerFailure",
    "build_diagnostic_emitter",
    "create_dispatch",
]
