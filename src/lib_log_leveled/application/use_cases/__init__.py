"""Use cases executed for every log call."""

from __future__ import annotations

from .dispatch import DiagnosticHook, DispatchCallable, DispatchResult, create_dispatch

__all__ = ["DiagnosticHook", "DispatchCallable", "DispatchResult", "create_dispatch"]
