"""Per-thread stack of context messages for crash reports."""

from __future__ import annotations

import threading
from typing import Optional

_local = threading.local()


def _stack() -> list[tuple[Optional[str], Optional[str]]]:
    stack = getattr(_local, "stack", None)
    if stack is None:
        stack = []
        _local.stack = stack
    return stack


def current_stack() -> list[tuple[Optional[str], Optional[str]]]:
    """A copy of the current thread's context stack, outermost first."""
    return list(_stack())


class ErrorContext:
    """Context manager that records a (message, value) pair while active."""

    def __init__(self, msg: Optional[str], value: Optional[str] = None):
        self.msg = msg
        self.value = value

    def __enter__(self) -> ErrorContext:
        _stack().append((self.msg, self.value))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        stack = _stack()
        if stack:
            stack.pop()

    def change(self, msg: Optional[str], value: Optional[str] = None) -> None:
        """Replace the innermost entry of the current thread's stack."""
        stack = _stack()
        if not stack:
            raise RuntimeError("no active error context to change")
        self.msg, self.value = msg, value
        stack[-1] = (msg, value)