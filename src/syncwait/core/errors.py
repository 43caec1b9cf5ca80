"""Sentinel error kinds and exceptions for the coordination layer."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from syncwait.core.models import Synchronizer


class SyncError(str, Enum):
    """Sentinel kinds stored in a Synchronizer's ``error`` field.

    These are never raised. Being ``str`` subclasses, members compare equal
    to their plain names, so ``record.error == "TIMED_OUT"`` holds.

    Attributes:
        NON_THENABLE: The adapter was given a non-awaitable; ``value`` holds it.
        TIMED_OUT: The timeout elapsed before the operation completed.
        NON_FUNCTION: The poller was given a non-callable predicate.
    """

    NON_THENABLE = "NON_THENABLE"
    TIMED_OUT = "TIMED_OUT"
    NON_FUNCTION = "NON_FUNCTION"

    def __str__(self) -> str:
        return self.value


class NonFunctionError(TypeError):
    """Raised when a predicate or callback-style function is not callable."""

    def __init__(
        self,
        message: str,
        target: Any = None,
        synchronizer: Synchronizer | None = None,
    ) -> None:
        super().__init__(message)
        self.target = target
        self.synchronizer = synchronizer


class CallbackError(Exception):
    """Carries a non-exception error value passed to a Node-style callback."""

    def __init__(self, reason: Any) -> None:
        super().__init__(reason)
        self.reason = reason
