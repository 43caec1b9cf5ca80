"""Shared record, option and error types."""

from syncwait.core.errors import CallbackError, NonFunctionError, SyncError
from syncwait.core.models import (
    MIN_POLL_INTERVAL,
    ResolverPair,
    ResumeHandle,
    Synchronizer,
    SyncOptions,
    WaitOptions,
    clamp_interval,
)

__all__ = [
    "MIN_POLL_INTERVAL",
    "CallbackError",
    "NonFunctionError",
    "ResolverPair",
    "ResumeHandle",
    "SyncError",
    "SyncOptions",
    "Synchronizer",
    "WaitOptions",
    "clamp_interval",
]
