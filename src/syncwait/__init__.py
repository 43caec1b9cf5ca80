"""Syncwait.

Uniform completion records and polling waiters that let asyncio code treat
awaitables, callback-style functions and manually resolved handles the same
way, with optional timeouts and completion callbacks.
"""

from syncwait.core import (
    MIN_POLL_INTERVAL,
    CallbackError,
    NonFunctionError,
    ResolverPair,
    ResumeHandle,
    SyncError,
    Synchronizer,
    SyncOptions,
    WaitOptions,
)
from syncwait.patterns import (
    await_callback,
    pause,
    poll,
    promisify,
    sync,
    syncer,
    wait_for,
    wait_for_all,
)

__version__ = "0.1.0"

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
    "await_callback",
    "pause",
    "poll",
    "promisify",
    "sync",
    "syncer",
    "wait_for",
    "wait_for_all",
]
