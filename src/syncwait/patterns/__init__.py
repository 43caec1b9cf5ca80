"""Coordination patterns module."""

from syncwait.patterns.adapter import sync
from syncwait.patterns.callback import await_callback, promisify
from syncwait.patterns.delay import pause
from syncwait.patterns.poller import poll
from syncwait.patterns.resolver import syncer
from syncwait.patterns.waiter import wait_for, wait_for_all

__all__ = [
    # Resolver
    "syncer",
    # Adapter
    "sync",
    # Waiters
    "wait_for",
    "wait_for_all",
    # Delay
    "pause",
    # Poller
    "poll",
    # Callbacks
    "await_callback",
    "promisify",
]
