"""Observability module."""

from syncwait.observability.log import (
    LEVELS,
    TRACE,
    format_event,
    log_event,
    resolve_level,
)

__all__ = [
    "LEVELS",
    "TRACE",
    "format_event",
    "log_event",
    "resolve_level",
]
