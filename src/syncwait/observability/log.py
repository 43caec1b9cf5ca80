"""Structured log events for the coordination layer.

The library never configures handlers. Hosts route these records through the
standard ``logging`` configuration like any other library logger.
"""

import json
import logging
import os
from typing import Any

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


def structured_logging_enabled() -> bool:
    """Check whether events should be rendered as JSON."""
    return os.getenv("SYNCWAIT_STRUCTURED_LOGS", "1").strip().lower() not in ("0", "false", "no")


def resolve_level(level: int | str) -> int:
    """Translate a sink level name into a ``logging`` level number.

    Args:
        level: One of the ``LEVELS`` names or a numeric level.

    Returns:
        int: The numeric level.

    Raises:
        ValueError: If the name is unknown.
    """
    if isinstance(level, int):
        return level
    try:
        return LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"Unknown log level '{level}'") from None


def format_event(event: str, **fields: Any) -> str:
    """Render an event and its fields as a single log message."""
    if structured_logging_enabled():
        return json.dumps({"event": event, **fields}, default=repr)
    details = " ".join(f"{key}={val!r}" for key, val in fields.items())
    return f"{event} {details}".rstrip()


def log_event(logger: logging.Logger, level: int | str, event: str, **fields: Any) -> None:
    """Emit a structured event if ``logger`` is enabled for ``level``.

    Args:
        logger: Destination logger.
        level: Level name from ``LEVELS`` or a numeric level.
        event: Short event name, e.g. ``"sync_timed_out"``.
        **fields: Extra context serialized alongside the event name.
    """
    levelno = resolve_level(level)
    if logger.isEnabledFor(levelno):
        logger.log(levelno, format_event(event, **fields))
