"""Domain models for the synchronizer coordination layer.

This module defines the shared completion record and the option types used
across all adapters and waiters.
"""

from __future__ import annotations

import asyncio
import dataclasses
import math
import os
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Self

from syncwait.core.errors import SyncError

MIN_POLL_INTERVAL = 0.15
"""Lowest poll period in seconds; smaller or non-numeric intervals are raised to it."""

SynchronizerCallback = Callable[["Synchronizer"], Any]


@dataclass(slots=True)
class Synchronizer:
    """Observable outcome of an asynchronous operation.

    The record is owned by whichever component created it and only that
    component (or its timers) writes to it. Waiters share it by reference
    and only read it.

    Attributes:
        done: Becomes True exactly once, on success, failure or timeout.
        value: Result payload on success, None otherwise.
        error: Sentinel kind or propagated failure value, None on success.
    """

    done: bool = False
    value: Any = None
    error: Any = None

    @property
    def succeeded(self) -> bool:
        """True once the record completed without an error."""
        return self.done and self.error is None

    @property
    def timed_out(self) -> bool:
        """True if the record was completed by a timeout."""
        return self.error == SyncError.TIMED_OUT


@dataclass(frozen=True, slots=True)
class ResolverPair:
    """A pending token paired with the function that settles it.

    Attributes:
        resume: Settles ``token`` with None. Calls after the first are no-ops.
        token: Future that stays pending until ``resume`` is called.
    """

    resume: Callable[[], None]
    token: asyncio.Future[None]

    def __iter__(self) -> Iterator[Any]:
        yield self.resume
        yield self.token


@dataclass(slots=True)
class ResumeHandle:
    """Holder that ``pause`` fills with an early-resume function."""

    resume: Callable[[], None] | None = None


def clamp_interval(value: Any) -> float:
    """Apply the poll interval floor.

    Args:
        value: Requested interval in seconds.

    Returns:
        float: ``value`` if it is a real number at or above the floor,
        ``MIN_POLL_INTERVAL`` otherwise.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return MIN_POLL_INTERVAL
    if math.isnan(value) or value < MIN_POLL_INTERVAL:
        return MIN_POLL_INTERVAL
    return float(value)


def _default_interval() -> float:
    try:
        return float(os.getenv("SYNCWAIT_POLL_INTERVAL", str(MIN_POLL_INTERVAL)))
    except ValueError:
        return MIN_POLL_INTERVAL


class _OptionsMixin:
    """Shared construction helpers for the frozen option types."""

    __slots__ = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Self:
        """Build options from a plain mapping, ignoring unknown keys."""
        if not mapping:
            return cls()
        names = {f.name for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
        return cls(**{key: val for key, val in mapping.items() if key in names})

    @classmethod
    def coerce(cls, options: Self | Mapping[str, Any] | None = None, **overrides: Any) -> Self:
        """Normalize an options argument and apply non-None keyword overrides.

        Args:
            options: An instance, a mapping or None.
            **overrides: Field values that take precedence when not None.

        Returns:
            A new options instance.

        Raises:
            TypeError: If ``options`` is neither an instance, a mapping nor None.
        """
        if options is not None and not isinstance(options, (cls, Mapping)):
            raise TypeError(
                f"options must be {cls.__name__}, a mapping or None, "
                f"got {type(options).__name__}"
            )
        base = options if isinstance(options, cls) else cls.from_mapping(options)  # type: ignore[arg-type]
        changes = {key: val for key, val in overrides.items() if val is not None}
        return dataclasses.replace(base, **changes) if changes else base  # type: ignore[type-var]


@dataclass(frozen=True, slots=True)
class SyncOptions(_OptionsMixin):
    """Configuration for the promise adapter.

    Attributes:
        timeout: Seconds before the record is marked TIMED_OUT (None: never).
        on_done: Called once with the record on success or failure.
        on_timeout: Called once with the record if the timeout fires first.
        discard_on_timeout: Ignore a settlement that arrives after the timeout.
    """

    timeout: float | None = None
    on_done: SynchronizerCallback | None = None
    on_timeout: SynchronizerCallback | None = None
    discard_on_timeout: bool = False


@dataclass(frozen=True, slots=True)
class WaitOptions(_OptionsMixin):
    """Configuration for waiters and the condition poller.

    Attributes:
        on_done: Called once with the record when completion is observed.
        on_timeout: Called once with the record if the wait times out first.
        interval: Poll period in seconds; defaults to ``SYNCWAIT_POLL_INTERVAL``.
    """

    on_done: SynchronizerCallback | None = None
    on_timeout: SynchronizerCallback | None = None
    interval: Any = None

    @property
    def effective_interval(self) -> float:
        """Poll period with the floor applied."""
        interval = self.interval if self.interval is not None else _default_interval()
        return clamp_interval(interval)
