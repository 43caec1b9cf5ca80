"""Polling waiters that turn Synchronizer records into plain awaitables."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from syncwait.core.models import Synchronizer, SynchronizerCallback, WaitOptions
from syncwait.observability.log import log_event
from syncwait.patterns._hooks import fire
from syncwait.patterns._polling import PollingWait
from syncwait.patterns.adapter import sync

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)


class _RecordWait(PollingWait):
    """Waits for a record created elsewhere to report completion."""

    def _expire(self) -> None:
        # The record belongs to its creator and is left untouched here.
        record = self._synchronizer
        if record.done or record.error is not None:
            fire(self._options.on_done, record, logger, "on_done")
            return
        log_event(logger, "debug", "wait_timed_out", timeout=self._timeout)
        fire(self._options.on_timeout, record, logger, "on_timeout")


def wait_for(
    target: Any,
    timeout: float | None = None,
    options: WaitOptions | Mapping[str, Any] | None = None,
    *,
    on_done: SynchronizerCallback | None = None,
    on_timeout: SynchronizerCallback | None = None,
    interval: Any = None,
) -> asyncio.Future[Any]:
    """Return a future that resolves once ``target`` reports completion.

    Completion is detected by polling the record's ``done`` and ``error``
    fields every ``interval`` seconds, never faster than ``MIN_POLL_INTERVAL``.
    Polling works for records whose creator cannot notify us directly.

    If ``timeout`` elapses first, ``on_timeout`` fires (when the record is
    still pending) and the future resolves anyway. The record itself is not
    marked TIMED_OUT by this path; only the adapter's own timeout does that.
    The future never rejects because of a timeout or an operation failure.

    Args:
        target: A Synchronizer, an awaitable (wrapped with ``sync``), or a
            list/tuple/set of those, which is handed to ``wait_for_all``.
            Any other value becomes a NON_THENABLE pass-through record.
        timeout: Seconds to wait before giving up. None waits indefinitely.
        options: ``WaitOptions`` instance or mapping; unknown keys are ignored.
        on_done: Called once with the record when completion is observed.
        on_timeout: Called once with the record if the wait times out.
        interval: Poll period in seconds.

    Returns:
        asyncio.Future: Resolves with the observed Synchronizer, or with a
        list of them when ``target`` is a collection.
    """
    if isinstance(target, _COLLECTION_TYPES):
        return wait_for_all(
            target,
            timeout,
            options,
            on_done=on_done,
            on_timeout=on_timeout,
            interval=interval,
        )

    opts = WaitOptions.coerce(options, on_done=on_done, on_timeout=on_timeout, interval=interval)
    synchronizer = target if isinstance(target, Synchronizer) else sync(target)
    return _RecordWait(synchronizer, timeout, opts, logger).start()


def wait_for_all(
    targets: Iterable[Any],
    timeout: float | None = None,
    options: WaitOptions | Mapping[str, Any] | None = None,
    *,
    on_done: SynchronizerCallback | None = None,
    on_timeout: SynchronizerCallback | None = None,
    interval: Any = None,
) -> asyncio.Future[list[Any]]:
    """Wait for every member of ``targets`` with the same timeout and options.

    Each member goes through ``wait_for`` and the result resolves only after
    all of them have settled. Members settle rather than reject on timeout or
    failure, so one slow or failed member never short-circuits the rest.

    Returns:
        asyncio.Future: Resolves with the observed records, in input order.
    """
    futures = [
        wait_for(
            target,
            timeout,
            options,
            on_done=on_done,
            on_timeout=on_timeout,
            interval=interval,
        )
        for target in targets
    ]
    return asyncio.gather(*futures)
