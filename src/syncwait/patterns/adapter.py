"""Promise adapter that turns any awaitable into a Synchronizer record."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Mapping
from typing import Any

from syncwait.core.errors import CallbackError, SyncError
from syncwait.core.models import Synchronizer, SynchronizerCallback, SyncOptions
from syncwait.observability.log import log_event
from syncwait.patterns._hooks import fire

logger = logging.getLogger(__name__)

# Strong references to tasks wrapped from bare coroutines until they finish.
_pending_tasks: set[asyncio.Future[Any]] = set()


class _PromiseAdapter:
    """Per-call state linking one awaitable, its timeout timer and its record."""

    def __init__(
        self,
        synchronizer: Synchronizer,
        awaitable: Awaitable[Any],
        options: SyncOptions,
    ) -> None:
        loop = asyncio.get_running_loop()
        self._synchronizer = synchronizer
        self._options = options
        self._timer: asyncio.TimerHandle | None = None

        future = asyncio.ensure_future(awaitable, loop=loop)
        if future is not awaitable:
            _pending_tasks.add(future)
            future.add_done_callback(_pending_tasks.discard)

        if options.timeout is not None:
            self._timer = loop.call_later(options.timeout, self._on_timeout)
        future.add_done_callback(self._on_settled)

    def _on_settled(self, future: asyncio.Future[Any]) -> None:
        record = self._synchronizer

        # Only the timeout can have completed the record before us.
        if record.done and self._options.discard_on_timeout:
            if not future.cancelled():
                future.exception()  # mark retrieved
            log_event(logger, "debug", "sync_late_settlement_discarded")
            return

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        late = record.done
        if future.cancelled():
            record.value = None
            record.error = asyncio.CancelledError()
        elif (exc := future.exception()) is not None:
            record.value = None
            record.error = exc.reason if isinstance(exc, CallbackError) else exc
        else:
            record.value = future.result()
            record.error = None
        record.done = True

        if late:
            # on_timeout already ran for this record; on_done stays silent.
            log_event(logger, "debug", "sync_late_settlement", failed=record.error is not None)
            return

        fire(self._options.on_done, record, logger, "on_done")

    def _on_timeout(self) -> None:
        self._timer = None
        record = self._synchronizer
        if record.done:
            return

        record.error = SyncError.TIMED_OUT
        record.done = True
        log_event(logger, "debug", "sync_timed_out", timeout=self._options.timeout)
        fire(self._options.on_timeout, record, logger, "on_timeout")


def sync(
    awaitable: Any,
    options: SyncOptions | Mapping[str, Any] | None = None,
    *,
    timeout: float | None = None,
    on_done: SynchronizerCallback | None = None,
    on_timeout: SynchronizerCallback | None = None,
    discard_on_timeout: bool | None = None,
) -> Synchronizer:
    """Wrap an awaitable into a Synchronizer record.

    The call never blocks: the returned record is usually still pending and is
    completed later by the awaitable's settlement or by the timeout, whichever
    the event loop runs first. Ties are decided by the loop's dispatch order.

    A non-awaitable input completes the record immediately with the input as
    ``value`` and ``SyncError.NON_THENABLE`` as ``error``. That is a
    pass-through, not a failure, so callers must inspect ``error`` before
    trusting ``value``.

    Args:
        awaitable: Coroutine, future, task or any object with ``__await__``.
        options: ``SyncOptions`` instance or mapping; unknown keys are ignored.
        timeout: Seconds after which a still pending record becomes TIMED_OUT.
            The underlying operation keeps running.
        on_done: Called once with the record on success or failure.
        on_timeout: Called once with the record if the timeout wins.
        discard_on_timeout: Ignore a settlement arriving after the timeout.

    Returns:
        Synchronizer: The record owned by this adapter.

    Example:
        ```python
        record = sync(fetch(), timeout=2.0)
        await wait_for(record)
        if record.succeeded:
            use(record.value)
        ```
    """
    opts = SyncOptions.coerce(
        options,
        timeout=timeout,
        on_done=on_done,
        on_timeout=on_timeout,
        discard_on_timeout=discard_on_timeout,
    )
    synchronizer = Synchronizer()

    if not inspect.isawaitable(awaitable):
        log_event(logger, "debug", "sync_non_thenable", value_type=type(awaitable).__name__)
        synchronizer.done = True
        synchronizer.value = awaitable
        synchronizer.error = SyncError.NON_THENABLE
        return synchronizer

    _PromiseAdapter(synchronizer, awaitable, opts)
    return synchronizer
