"""Condition poller that waits for a predicate to become truthy."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from syncwait.core.errors import NonFunctionError, SyncError
from syncwait.core.models import Synchronizer, SynchronizerCallback, WaitOptions
from syncwait.observability.log import log_event
from syncwait.patterns._hooks import fire
from syncwait.patterns._polling import PollingWait

logger = logging.getLogger(__name__)


class _ConditionPoll(PollingWait):
    """Evaluates a predicate once per tick and owns the resulting record."""

    def __init__(
        self,
        predicate: Callable[[], Any],
        timeout: float | None,
        options: WaitOptions,
    ) -> None:
        super().__init__(Synchronizer(), timeout, options, logger)
        self._predicate = predicate

    async def _tick(self) -> None:
        record = self._synchronizer
        if record.done or record.error is not None:
            self._complete()
            return

        try:
            result = self._predicate()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            log_event(logger, "warn", "poll_predicate_failed", error=repr(exc))
            record.error = exc
            record.done = True
            self._complete()
            return

        if result:
            record.value = result
            record.done = True
            self._complete()

    def _expire(self) -> None:
        # Ticks complete the record and settle in one step, so it is pending here.
        record = self._synchronizer
        record.error = SyncError.TIMED_OUT
        record.done = True
        log_event(logger, "debug", "poll_timed_out", timeout=self._timeout)
        fire(self._options.on_timeout, record, logger, "on_timeout")


def poll(
    predicate: Callable[[], Any],
    timeout: float | None = None,
    options: WaitOptions | Mapping[str, Any] | None = None,
    *,
    on_done: SynchronizerCallback | None = None,
    on_timeout: SynchronizerCallback | None = None,
    interval: Any = None,
) -> asyncio.Future[Synchronizer]:
    """Poll ``predicate`` until it returns a truthy value or time runs out.

    The predicate is called once per interval from a single task, so it never
    runs concurrently with itself. It may return an awaitable, which is
    awaited before the next sleep. The first truthy result becomes the
    record's ``value``. A predicate that raises fails the record with the
    exception and is not called again.

    On timeout the record is marked TIMED_OUT, ``on_timeout`` fires and the
    future resolves. A negative timeout means no timeout.

    Args:
        predicate: Zero-argument callable.
        timeout: Seconds before giving up. None or negative polls forever.
        options: ``WaitOptions`` instance or mapping; unknown keys are ignored.
        on_done: Called once with the record on success or predicate failure.
        on_timeout: Called once with the record on timeout.
        interval: Poll period in seconds, floored at ``MIN_POLL_INTERVAL``.

    Returns:
        asyncio.Future: Resolves with the poller's Synchronizer. If
        ``predicate`` is not callable the future is rejected with
        ``NonFunctionError`` instead.
    """
    opts = WaitOptions.coerce(options, on_done=on_done, on_timeout=on_timeout, interval=interval)

    if not callable(predicate):
        log_event(logger, "error", "poll_non_function", value_type=type(predicate).__name__)
        synchronizer = Synchronizer(done=True, value=predicate, error=SyncError.NON_FUNCTION)
        future: asyncio.Future[Synchronizer] = asyncio.get_running_loop().create_future()
        future.set_exception(
            NonFunctionError(
                "poll(): predicate is not callable",
                target=predicate,
                synchronizer=synchronizer,
            )
        )
        return future

    if timeout is not None and timeout < 0:
        timeout = None
    return _ConditionPoll(predicate, timeout, opts).start()
