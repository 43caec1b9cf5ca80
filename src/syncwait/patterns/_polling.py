"""Timer bookkeeping shared by the polling waiter and the condition poller."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from syncwait.core.models import Synchronizer, WaitOptions
from syncwait.patterns._hooks import fire


class PollingWait(ABC):
    """One polling wait over a Synchronizer record.

    Owns a recurring poll task and an optional one-shot timeout timer. Both
    are released as soon as the returned future settles, whichever path
    settles it, and the ``_settled`` flag keeps callbacks from firing twice.

    Subclasses override ``_tick`` (one poll step) and ``_expire`` (timeout
    handling before the future is resolved).
    """

    def __init__(
        self,
        synchronizer: Synchronizer,
        timeout: float | None,
        options: WaitOptions,
        logger: logging.Logger,
    ) -> None:
        self._loop = asyncio.get_running_loop()
        self._synchronizer = synchronizer
        self._timeout = timeout
        self._options = options
        self._interval = options.effective_interval
        self._logger = logger

        self._settled = False
        self._timer: asyncio.TimerHandle | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self.future: asyncio.Future[Synchronizer] = self._loop.create_future()

    @property
    def interval(self) -> float:
        """Effective poll period in seconds."""
        return self._interval

    def start(self) -> asyncio.Future[Synchronizer]:
        """Arm the timers and return the future callers wait on."""
        if self._timeout is not None:
            self._timer = self._loop.call_later(self._timeout, self._on_timeout)
        self._poll_task = self._loop.create_task(self._poll_loop())
        self.future.add_done_callback(self._on_future_done)
        return self.future

    async def _poll_loop(self) -> None:
        while not self._settled:
            await asyncio.sleep(self._interval)
            await self._tick()

    async def _tick(self) -> None:
        record = self._synchronizer
        if record.done or record.error is not None:
            self._complete()

    @abstractmethod
    def _expire(self) -> None:
        """Handle the timeout before the future is resolved."""

    def _complete(self) -> None:
        """Settle after a poll tick observed completion."""
        if self._settled:
            return
        self._settled = True
        self._cancel_timer()
        fire(self._options.on_done, self._synchronizer, self._logger, "on_done")
        self._resolve()

    def _on_timeout(self) -> None:
        self._timer = None
        if self._settled:
            return
        self._settled = True
        self._cancel_poll()
        self._expire()
        self._resolve()

    def _on_future_done(self, future: asyncio.Future[Synchronizer]) -> None:
        # Also reached when the caller cancels the returned future.
        self._settled = True
        self._cancel_timer()
        self._cancel_poll()

    def _resolve(self) -> None:
        if not self.future.done():
            self.future.set_result(self._synchronizer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _cancel_poll(self) -> None:
        task = self._poll_task
        self._poll_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
