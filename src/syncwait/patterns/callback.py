"""Adapter for Node-style single-callback functions."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from syncwait.core.errors import CallbackError, NonFunctionError
from syncwait.core.models import SynchronizerCallback, WaitOptions
from syncwait.observability.log import log_event
from syncwait.patterns.waiter import wait_for

logger = logging.getLogger(__name__)


def promisify(func: Callable[..., Any], *args: Any, **kwargs: Any) -> asyncio.Future[Any]:
    """Call a callback-style function and expose its outcome as a future.

    ``func`` is called as ``func(*args, callback, **kwargs)``. The callback
    takes ``(error=None, *results)``: a truthy error fails the future, an
    exception as itself and any other value wrapped in ``CallbackError``.
    A single result becomes the value, several become a tuple. Only the
    first callback invocation counts, and it may come from another thread.

    Returns:
        asyncio.Future: Settled by the first callback invocation.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def settle(error: Any, results: tuple[Any, ...]) -> None:
        if future.done():
            return
        if error:
            exc = error if isinstance(error, BaseException) else CallbackError(error)
            future.set_exception(exc)
        elif len(results) > 1:
            future.set_result(results)
        else:
            future.set_result(results[0] if results else None)

    called = False

    def callback(error: Any = None, *results: Any) -> None:
        nonlocal called
        called = True
        loop.call_soon_threadsafe(settle, error, results)

    try:
        func(*args, callback, **kwargs)
    except Exception as exc:
        # A callback that already ran wins over a later raise.
        if called:
            log_event(logger, "warn", "promisify_raised_after_callback", error=repr(exc))
        elif not future.done():
            future.set_exception(exc)

    return future


def await_callback(
    func: Callable[..., Any],
    timeout: float | None = None,
    options: WaitOptions | Mapping[str, Any] | None = None,
    *,
    args: tuple[Any, ...] = (),
    kwargs: Mapping[str, Any] | None = None,
    on_done: SynchronizerCallback | None = None,
    on_timeout: SynchronizerCallback | None = None,
    interval: Any = None,
) -> asyncio.Future[Any]:
    """Run a callback-style function and wait for it like any other record.

    The function is wrapped with ``promisify`` and handed to ``wait_for``, so
    timeout, polling and callback semantics are the waiter's. The resolved
    record carries the callback's result as ``value`` or its error as
    ``error``.

    Args:
        func: Function whose last positional argument is a ``(error, result)``
            callback.
        timeout: Seconds to wait before giving up.
        options: ``WaitOptions`` instance or mapping.
        args: Positional arguments passed before the callback.
        kwargs: Keyword arguments passed to ``func``.
        on_done: Called once with the record when completion is observed.
        on_timeout: Called once with the record if the wait times out.
        interval: Poll period in seconds.

    Returns:
        asyncio.Future: Resolves with the observed Synchronizer.

    Raises:
        NonFunctionError: If ``func`` is not callable or is already awaitable.
    """
    if not callable(func) or inspect.isawaitable(func):
        log_event(logger, "error", "await_callback_non_function", value_type=type(func).__name__)
        raise NonFunctionError("await_callback(): callback was not a function", target=func)

    future = promisify(func, *args, **(kwargs or {}))
    return wait_for(
        future,
        timeout,
        options,
        on_done=on_done,
        on_timeout=on_timeout,
        interval=interval,
    )
