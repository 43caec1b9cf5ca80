"""Delay primitive with an optional early-resume handle."""

import asyncio
from typing import Any


def pause(duration: float | None = 0, handle: Any = None) -> asyncio.Future[None]:
    """Return a future that resolves after ``duration`` seconds.

    A zero or missing duration resolves on the next loop iteration. When
    ``handle`` is given, its ``resume`` attribute is overwritten with a
    function that resolves the future early; with several ``pause`` calls on
    the same handle, the last one wins.

    Args:
        duration: Seconds to wait.
        handle: Any object accepting a ``resume`` attribute, e.g. ``ResumeHandle``.

    Returns:
        asyncio.Future[None]: The pending delay.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[None] = loop.create_future()

    def resume() -> None:
        timer.cancel()
        if not future.done():
            future.set_result(None)

    timer = loop.call_later(duration or 0, resume)

    if handle is not None:
        handle.resume = resume

    return future
