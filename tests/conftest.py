"""Pytest configuration and fixtures for syncwait tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import pytest


@pytest.fixture()
def delayed() -> Callable[[Any, float], Coroutine[Any, Any, Any]]:
    """Provide a coroutine factory that returns ``value`` after ``delay`` seconds."""

    async def _delayed(value: Any, delay: float) -> Any:
        await asyncio.sleep(delay)
        return value

    return _delayed


@pytest.fixture()
def failing() -> Callable[[BaseException, float], Coroutine[Any, Any, Any]]:
    """Provide a coroutine factory that raises ``exc`` after ``delay`` seconds."""

    async def _failing(exc: BaseException, delay: float) -> Any:
        await asyncio.sleep(delay)
        raise exc

    return _failing


@pytest.fixture()
def calls() -> dict[str, list[Any]]:
    """Record callback invocations by name."""
    return {"on_done": [], "on_timeout": []}
