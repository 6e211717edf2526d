"""Bridge from synchronous Celery tasks into the async pipeline."""

import asyncio
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")

_local = threading.local()


def _thread_loop() -> asyncio.AbstractEventLoop:
    """One long-lived loop per worker thread.

    Adapters cache httpx clients bound to the loop that created them, so the
    loop is reused across tasks instead of being closed after each one.
    """
    loop: asyncio.AbstractEventLoop | None = getattr(_local, "loop", None)
    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        _local.loop = loop
    return loop


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Raises:
        RuntimeError: If called while an event loop is already running in
            this thread (await the coroutine instead)
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return _thread_loop().run_until_complete(coro)

    coro.close()
    raise RuntimeError("run_async() cannot be used inside a running event loop")
