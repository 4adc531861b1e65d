"""
Call adapters for the public client methods.

``sync_compatible`` lets every coroutine method be used from plain synchronous
code: the coroutine runs on one background event loop owned by the library, so
the shared ``httpx.AsyncClient`` and the batch token lock always live on the
same loop. ``log_api_errors`` converts remote failures into an absent result.
"""

from __future__ import annotations

import asyncio
import atexit
import functools
import logging
import threading
from typing import Any, Callable, Coroutine, Optional

from cfimages.io.network_exceptions import ApiRequestError

logger = logging.getLogger(__name__)

_bg_loop: Optional[asyncio.AbstractEventLoop] = None
_bg_thread: Optional[threading.Thread] = None
_bg_started = threading.Event()


def _loop_thread_target() -> None:
    global _bg_loop
    loop = asyncio.new_event_loop()
    _bg_loop = loop
    asyncio.set_event_loop(loop)
    _bg_started.set()
    try:
        loop.run_forever()
    finally:
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()
        _bg_loop = None


def _ensure_bg_loop_started() -> None:
    global _bg_thread
    if _bg_loop is not None:
        return
    if _bg_thread is not None and _bg_thread.is_alive():
        return
    _bg_started.clear()
    _bg_thread = threading.Thread(target=_loop_thread_target, name="cfimages-bg-loop", daemon=True)
    _bg_thread.start()
    _bg_started.wait()


def _bg_submit(coro: Coroutine[Any, Any, Any]):
    _ensure_bg_loop_started()
    assert _bg_loop is not None
    return asyncio.run_coroutine_threadsafe(coro, _bg_loop)


def _bg_run(coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None) -> Any:
    return _bg_submit(coro).result(timeout=timeout)


def _stop_bg_loop() -> None:
    global _bg_loop, _bg_thread
    loop = _bg_loop
    if loop is None:
        return
    if loop.is_running():
        loop.call_soon_threadsafe(loop.stop)
    if _bg_thread and _bg_thread.is_alive():
        _bg_thread.join(timeout=2.0)
    _bg_loop = None
    _bg_thread = None


atexit.register(_stop_bg_loop)


def sync_compatible(async_fn: Callable[..., Coroutine[Any, Any, Any]]):
    """
    Make a coroutine method callable from both sync and async code.

    Without a running loop the call blocks and returns the result. Inside a
    running loop it returns an awaitable. Calls made from the background loop
    itself get the bare coroutine, so methods can await each other.
    """

    @functools.wraps(async_fn)
    def wrapper(self, *args, **kwargs):
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            return _bg_run(async_fn(self, *args, **kwargs))
        if current_loop is _bg_loop:
            return async_fn(self, *args, **kwargs)

        async def _await_bg():
            fut = _bg_submit(async_fn(self, *args, **kwargs))
            return await asyncio.wrap_future(fut)

        return _await_bg()

    return wrapper


def log_api_errors(message: str, default: Any = None):
    """
    Log remote failures of the decorated coroutine and return ``default`` instead.

    Only :class:`ApiRequestError` is absorbed; validation errors propagate.

    :param message: Prefix of the log line, e.g. ``"Error uploading image"``.
    :type message: str
    :param default: Value returned when the call fails.
    :type default: Any, optional
    """

    def decorator(async_fn: Callable[..., Coroutine[Any, Any, Any]]):
        @functools.wraps(async_fn)
        async def wrapper(*args, **kwargs):
            try:
                return await async_fn(*args, **kwargs)
            except ApiRequestError as exc:
                logger.error(f"{message}: {exc}")
                return default

        return wrapper

    return decorator
