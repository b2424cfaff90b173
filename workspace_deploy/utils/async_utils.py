"""Asynchronous operation utilities"""

import asyncio
import inspect
from typing import Any, Coroutine, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    loop = None
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # No running loop
        pass

    if loop and loop.is_running():
        # Already in async context, run in a separate thread with its own loop
        import threading

        result = None
        exception = None

        def run_in_thread():
            nonlocal result, exception
            try:
                result = asyncio.run(coro)
            except Exception as e:
                exception = e

        thread = threading.Thread(target=run_in_thread)
        thread.start()
        thread.join()

        if exception:
            raise exception
        return result
    else:
        return asyncio.run(coro)


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, return it unchanged otherwise"""
    if inspect.isawaitable(value):
        return await value
    return value


async def run_blocking(func, *args) -> Any:
    """Run a blocking function in the default executor"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, *args)
