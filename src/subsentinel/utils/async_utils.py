"""Run scan coroutines from the synchronous CLI."""

import asyncio
import signal
import sys
import threading
from collections.abc import Callable, Coroutine, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar, cast

T = TypeVar("T")

_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _close_loop(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel leftover tasks, drain async generators and close *loop*."""
    try:
        pending = asyncio.all_tasks(loop)
        for task in pending:
            task.cancel()
        if pending:
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        except RuntimeError:
            pass
    finally:
        asyncio.set_event_loop(None)
        loop.close()


@contextmanager
def _signal_handlers(handler: Callable[[int, Any], None]) -> Iterator[None]:
    """Install *handler* for SIGINT/SIGTERM when running on the main thread."""
    if sys.platform == "win32" or threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {signum: signal.signal(signum, handler) for signum in _SIGNALS}
    try:
        yield
    finally:
        for signum, original in previous.items():
            if original is not None:
                signal.signal(signum, original)


def _run_in_fresh_loop(
    coro: Coroutine[Any, Any, T],
    on_interrupt: Callable[[], None] | None = None,
) -> T:
    """Run *coro* on a new event loop.

    With *on_interrupt*, SIGINT/SIGTERM schedule that callback on the loop and
    the coroutine keeps running until it returns. Without it, every task is
    cancelled and the interrupt surfaces as KeyboardInterrupt.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    interrupted = False

    def handle_signal(signum: int, frame: Any) -> None:
        nonlocal interrupted
        if on_interrupt is not None:
            loop.call_soon_threadsafe(on_interrupt)
            return
        interrupted = True
        for task in asyncio.all_tasks(loop):
            task.cancel()

    with _signal_handlers(handle_signal):
        try:
            return loop.run_until_complete(coro)
        except asyncio.CancelledError:
            if interrupted:
                raise KeyboardInterrupt from None
            raise
        finally:
            _close_loop(loop)


def safe_async_run(
    coro: Coroutine[Any, Any, T],
    on_interrupt: Callable[[], None] | None = None,
) -> T:
    """Run *coro* to completion and return its result.

    Inside an already running loop (pytest-asyncio, notebooks) the coroutine
    runs on a worker thread with its own loop.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return _run_in_fresh_loop(coro, on_interrupt)

    outcome: dict[str, Any] = {}

    def worker() -> None:
        try:
            outcome["result"] = _run_in_fresh_loop(coro, on_interrupt)
        except BaseException as exc:
            outcome["error"] = exc

    thread = threading.Thread(target=worker, name="subsentinel-scan", daemon=True)
    thread.start()
    thread.join()

    if "error" in outcome:
        raise outcome["error"]
    return cast(T, outcome.get("result"))
