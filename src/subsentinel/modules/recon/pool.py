"""Fixed-size async worker pool for per-candidate jobs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_POOL_SIZE = 10


class ScanCancellation:
    """Cooperative stop signal shared by a scan's workers."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BoundedWorkerPool(Generic[T, R]):
    """Run a job over many items with at most ``size`` jobs in flight.

    Items are consumed from a FIFO queue; each worker finishes its job
    before taking the next item. ``None`` results are discarded. A job that
    raises is logged and contributes nothing.
    """

    def __init__(
        self,
        size: int = DEFAULT_POOL_SIZE,
        cancellation: ScanCancellation | None = None,
    ):
        if size < 1:
            raise ValueError("Worker pool size must be at least 1")
        self.size = size
        self.cancellation = cancellation
        self.active = 0
        self.peak_active = 0
        self.completed = 0

    async def run(
        self,
        items: Iterable[T],
        job: Callable[[T], Awaitable[R | None]],
    ) -> list[R]:
        queue: asyncio.Queue[T] = asyncio.Queue()
        for item in items:
            queue.put_nowait(item)

        results: list[R] = []
        worker_count = min(self.size, queue.qsize())

        async def worker() -> None:
            while not self._stopped():
                try:
                    item = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                self.active += 1
                self.peak_active = max(self.peak_active, self.active)
                try:
                    result = await job(item)
                except Exception:
                    logger.exception("Worker job failed for %r", item)
                    result = None
                finally:
                    self.active -= 1
                    self.completed += 1
                    queue.task_done()
                if result is not None:
                    results.append(result)

        await asyncio.gather(*(worker() for _ in range(worker_count)))
        return results

    def _stopped(self) -> bool:
        return self.cancellation is not None and self.cancellation.cancelled
