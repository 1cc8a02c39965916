"""Per-host request spacing."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable


class HostRateLimiter:
    """Spaces requests to the same host by a minimum interval.

    One instance belongs to one scan. Requests to different hosts never wait
    on each other; the lock only guards the timestamp map.
    """

    def __init__(
        self,
        interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval = max(0.0, interval)
        self._clock = clock
        self._last_request: dict[str, float] = {}
        self._lock = asyncio.Lock()

    async def wait(self, host: str) -> float:
        """Block until *host* may be requested again; return the seconds waited."""
        key = host.lower()
        async with self._lock:
            now = self._clock()
            last = self._last_request.get(key)
            delay = 0.0
            if last is not None:
                delay = max(0.0, last + self.interval - now)
            # Reserve the slot before sleeping so concurrent callers queue behind it.
            self._last_request[key] = now + delay

        if delay > 0:
            await asyncio.sleep(delay)
        return delay

    def last_request(self, host: str) -> float | None:
        return self._last_request.get(host.lower())

    def __len__(self) -> int:
        return len(self._last_request)
