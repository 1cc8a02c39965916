"""Tests for the per-host rate limiter and bounded worker pool."""

import asyncio

import pytest

from subsentinel.modules.recon import BoundedWorkerPool, HostRateLimiter, ScanCancellation


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestHostRateLimiter:
    """Test request spacing per host."""

    async def test_first_request_does_not_wait(self):
        limiter = HostRateLimiter(interval=0.1, clock=FakeClock())
        assert await limiter.wait("a.example.com") == 0.0
        assert len(limiter) == 1

    async def test_second_request_waits_remaining_interval(self, monkeypatch):
        slept: list[float] = []

        async def fake_sleep(delay):
            slept.append(delay)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        clock = FakeClock()
        limiter = HostRateLimiter(interval=0.1, clock=clock)

        await limiter.wait("a.example.com")
        clock.now += 0.04
        delay = await limiter.wait("a.example.com")

        assert delay == pytest.approx(0.06)
        assert slept == [pytest.approx(0.06)]

    async def test_hosts_are_independent(self):
        clock = FakeClock()
        limiter = HostRateLimiter(interval=0.1, clock=clock)

        await limiter.wait("a.example.com")
        assert await limiter.wait("b.example.com") == 0.0

    async def test_host_key_is_case_insensitive(self):
        limiter = HostRateLimiter(interval=0.1, clock=FakeClock())
        await limiter.wait("A.Example.com")
        assert limiter.last_request("a.example.com") == 100.0

    async def test_concurrent_callers_are_spaced(self, monkeypatch):
        slept: list[float] = []

        async def fake_sleep(delay):
            slept.append(delay)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        clock = FakeClock()
        limiter = HostRateLimiter(interval=0.02, clock=clock)

        delays = await asyncio.gather(*(limiter.wait("same.example.com") for _ in range(4)))

        expected = [pytest.approx(0.02), pytest.approx(0.04), pytest.approx(0.06)]
        assert sorted(delays) == [0.0, *expected]
        assert sorted(slept) == expected
        assert limiter.last_request("same.example.com") == pytest.approx(100.06)

    async def test_after_interval_no_wait(self):
        clock = FakeClock()
        limiter = HostRateLimiter(interval=0.1, clock=clock)
        await limiter.wait("a.example.com")
        clock.now += 0.5
        assert await limiter.wait("a.example.com") == 0.0


class TestBoundedWorkerPool:
    """Test the fixed-size worker pool."""

    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError):
            BoundedWorkerPool(0)

    async def test_never_exceeds_pool_size(self):
        pool = BoundedWorkerPool(3)
        in_flight = 0
        observed = 0

        async def job(item: int) -> int:
            nonlocal in_flight, observed
            in_flight += 1
            observed = max(observed, in_flight)
            await asyncio.sleep(0.001)
            in_flight -= 1
            return item * 2

        results = await pool.run(range(25), job)

        assert sorted(results) == [i * 2 for i in range(25)]
        assert observed <= 3
        assert pool.peak_active == observed
        assert pool.completed == 25
        assert pool.active == 0

    async def test_none_results_dropped(self):
        pool = BoundedWorkerPool(2)

        async def job(item: int) -> int | None:
            return item if item % 2 else None

        assert sorted(await pool.run(range(6), job)) == [1, 3, 5]

    async def test_failing_job_does_not_stop_others(self):
        pool = BoundedWorkerPool(2)

        async def job(item: int) -> int:
            if item == 3:
                raise RuntimeError("boom")
            return item

        results = await pool.run(range(6), job)

        assert sorted(results) == [0, 1, 2, 4, 5]
        assert pool.completed == 6

    async def test_empty_input(self):
        pool = BoundedWorkerPool(4)

        async def job(item):
            return item

        assert await pool.run([], job) == []

    async def test_cancellation_stops_admitting_items(self):
        cancellation = ScanCancellation()
        pool = BoundedWorkerPool(2, cancellation)
        started: list[int] = []

        async def job(item: int) -> int:
            started.append(item)
            if item == 1:
                cancellation.cancel()
            await asyncio.sleep(0)
            return item

        results = await pool.run(range(100), job)

        assert cancellation.cancelled
        assert len(started) < 100
        assert set(results) == set(started)
