"""HTTPS/HTTP probing of resolved candidates."""

from __future__ import annotations

import asyncio
import logging

import httpx

from subsentinel.tools.http import HTTPClient, HTTPResponse

from .heuristics import fingerprint_technologies
from .models import ProbeResult
from .rate_limit import HostRateLimiter

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 10.0
DEFAULT_BODY_LIMIT = 10_000


class HttpProber:
    """Probe a host over HTTPS, falling back to HTTP on transport failure.

    Each attempt waits on the per-host rate limiter and is bounded by its own
    deadline. A timed out or failed attempt contributes no data.
    """

    def __init__(
        self,
        client: HTTPClient,
        rate_limiter: HostRateLimiter,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        body_limit: int = DEFAULT_BODY_LIMIT,
        tech_fingerprint: bool = True,
    ):
        self.client = client
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self.body_limit = body_limit
        self.tech_fingerprint = tech_fingerprint

    async def probe(self, host: str) -> ProbeResult:
        response = await self._attempt("https", host)
        if response is not None:
            return self._to_result(response, https=True)

        response = await self._attempt("http", host)
        if response is not None:
            return self._to_result(response, https=False)

        return ProbeResult.empty()

    async def _attempt(self, scheme: str, host: str) -> HTTPResponse | None:
        url = f"{scheme}://{host}"
        await self.rate_limiter.wait(host)
        try:
            async with asyncio.timeout(self.timeout):
                return await self.client.get(url, max_body=self.body_limit)
        except TimeoutError:
            logger.debug("Probe of %s timed out after %.1fs", url, self.timeout)
        except httpx.HTTPError as exc:
            logger.debug("Probe of %s failed: %s", url, exc)
        return None

    def _to_result(self, response: HTTPResponse, *, https: bool) -> ProbeResult:
        technologies: list[str] = []
        if self.tech_fingerprint:
            technologies = fingerprint_technologies(response.headers, response.set_cookie)

        return ProbeResult(
            http_status=None if https else response.status_code,
            https_status=response.status_code if https else None,
            server=response.server or None,
            technologies=technologies,
            body_sample=response.body[: self.body_limit] if response.body else None,
            headers=response.headers,
        )
