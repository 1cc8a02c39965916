"""Async HTTP client shared by the reconnaissance sources."""

import codecs
import time
from dataclasses import dataclass
from typing import Any

import httpx

DEFAULT_USER_AGENT = "SubdomainSentinel/1.0"


@dataclass
class HTTPResponse:
    """Represents an HTTP response."""

    url: str
    status_code: int
    headers: dict[str, str]
    body: str
    cookies: dict[str, str]
    response_time: float
    content_type: str = ""
    server: str = ""
    set_cookie: str = ""
    truncated: bool = False


class HTTPClient:
    """Async HTTP client used for CT, DNS-over-HTTPS, archive and probe traffic."""

    def __init__(
        self,
        timeout: float = 30.0,
        follow_redirects: bool = True,
        verify_ssl: bool = False,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            verify=self.verify_ssl,
            headers={"User-Agent": self.user_agent},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()

    def _require_client(self) -> httpx.AsyncClient:
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self.client

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        max_body: int | None = None,
    ) -> HTTPResponse:
        """Make an HTTP request.

        When *max_body* is given the body is streamed and everything past
        that many characters is discarded without being read.
        """
        client = self._require_client()
        start = time.time()

        async with client.stream(method, url, headers=headers, params=params) as response:
            body, truncated = await _read_body(response, max_body)

        elapsed = time.time() - start

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            body=body,
            cookies=dict(response.cookies),
            response_time=elapsed,
            content_type=response.headers.get("content-type", ""),
            server=response.headers.get("server", ""),
            set_cookie="; ".join(response.headers.get_list("set-cookie")),
            truncated=truncated,
        )

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        max_body: int | None = None,
    ) -> HTTPResponse:
        """Make a GET request."""
        return await self.request("GET", url, headers=headers, params=params, max_body=max_body)

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET *url* and decode the JSON body.

        Raises :class:`httpx.HTTPStatusError` for non-2xx answers and
        :class:`ValueError` for undecodable bodies.
        """
        client = self._require_client()
        response = await client.get(url, params=params, headers={"Accept": "application/json"})
        response.raise_for_status()
        return response.json()


async def _read_body(response: httpx.Response, max_body: int | None) -> tuple[str, bool]:
    if max_body is None:
        await response.aread()
        return response.text, False

    try:
        decoder = codecs.getincrementaldecoder(response.encoding or "utf-8")(errors="replace")
    except LookupError:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    chunks: list[str] = []
    size = 0
    async for raw in response.aiter_bytes():
        chunks.append(decoder.decode(raw))
        size += len(chunks[-1])
        if size >= max_body:
            break
    body = "".join(chunks)
    return body[:max_body], size > max_body
