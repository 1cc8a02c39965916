"""Historical URL lookup through the Wayback Machine CDX API."""

from __future__ import annotations

import logging

import httpx

from subsentinel.tools.http import HTTPClient

logger = logging.getLogger(__name__)

CDX_URL = "https://web.archive.org/cdx/search/cdx"
CDX_URL_COLUMN = 2


class WaybackClient:
    """Best-effort archive annotation for active subdomains."""

    def __init__(self, client: HTTPClient, endpoint: str = CDX_URL, limit: int = 50):
        self.client = client
        self.endpoint = endpoint
        self.limit = limit

    async def urls_for(self, host: str) -> list[str]:
        try:
            rows = await self.client.get_json(
                self.endpoint,
                params={
                    "url": f"{host}/*",
                    "output": "json",
                    "collapse": "urlkey",
                    "limit": str(self.limit),
                },
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Wayback lookup failed for %s: %s", host, exc)
            return []

        # First row is the column header.
        if not isinstance(rows, list) or len(rows) <= 1:
            return []
        return [
            row[CDX_URL_COLUMN]
            for row in rows[1:]
            if isinstance(row, list) and len(row) > CDX_URL_COLUMN
        ]
