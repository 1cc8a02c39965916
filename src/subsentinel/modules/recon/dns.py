"""DNS resolution over a public DNS-over-HTTPS resolver."""

from __future__ import annotations

import logging

import httpx

from subsentinel.tools.http import HTTPClient

from .guard import filter_public_ips
from .models import ResolutionResult

logger = logging.getLogger(__name__)

DOH_URL = "https://dns.google/resolve"

RECORD_TYPE_A = 1
RECORD_TYPE_CNAME = 5


def parse_doh_answer(payload: dict) -> ResolutionResult:
    """Extract public A records and the CNAME from a DoH JSON answer."""
    ips: list[str] = []
    cname: str | None = None

    for answer in payload.get("Answer") or []:
        if not isinstance(answer, dict):
            continue
        data = str(answer.get("data", "")).strip()
        if not data:
            continue
        if answer.get("type") == RECORD_TYPE_A:
            ips.append(data)
        elif answer.get("type") == RECORD_TYPE_CNAME:
            cname = data.rstrip(".").lower()

    return ResolutionResult(ips=filter_public_ips(ips), cname=cname)


class DnsResolver:
    """Resolve A and CNAME records for candidate names."""

    def __init__(self, client: HTTPClient, endpoint: str = DOH_URL):
        self.client = client
        self.endpoint = endpoint

    async def resolve(self, name: str) -> ResolutionResult:
        """Resolve *name*; any failure yields an empty result."""
        try:
            payload = await self.client.get_json(self.endpoint, params={"name": name, "type": "A"})
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("DNS lookup failed for %s: %s", name, exc)
            return ResolutionResult()

        if not isinstance(payload, dict):
            return ResolutionResult()
        return parse_doh_answer(payload)
