"""Certificate-transparency lookup via crt.sh."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from subsentinel.tools.http import HTTPClient

from .errors import UpstreamError

logger = logging.getLogger(__name__)

CRT_SH_URL = "https://crt.sh/"


def extract_subdomains(entries: Iterable[dict], domain: str) -> list[str]:
    """Collect SAN names under *domain* from crt.sh JSON entries."""
    apex = domain.lower()
    suffix = f".{apex}"
    seen: dict[str, None] = {}

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name_value = entry.get("name_value")
        if not isinstance(name_value, str):
            continue
        for raw in name_value.split("\n"):
            name = raw.strip().lower().rstrip(".")
            if not name or name.startswith("*"):
                continue
            if name == apex or not name.endswith(suffix):
                continue
            seen.setdefault(name, None)

    return list(seen)


class CertificateTransparencyClient:
    """Query a CT-log aggregator for names issued under a domain."""

    def __init__(self, client: HTTPClient, endpoint: str = CRT_SH_URL):
        self.client = client
        self.endpoint = endpoint

    async def fetch(self, domain: str) -> list[dict]:
        """Return raw certificate entries for ``%.domain``.

        Raises :class:`UpstreamError` on network, status or payload errors.
        """
        try:
            data = await self.client.get_json(
                self.endpoint, params={"q": f"%.{domain}", "output": "json"}
            )
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError("crt.sh", str(exc) or type(exc).__name__) from exc

        if not isinstance(data, list):
            raise UpstreamError("crt.sh", f"unexpected payload type {type(data).__name__}")
        return data

    async def lookup(self, domain: str) -> list[str]:
        """Subdomains seen in certificates for *domain*; failures yield ``[]``."""
        logger.info("Querying CT logs for %s", domain)
        try:
            entries = await self.fetch(domain)
        except UpstreamError as exc:
            logger.warning("CT log query for %s failed: %s", domain, exc, exc_info=True)
            return []

        names = extract_subdomains(entries, domain)
        logger.info("CT logs yielded %d subdomains for %s", len(names), domain)
        return names
