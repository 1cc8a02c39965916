"""Cloud-provider inference from names and CNAME targets."""

from __future__ import annotations

import re
from types import MappingProxyType


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


CLOUD_PATTERNS = MappingProxyType(
    {
        "aws": _compile(
            r"\.amazonaws\.com$", r"\.aws\.amazon\.com$", r"s3\.", r"ec2\.", r"\.elb\."
        ),
        "azure": _compile(
            r"\.azure\.com$",
            r"\.azurewebsites\.net$",
            r"\.cloudapp\.azure\.com$",
            r"\.blob\.core\.windows\.net$",
        ),
        "gcp": _compile(
            r"\.googleapis\.com$",
            r"\.appspot\.com$",
            r"\.cloud\.google\.com$",
            r"\.storage\.googleapis\.com$",
        ),
        "cloudflare": _compile(r"\.cloudflare\.com$", r"\.cdn\.cloudflare\.net$"),
        "digitalocean": _compile(r"\.digitalocean\.com$", r"\.digitaloceanspaces\.com$"),
        "heroku": _compile(r"\.herokuapp\.com$"),
        "vercel": _compile(r"\.vercel\.app$", r"\.now\.sh$"),
        "netlify": _compile(r"\.netlify\.app$", r"\.netlify\.com$"),
    }
)

CLOUD_PROVIDERS = tuple(CLOUD_PATTERNS)


def detect_cloud_provider(name: str, cname: str | None = None) -> str | None:
    """Return the first provider whose patterns match the name or its CNAME."""
    targets = [t for t in (name, cname) if t]
    for provider, patterns in CLOUD_PATTERNS.items():
        for pattern in patterns:
            if any(pattern.search(target) for target in targets):
                return provider
    return None
