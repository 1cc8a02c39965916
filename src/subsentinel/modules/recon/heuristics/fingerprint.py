"""Technology fingerprinting from response headers and cookies."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from types import MappingProxyType

HeaderDetector = Callable[[str], str | None]


def _const(label: str) -> HeaderDetector:
    return lambda _value: label


def _via(value: str) -> str | None:
    lowered = value.lower()
    if "cloudfront" in lowered:
        return "AWS CloudFront"
    if "varnish" in lowered:
        return "Varnish"
    return None


def _served_by(value: str) -> str | None:
    return "Varnish/Fastly" if "cache" in value.lower() else value


def _x_cache(value: str) -> str | None:
    return "AWS CloudFront" if "cloudfront" in value.lower() else None


HEADER_SIGNATURES: Mapping[str, HeaderDetector] = MappingProxyType(
    {
        "x-powered-by": lambda value: value,
        "server": lambda value: value,
        "x-aspnet-version": _const("ASP.NET"),
        "x-aspnetmvc-version": _const("ASP.NET MVC"),
        "x-drupal-cache": _const("Drupal"),
        "x-generator": lambda value: value,
        "x-shopify-stage": _const("Shopify"),
        "x-vercel-id": _const("Vercel"),
        "x-amz-cf-id": _const("AWS CloudFront"),
        "x-amz-cf-pop": _const("AWS CloudFront"),
        "x-amz-request-id": _const("AWS S3"),
        "cf-ray": _const("Cloudflare"),
        "x-github-request-id": _const("GitHub"),
        "x-served-by": _served_by,
        "via": _via,
        "x-cache": _x_cache,
        "x-fw-version": _const("Flywheel"),
        "x-kinsta-cache": _const("Kinsta"),
        "x-litespeed-cache": _const("LiteSpeed"),
        "x-sucuri-id": _const("Sucuri"),
        "x-nf-request-id": _const("Netlify"),
    }
)

SERVER_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), tech)
    for pattern, tech in (
        (r"nginx", "Nginx"),
        (r"apache", "Apache"),
        (r"cloudflare", "Cloudflare"),
        (r"microsoft-iis", "Microsoft IIS"),
        (r"litespeed", "LiteSpeed"),
        (r"openresty", "OpenResty"),
        (r"caddy", "Caddy"),
        (r"gunicorn", "Gunicorn (Python)"),
        (r"uvicorn", "Uvicorn (Python)"),
        (r"express", "Express.js"),
        (r"kestrel", "Kestrel (.NET)"),
    )
)

COOKIE_SIGNATURES: Mapping[str, str] = MappingProxyType(
    {
        "PHPSESSID": "PHP",
        "JSESSIONID": "Java",
        "ASP.NET_SessionId": "ASP.NET",
        "_rails_session": "Ruby on Rails",
        "laravel_session": "Laravel (PHP)",
        "CAKEPHP": "CakePHP",
        "ci_session": "CodeIgniter (PHP)",
        "symfony": "Symfony (PHP)",
        "django": "Django (Python)",
        "express.sid": "Express.js",
    }
)


def fingerprint_technologies(headers: Mapping[str, str], set_cookie: str = "") -> list[str]:
    """Map headers and cookie names to technology labels, in detection order."""
    technologies: list[str] = []

    def add(tech: str | None) -> None:
        if tech and tech not in technologies:
            technologies.append(tech)

    lowered = {key.lower(): value for key, value in headers.items()}

    for header, detector in HEADER_SIGNATURES.items():
        value = lowered.get(header)
        if value:
            add(detector(value))

    server = lowered.get("server")
    if server:
        for pattern, tech in SERVER_PATTERNS:
            if pattern.search(server):
                add(tech)

    cookies = set_cookie or lowered.get("set-cookie", "")
    for cookie_name, tech in COOKIE_SIGNATURES.items():
        if cookie_name in cookies:
            add(tech)

    return technologies
