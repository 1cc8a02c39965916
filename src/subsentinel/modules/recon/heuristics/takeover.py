"""Subdomain-takeover fingerprints and verification."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class TakeoverFingerprint:
    """A third-party service whose dangling CNAMEs can be claimed."""

    service: str
    patterns: tuple[re.Pattern[str], ...]
    error_signatures: tuple[str, ...]
    verify_on_404: bool = False

    def matches(self, cname: str) -> bool:
        return any(pattern.search(cname) for pattern in self.patterns)

    def body_confirms(self, body: str | None) -> bool:
        return bool(body) and any(sig in body for sig in self.error_signatures)


def _fp(
    service: str,
    patterns: tuple[str, ...],
    signatures: tuple[str, ...],
    verify_on_404: bool = False,
) -> TakeoverFingerprint:
    return TakeoverFingerprint(
        service=service,
        patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
        error_signatures=signatures,
        verify_on_404=verify_on_404,
    )


TAKEOVER_FINGERPRINTS: tuple[TakeoverFingerprint, ...] = (
    _fp(
        "AWS S3",
        (r"\.s3\.amazonaws\.com$", r"\.s3-[a-z0-9-]+\.amazonaws\.com$"),
        ("NoSuchBucket", "The specified bucket does not exist"),
    ),
    _fp(
        "GitHub Pages",
        (r"\.github\.io$",),
        ("There isn't a GitHub Pages site here",),
        verify_on_404=True,
    ),
    _fp(
        "Heroku",
        (r"\.herokuapp\.com$",),
        (
            "no-such-app",
            "There is no app configured at that hostname",
            "herokucdn.com/error-pages",
        ),
    ),
    _fp(
        "Azure",
        (r"\.azurewebsites\.net$", r"\.cloudapp\.azure\.com$"),
        ("404 Web Site not found", "Azure Web App - Default", "does not exist"),
    ),
    _fp(
        "CloudFront",
        (r"\.cloudfront\.net$",),
        ("Bad request", "ERROR: The request could not be satisfied"),
    ),
    _fp("Pantheon", (r"\.pantheon\.io$",), ("404 error unknown site", "The gods are wise")),
    _fp("Fastly", (r"\.fastly\.net$",), ("Fastly error: unknown domain",)),
    _fp(
        "Shopify",
        (r"\.myshopify\.com$",),
        ("Sorry, this shop is currently unavailable", "Only one step left"),
    ),
    _fp("Tumblr", (r"\.tumblr\.com$",), ("There's nothing here", "Whatever you were looking for")),
    _fp("WordPress", (r"\.wordpress\.com$",), ("Do you want to register",)),
    _fp("Ghost", (r"\.ghost\.io$",), ("The thing you were looking for is no longer here",)),
)


@dataclass(frozen=True)
class TakeoverResult:
    vulnerable: bool = False
    type: str | None = None
    verified: bool = False


def check_takeover(
    cname: str | None,
    body: str | None = None,
    http_status: int | None = None,
    https_status: int | None = None,
) -> TakeoverResult:
    """Match *cname* against known dangling-service fingerprints.

    A match alone reports ``vulnerable``; ``verified`` additionally needs the
    service's "not configured" page in the body (or a 404 where the service
    answers that way for unclaimed names).
    """
    if not cname:
        return TakeoverResult()

    target = cname.rstrip(".")
    for fingerprint in TAKEOVER_FINGERPRINTS:
        if not fingerprint.matches(target):
            continue
        verified = fingerprint.body_confirms(body) or (
            fingerprint.verify_on_404 and 404 in (http_status, https_status)
        )
        return TakeoverResult(vulnerable=True, type=fingerprint.service, verified=verified)

    return TakeoverResult()
