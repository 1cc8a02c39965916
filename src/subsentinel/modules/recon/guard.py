"""Target validation and private address filtering.

Runs before any resolution so a crafted target cannot steer the prober at
internal infrastructure (SSRF).
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import DomainValidationError

MAX_DOMAIN_LENGTH = 253

# First label has no leading/trailing hyphen, final label is alphabetic.
DOMAIN_PATTERN = re.compile(
    r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))*\.[A-Za-z]{2,63}$"
)

BLOCKED_TLDS = (".local", ".internal", ".localhost", ".lan", ".home", ".corp", ".private")

BLOCKED_HOSTS = (
    "169.254.169.254",
    "metadata.google.internal",
    "metadata.azure.com",
    "metadata.internal",
)

PRIVATE_NETWORKS = tuple(
    ipaddress.IPv4Network(cidr)
    for cidr in (
        "0.0.0.0/8",
        "10.0.0.0/8",
        "127.0.0.0/8",
        "169.254.0.0/16",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "224.0.0.0/8",
        "240.0.0.0/8",
    )
)


@dataclass(frozen=True)
class DomainValidation:
    """Result of validating a target domain."""

    valid: bool
    domain: str
    reason: str | None = None


def _reject(domain: str, reason: str) -> DomainValidation:
    return DomainValidation(valid=False, domain=domain, reason=reason)


def validate_domain(domain: str) -> DomainValidation:
    """Check that *domain* is a public, well-formed domain name."""
    candidate = (domain or "").strip().rstrip(".")
    lowered = candidate.lower()

    if not candidate:
        return _reject(candidate, "Domain must not be empty.")

    if re.fullmatch(r"[\d.]+", candidate):
        return _reject(candidate, "IP addresses are not allowed. Please provide a domain name.")

    if ":" in candidate:
        return _reject(candidate, "IPv6 addresses are not allowed. Please provide a domain name.")

    if any(blocked in lowered for blocked in BLOCKED_HOSTS):
        return _reject(candidate, "This domain is not allowed for scanning.")

    if lowered.endswith(BLOCKED_TLDS):
        return _reject(candidate, "Internal/local domains are not allowed for scanning.")

    if not DOMAIN_PATTERN.match(candidate):
        return _reject(candidate, "Invalid domain format. Please provide a valid domain name.")

    if len(candidate) > MAX_DOMAIN_LENGTH:
        return _reject(candidate, "Domain name is too long.")

    return DomainValidation(valid=True, domain=lowered)


def require_valid_domain(domain: str) -> str:
    """Return the normalised domain or raise :class:`DomainValidationError`."""
    result = validate_domain(domain)
    if not result.valid:
        raise DomainValidationError(result.reason or "Invalid domain.")
    return result.domain


def is_private_ip(ip: str) -> bool:
    """Return True for private, reserved or unparseable IPv4 addresses."""
    try:
        address = ipaddress.IPv4Address(ip.strip())
    except (ipaddress.AddressValueError, AttributeError):
        return True
    return any(address in network for network in PRIVATE_NETWORKS)


def filter_public_ips(ips: Iterable[str]) -> list[str]:
    """Drop private/reserved addresses, keeping answer order and dropping repeats."""
    public: list[str] = []
    for ip in ips:
        if is_private_ip(ip) or ip in public:
            continue
        public.append(ip)
    return public
