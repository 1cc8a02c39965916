"""Candidate subdomain generation."""

from __future__ import annotations

import logging

from .ct_logs import CertificateTransparencyClient
from .models import Candidate, CandidateSource, ScanOptions
from .wordlist import COMMON_SUBDOMAINS

logger = logging.getLogger(__name__)

PERMUTATION_BASES = ("api", "app", "dev", "staging", "test", "admin", "portal", "mail", "www")
PERMUTATION_SUFFIXES = ("1", "2", "01", "02", "-dev", "-prod", "-api", "-v2", "-new", "-old", "-test")
PERMUTATION_PREFIXES = ("dev-", "staging-", "test-", "api-", "admin-", "internal-", "prod-")


def wordlist_candidates(domain: str) -> list[str]:
    """Join every wordlist prefix with *domain*."""
    return [f"{prefix}.{domain}" for prefix in COMMON_SUBDOMAINS]


def generate_permutations(base: str, domain: str) -> list[str]:
    """Suffix and prefix variants of *base* under *domain*."""
    names = [f"{base}{suffix}.{domain}" for suffix in PERMUTATION_SUFFIXES]
    names.extend(f"{prefix}{base}.{domain}" for prefix in PERMUTATION_PREFIXES)
    return names


def permutation_candidates(domain: str) -> list[str]:
    names: list[str] = []
    for base in PERMUTATION_BASES:
        names.extend(generate_permutations(base, domain))
    return names


def merge_candidates(*sources: tuple[CandidateSource, list[str]]) -> dict[str, Candidate]:
    """Merge named sources into one set keyed by name; the first source wins."""
    merged: dict[str, Candidate] = {}
    for source, names in sources:
        for name in names:
            key = name.strip().lower()
            if key and key not in merged:
                merged[key] = Candidate(name=key, source=source)
    return merged


class CandidateGenerator:
    """Build the de-duplicated candidate set for a scan."""

    def __init__(self, ct_client: CertificateTransparencyClient | None = None):
        self.ct_client = ct_client

    async def generate(self, domain: str, options: ScanOptions) -> dict[str, Candidate]:
        contributions: list[tuple[CandidateSource, list[str]]] = []

        if options.ct_lookup and self.ct_client is not None:
            try:
                ct_names = await self.ct_client.lookup(domain)
            except Exception:
                logger.warning("CT source failed for %s", domain, exc_info=True)
                ct_names = []
            contributions.append((CandidateSource.CERTIFICATE_TRANSPARENCY, ct_names))

        if options.wordlist_bruteforce:
            words = wordlist_candidates(domain)
            logger.info("Wordlist added %d candidates", len(words))
            contributions.append((CandidateSource.WORDLIST, words))

        if options.permutations:
            contributions.append((CandidateSource.PERMUTATION, permutation_candidates(domain)))

        candidates = merge_candidates(*contributions)
        logger.info("Total unique candidates for %s: %d", domain, len(candidates))
        return candidates
