"""Deterministic risk scoring."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

MAX_SCORE = 100

SENSITIVE_PORTS = frozenset({22, 23, 3306, 5432, 6379, 27017, 9200, 11211})


@dataclass(frozen=True)
class RiskFactors:
    """Inputs to :func:`calculate_risk_score`."""

    is_anomaly: bool = False
    takeover_vulnerable: bool = False
    takeover_verified: bool = False
    http_status: int | None = None
    https_status: int | None = None
    cloud_provider: str | None = None
    server: str | None = None
    technologies: Sequence[str] = ()
    # No port data source exists yet, so this is always empty in scans.
    exposed_ports: Sequence[int] = field(default_factory=tuple)


def calculate_risk_score(factors: RiskFactors) -> int:
    """Additive score in ``[0, 100]``; identical inputs give identical output."""
    score = 0

    if factors.takeover_verified:
        score += 50
    elif factors.takeover_vulnerable:
        score += 30
    if factors.is_anomaly:
        score += 20

    if factors.https_status is None and factors.http_status is not None:
        score += 15
    if factors.http_status == 200 or factors.https_status == 200:
        score += 5
    if factors.cloud_provider is not None:
        score += 5

    score += 10 * sum(1 for port in factors.exposed_ports if port in SENSITIVE_PORTS)

    if factors.server is not None:
        score += 2
    score += min(2 * len(factors.technologies), 6)

    return max(0, min(score, MAX_SCORE))


def risk_level(score: int) -> str:
    """Bucket a score for display."""
    if score >= 70:
        return "critical"
    if score >= 50:
        return "high"
    if score >= 25:
        return "medium"
    return "low"
