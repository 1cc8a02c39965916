"""Suspicious-name detection."""

from __future__ import annotations

import re
from dataclasses import dataclass

ANOMALY_TOKENS = (
    "backup",
    "bak",
    "old",
    "temp",
    "tmp",
    "test",
    "dev",
    "staging",
    "internal",
    "admin",
    "debug",
    "legacy",
    "archive",
)

_ANOMALY_PATTERNS = tuple(re.compile(re.escape(token), re.IGNORECASE) for token in ANOMALY_TOKENS)


@dataclass(frozen=True)
class AnomalyResult:
    is_anomaly: bool
    reason: str | None = None


def detect_anomaly(name: str) -> AnomalyResult:
    """Flag names containing a suspicious token; the first token in table order wins."""
    for pattern in _ANOMALY_PATTERNS:
        if pattern.search(name):
            return AnomalyResult(True, f"Suspicious pattern: {pattern.pattern}")
    return AnomalyResult(False)
