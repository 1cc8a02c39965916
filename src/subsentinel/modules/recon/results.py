"""Ranking, filtering, comparison and export of scan results."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .models import ScanSummary, SubdomainRecord


@dataclass(frozen=True)
class RecordFilter:
    """Criteria for narrowing a record list; all set criteria must hold."""

    active_only: bool = False
    anomalies_only: bool = False
    cloud_only: bool = False
    takeover_only: bool = False
    keyword: str = ""
    min_score: int = 0
    cloud_provider: str | None = None

    def matches(self, record: SubdomainRecord) -> bool:
        if self.active_only and not record.is_active:
            return False
        if self.anomalies_only and not record.is_anomaly:
            return False
        if self.cloud_only and not record.cloud_provider:
            return False
        if self.takeover_only and not record.takeover_vulnerable:
            return False
        if self.keyword and self.keyword.lower() not in record.name.lower():
            return False
        if record.risk_score < self.min_score:
            return False
        if self.cloud_provider and record.cloud_provider != self.cloud_provider:
            return False
        return True


def rank_records(records: Iterable[SubdomainRecord]) -> list[SubdomainRecord]:
    """Highest risk first; ties broken by name."""
    return sorted(records, key=lambda r: (-r.risk_score, r.name))


def filter_records(
    records: Iterable[SubdomainRecord], criteria: RecordFilter
) -> list[SubdomainRecord]:
    return rank_records(r for r in records if criteria.matches(r))


@dataclass
class ScanComparison:
    """Differences between an older and a newer scan of the same target."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    unchanged: int = 0
    stats_change: dict[str, int] = field(default_factory=dict)


def compare_scans(
    old_names: Iterable[str],
    new_names: Iterable[str],
    old_summary: ScanSummary,
    new_summary: ScanSummary,
) -> ScanComparison:
    old_set = set(old_names)
    new_set = set(new_names)
    old_counts = old_summary.to_dict()
    new_counts = new_summary.to_dict()
    return ScanComparison(
        added=sorted(new_set - old_set),
        removed=sorted(old_set - new_set),
        unchanged=len(old_set & new_set),
        stats_change={key: new_counts[key] - old_counts[key] for key in new_counts},
    )


def records_to_json(
    records: Sequence[SubdomainRecord],
    summary: ScanSummary,
    target: str,
    indent: int | None = 2,
) -> str:
    payload = {
        "target": target,
        "summary": summary.to_dict(),
        "subdomains": [record.to_dict() for record in rank_records(records)],
    }
    return json.dumps(payload, indent=indent)
