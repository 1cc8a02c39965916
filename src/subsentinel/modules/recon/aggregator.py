"""Fold per-candidate results into records and emit them to the store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from .errors import PersistenceError
from .models import (
    Candidate,
    DetectionOutcome,
    ProbeResult,
    ResolutionResult,
    ScanSummary,
    SubdomainRecord,
)
from .store import ScanStore

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50


def build_record(
    candidate: Candidate,
    resolution: ResolutionResult,
    probe: ProbeResult,
    detection: DetectionOutcome,
    risk_score: int,
    wayback_urls: list[str] | None = None,
    seen_at: datetime | None = None,
) -> SubdomainRecord:
    """Merge the pieces collected for one candidate."""
    seen_at = seen_at or datetime.now(UTC)
    return SubdomainRecord(
        name=candidate.name,
        source=candidate.source,
        ips=list(resolution.ips),
        cname=resolution.cname,
        http_status=probe.http_status,
        https_status=probe.https_status,
        server=probe.server,
        technologies=list(probe.technologies),
        cloud_provider=detection.cloud_provider,
        is_anomaly=detection.is_anomaly,
        anomaly_reason=detection.anomaly_reason,
        takeover_vulnerable=detection.takeover_vulnerable,
        takeover_type=detection.takeover_type,
        takeover_verified=detection.takeover_verified,
        risk_score=risk_score,
        status="active" if probe.is_active else "inactive",
        wayback_urls=list(wayback_urls or []),
        first_seen=seen_at,
        last_seen=seen_at,
    )


def collect_records(records: Sequence[SubdomainRecord], domain: str) -> list[SubdomainRecord]:
    """Keep one record per name under *domain*."""
    suffix = f".{domain.lower()}"
    unique: dict[str, SubdomainRecord] = {}
    for record in records:
        if not record.name.endswith(suffix):
            logger.warning("Dropping out-of-scope record %s", record.name)
            continue
        unique.setdefault(record.name, record)
    return list(unique.values())


class ScanAggregator:
    """Write a scan's records in batches and its summary last."""

    def __init__(self, store: ScanStore, batch_size: int = DEFAULT_BATCH_SIZE):
        self.store = store
        self.batch_size = max(1, batch_size)

    def emit(self, scan_id: int | str, records: Sequence[SubdomainRecord]) -> int:
        """Persist *records*; a failing batch is logged and skipped.

        Returns the number of records in batches that were accepted.
        """
        persisted = 0
        for start in range(0, len(records), self.batch_size):
            batch = list(records[start : start + self.batch_size])
            try:
                self.store.insert_subdomains(scan_id, batch)
            except PersistenceError:
                logger.error(
                    "Failed to insert %d subdomains for scan %s", len(batch), scan_id, exc_info=True
                )
                continue
            persisted += len(batch)
        return persisted

    def finalize(
        self,
        scan_id: int | str,
        records: Sequence[SubdomainRecord],
        completed_at: datetime | None = None,
    ) -> ScanSummary:
        """Emit records, then recompute and store the summary from them."""
        self.emit(scan_id, records)
        summary = ScanSummary.from_records(records)
        try:
            self.store.mark_completed(scan_id, completed_at or datetime.now(UTC), summary)
        except PersistenceError:
            logger.error("Failed to store summary for scan %s", scan_id, exc_info=True)
        return summary
