"""Persistence interface consumed by the pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from .models import ScanStatus, ScanSummary, SubdomainRecord


class ScanStore(Protocol):
    """Where scan state transitions and records are written."""

    def mark_running(self, scan_id: int | str, started_at: datetime) -> None: ...

    def mark_completed(
        self, scan_id: int | str, completed_at: datetime, summary: ScanSummary
    ) -> None: ...

    def mark_failed(self, scan_id: int | str, completed_at: datetime) -> None: ...

    def mark_stopped(self, scan_id: int | str, completed_at: datetime) -> None: ...

    def insert_subdomains(self, scan_id: int | str, records: Sequence[SubdomainRecord]) -> None: ...


@dataclass
class MemoryScanStore:
    """In-process store, used when no database is configured."""

    statuses: dict[int | str, ScanStatus] = field(default_factory=dict)
    timestamps: dict[int | str, dict[str, datetime]] = field(default_factory=dict)
    records: dict[int | str, list[SubdomainRecord]] = field(default_factory=dict)
    summaries: dict[int | str, ScanSummary] = field(default_factory=dict)
    batches: list[int] = field(default_factory=list)

    def _stamp(self, scan_id: int | str, key: str, when: datetime) -> None:
        self.timestamps.setdefault(scan_id, {})[key] = when

    def mark_running(self, scan_id: int | str, started_at: datetime) -> None:
        self.statuses[scan_id] = ScanStatus.RUNNING
        self._stamp(scan_id, "started_at", started_at)

    def mark_completed(
        self, scan_id: int | str, completed_at: datetime, summary: ScanSummary
    ) -> None:
        self.statuses[scan_id] = ScanStatus.COMPLETED
        self.summaries[scan_id] = summary
        self._stamp(scan_id, "completed_at", completed_at)

    def mark_failed(self, scan_id: int | str, completed_at: datetime) -> None:
        self.statuses[scan_id] = ScanStatus.FAILED
        self._stamp(scan_id, "completed_at", completed_at)

    def mark_stopped(self, scan_id: int | str, completed_at: datetime) -> None:
        self.statuses[scan_id] = ScanStatus.STOPPED
        self._stamp(scan_id, "completed_at", completed_at)

    def insert_subdomains(self, scan_id: int | str, records: Sequence[SubdomainRecord]) -> None:
        self.batches.append(len(records))
        self.records.setdefault(scan_id, []).extend(records)
