"""Data models for subdomain reconnaissance."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CandidateSource(str, Enum):
    """Where a candidate name came from."""

    WORDLIST = "wordlist"
    PERMUTATION = "permutation"
    CERTIFICATE_TRANSPARENCY = "certificate-transparency"


class ScanStatus(str, Enum):
    """Lifecycle of a scan row."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class ScanOptions:
    """Independent toggles for one scan."""

    ct_lookup: bool = True
    wordlist_bruteforce: bool = True
    permutations: bool = True
    http_probe: bool = True
    tech_fingerprint: bool = True
    takeover_check: bool = True
    wayback_lookup: bool = True

    def to_dict(self) -> dict[str, bool]:
        return {
            "ct_lookup": self.ct_lookup,
            "wordlist_bruteforce": self.wordlist_bruteforce,
            "permutations": self.permutations,
            "http_probe": self.http_probe,
            "tech_fingerprint": self.tech_fingerprint,
            "takeover_check": self.takeover_check,
            "wayback_lookup": self.wayback_lookup,
        }


@dataclass(frozen=True)
class ScanRequest:
    """A single scan invocation."""

    scan_id: int | str
    target_domain: str
    options: ScanOptions = field(default_factory=ScanOptions)


@dataclass(frozen=True)
class Candidate:
    """A fully-qualified name that may or may not exist."""

    name: str
    source: CandidateSource


@dataclass
class ResolutionResult:
    """Public A records and CNAME for one name."""

    ips: list[str] = field(default_factory=list)
    cname: str | None = None

    @property
    def exists(self) -> bool:
        return bool(self.ips) or self.cname is not None


@dataclass
class ProbeResult:
    """Outcome of the HTTPS/HTTP probe of one host."""

    http_status: int | None = None
    https_status: int | None = None
    server: str | None = None
    technologies: list[str] = field(default_factory=list)
    body_sample: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> ProbeResult:
        return cls()

    @property
    def is_active(self) -> bool:
        """Whether the host answered like a live web service."""
        return (
            self.http_status == 200
            or self.https_status == 200
            or (self.https_status is not None and self.https_status < 500)
        )


@dataclass
class DetectionOutcome:
    """Combined output of the detection heuristics."""

    cloud_provider: str | None = None
    is_anomaly: bool = False
    anomaly_reason: str | None = None
    takeover_vulnerable: bool = False
    takeover_type: str | None = None
    takeover_verified: bool = False


@dataclass
class SubdomainRecord:
    """Final per-subdomain result of a scan."""

    name: str
    source: CandidateSource
    ips: list[str] = field(default_factory=list)
    cname: str | None = None
    http_status: int | None = None
    https_status: int | None = None
    server: str | None = None
    technologies: list[str] = field(default_factory=list)
    cloud_provider: str | None = None
    is_anomaly: bool = False
    anomaly_reason: str | None = None
    takeover_vulnerable: bool = False
    takeover_type: str | None = None
    takeover_verified: bool = False
    risk_score: int = 0
    status: str = "inactive"
    wayback_urls: list[str] = field(default_factory=list)
    exposed_ports: list[int] = field(default_factory=list)
    first_seen: datetime = field(default_factory=_utc_now)
    last_seen: datetime = field(default_factory=_utc_now)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "source": self.source.value,
            "status": self.status,
            "ip_addresses": list(self.ips),
            "cname_record": self.cname,
            "http_status": self.http_status,
            "https_status": self.https_status,
            "server": self.server,
            "technologies": list(self.technologies),
            "cloud_provider": self.cloud_provider,
            "is_anomaly": self.is_anomaly,
            "anomaly_reason": self.anomaly_reason,
            "takeover_vulnerable": self.takeover_vulnerable,
            "takeover_type": self.takeover_type,
            "takeover_verified": self.takeover_verified,
            "risk_score": self.risk_score,
            "wayback_urls": list(self.wayback_urls),
            "ports": list(self.exposed_ports),
            "first_seen": self.first_seen.isoformat(),
            "last_seen": self.last_seen.isoformat(),
        }


@dataclass(frozen=True)
class ScanSummary:
    """Aggregate counters for a scan, always derived from its records."""

    total: int = 0
    active: int = 0
    anomalies: int = 0
    cloud_assets: int = 0
    takeover_vulnerable: int = 0

    @classmethod
    def from_records(cls, records: Iterable[SubdomainRecord]) -> ScanSummary:
        records = list(records)
        return cls(
            total=len(records),
            active=sum(1 for r in records if r.is_active),
            anomalies=sum(1 for r in records if r.is_anomaly),
            cloud_assets=sum(1 for r in records if r.cloud_provider),
            takeover_vulnerable=sum(1 for r in records if r.takeover_vulnerable),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "active": self.active,
            "anomalies": self.anomalies,
            "cloudAssets": self.cloud_assets,
            "takeoverVulnerable": self.takeover_vulnerable,
        }


@dataclass
class ScanOutcome:
    """What the caller of a scan gets back."""

    success: bool
    scan_id: int | str
    summary: ScanSummary | None = None
    error: str | None = None
    status: ScanStatus = ScanStatus.COMPLETED
    records: list[SubdomainRecord] = field(default_factory=list)
