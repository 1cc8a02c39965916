"""Reconnaissance pipeline for subdomain discovery and risk ranking."""

from .aggregator import ScanAggregator, build_record
from .candidates import CandidateGenerator, generate_permutations, wordlist_candidates
from .ct_logs import CertificateTransparencyClient
from .dns import DnsResolver
from .errors import DomainValidationError, PersistenceError, ReconError, UpstreamError
from .guard import filter_public_ips, is_private_ip, require_valid_domain, validate_domain
from .models import (
    Candidate,
    CandidateSource,
    DetectionOutcome,
    ProbeResult,
    ResolutionResult,
    ScanOptions,
    ScanOutcome,
    ScanRequest,
    ScanStatus,
    ScanSummary,
    SubdomainRecord,
)
from .pipeline import SubdomainScanner
from .pool import BoundedWorkerPool, ScanCancellation
from .probe import HttpProber
from .rate_limit import HostRateLimiter
from .results import RecordFilter, ScanComparison, compare_scans, filter_records, rank_records
from .scoring import RiskFactors, calculate_risk_score, risk_level
from .store import MemoryScanStore, ScanStore

__all__ = [
    "BoundedWorkerPool",
    "Candidate",
    "CandidateGenerator",
    "CandidateSource",
    "CertificateTransparencyClient",
    "DetectionOutcome",
    "DnsResolver",
    "DomainValidationError",
    "HostRateLimiter",
    "HttpProber",
    "MemoryScanStore",
    "PersistenceError",
    "ProbeResult",
    "ReconError",
    "RecordFilter",
    "ResolutionResult",
    "RiskFactors",
    "ScanAggregator",
    "ScanCancellation",
    "ScanComparison",
    "ScanOptions",
    "ScanOutcome",
    "ScanRequest",
    "ScanStatus",
    "ScanStore",
    "ScanSummary",
    "SubdomainRecord",
    "SubdomainScanner",
    "UpstreamError",
    "build_record",
    "calculate_risk_score",
    "compare_scans",
    "filter_public_ips",
    "filter_records",
    "generate_permutations",
    "is_private_ip",
    "rank_records",
    "require_valid_domain",
    "risk_level",
    "validate_domain",
    "wordlist_candidates",
]
