"""End-to-end subdomain reconnaissance pipeline."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from subsentinel.config import ScannerSettings
from subsentinel.tools.http import HTTPClient

from .aggregator import ScanAggregator, build_record, collect_records
from .candidates import CandidateGenerator
from .ct_logs import CertificateTransparencyClient
from .dns import DnsResolver
from .errors import DomainValidationError, PersistenceError
from .guard import require_valid_domain
from .heuristics import check_takeover, detect_anomaly, detect_cloud_provider
from .models import (
    Candidate,
    DetectionOutcome,
    ProbeResult,
    ResolutionResult,
    ScanOptions,
    ScanOutcome,
    ScanRequest,
    ScanStatus,
    SubdomainRecord,
)
from .pool import BoundedWorkerPool, ScanCancellation
from .probe import HttpProber
from .rate_limit import HostRateLimiter
from .scoring import RiskFactors, calculate_risk_score
from .store import ScanStore
from .wayback import WaybackClient

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Scan failed. Please try again later."
STOPPED_MESSAGE = "Scan stopped before completion."


def run_heuristics(
    name: str,
    resolution: ResolutionResult,
    probe: ProbeResult,
    takeover_check: bool = True,
) -> DetectionOutcome:
    """Apply every detection heuristic to one resolved candidate."""
    anomaly = detect_anomaly(name)
    outcome = DetectionOutcome(
        cloud_provider=detect_cloud_provider(name, resolution.cname),
        is_anomaly=anomaly.is_anomaly,
        anomaly_reason=anomaly.reason,
    )
    if takeover_check:
        takeover = check_takeover(
            resolution.cname, probe.body_sample, probe.http_status, probe.https_status
        )
        outcome.takeover_vulnerable = takeover.vulnerable
        outcome.takeover_type = takeover.type
        outcome.takeover_verified = takeover.verified
    return outcome


def score_candidate(probe: ProbeResult, detection: DetectionOutcome) -> int:
    return calculate_risk_score(
        RiskFactors(
            is_anomaly=detection.is_anomaly,
            takeover_vulnerable=detection.takeover_vulnerable,
            takeover_verified=detection.takeover_verified,
            http_status=probe.http_status,
            https_status=probe.https_status,
            cloud_provider=detection.cloud_provider,
            server=probe.server,
            technologies=probe.technologies,
        )
    )


class SubdomainScanner:
    """Run scans: validate, generate, resolve/probe, detect, score, aggregate."""

    def __init__(
        self,
        store: ScanStore,
        settings: ScannerSettings | None = None,
        http_client: HTTPClient | None = None,
        cancellation: ScanCancellation | None = None,
    ):
        self.store = store
        self.settings = settings or ScannerSettings()
        self.http_client = http_client
        self.cancellation = cancellation or ScanCancellation()
        self.aggregator = ScanAggregator(store, batch_size=self.settings.batch_size)
        self.pool: BoundedWorkerPool[Candidate, SubdomainRecord] | None = None

    def stop(self) -> None:
        """Stop admitting candidates; in-flight work finishes but is not persisted.

        The stop applies to the current (or next) scan only.
        """
        self.cancellation.cancel()

    async def run_scan(self, request: ScanRequest) -> ScanOutcome:
        try:
            return await self._run_guarded(request)
        finally:
            self.cancellation.reset()

    async def _run_guarded(self, request: ScanRequest) -> ScanOutcome:
        try:
            domain = require_valid_domain(request.target_domain)
        except DomainValidationError as exc:
            logger.error("Domain validation failed for %r: %s", request.target_domain, exc.reason)
            self._mark_terminal(request.scan_id, ScanStatus.FAILED)
            return ScanOutcome(
                success=False,
                scan_id=request.scan_id,
                error=exc.reason,
                status=ScanStatus.FAILED,
            )

        try:
            return await self._run(request, domain)
        except Exception:
            logger.exception("Scan %s for %s failed", request.scan_id, domain)
            self._mark_terminal(request.scan_id, ScanStatus.FAILED)
            return ScanOutcome(
                success=False,
                scan_id=request.scan_id,
                error=GENERIC_FAILURE,
                status=ScanStatus.FAILED,
            )

    async def _run(self, request: ScanRequest, domain: str) -> ScanOutcome:
        logger.info("Starting scan %s for %s", request.scan_id, domain)
        self.store.mark_running(request.scan_id, datetime.now(UTC))

        async with self._client() as client:
            records = await self.collect(domain, request.options, client)

        if self.cancellation.cancelled:
            logger.warning("Scan %s stopped; discarding %d results", request.scan_id, len(records))
            self._mark_terminal(request.scan_id, ScanStatus.STOPPED)
            return ScanOutcome(
                success=False,
                scan_id=request.scan_id,
                error=STOPPED_MESSAGE,
                status=ScanStatus.STOPPED,
            )

        summary = self.aggregator.finalize(request.scan_id, records)
        logger.info(
            "Scan %s complete: %d subdomains, %d active",
            request.scan_id,
            summary.total,
            summary.active,
        )
        return ScanOutcome(
            success=True,
            scan_id=request.scan_id,
            summary=summary,
            status=ScanStatus.COMPLETED,
            records=records,
        )

    async def collect(
        self, domain: str, options: ScanOptions, client: HTTPClient
    ) -> list[SubdomainRecord]:
        """Generate candidates and run each through the per-candidate pipeline."""
        generator = CandidateGenerator(CertificateTransparencyClient(client))
        candidates = await generator.generate(domain, options)

        resolver = DnsResolver(client)
        prober = HttpProber(
            client,
            HostRateLimiter(self.settings.rate_limit_interval),
            timeout=self.settings.probe_timeout,
            body_limit=self.settings.body_limit,
            tech_fingerprint=options.tech_fingerprint,
        )
        wayback = WaybackClient(client)

        async def process(candidate: Candidate) -> SubdomainRecord | None:
            resolution = await resolver.resolve(candidate.name)
            if not resolution.exists:
                return None

            probe = await prober.probe(candidate.name) if options.http_probe else ProbeResult()
            detection = run_heuristics(
                candidate.name, resolution, probe, takeover_check=options.takeover_check
            )
            score = score_candidate(probe, detection)

            wayback_urls: list[str] = []
            if options.wayback_lookup and probe.is_active:
                wayback_urls = await wayback.urls_for(candidate.name)

            return build_record(candidate, resolution, probe, detection, score, wayback_urls)

        self.pool = BoundedWorkerPool(self.settings.workers, self.cancellation)
        records = await self.pool.run(candidates.values(), process)
        return collect_records(records, domain)

    @asynccontextmanager
    async def _client(self):
        if self.http_client is not None:
            yield self.http_client
            return
        async with HTTPClient(user_agent=self.settings.user_agent) as client:
            yield client

    def _mark_terminal(self, scan_id: int | str, status: ScanStatus) -> None:
        now = datetime.now(UTC)
        try:
            if status is ScanStatus.STOPPED:
                self.store.mark_stopped(scan_id, now)
            else:
                self.store.mark_failed(scan_id, now)
        except PersistenceError:
            logger.error("Could not mark scan %s as %s", scan_id, status.value, exc_info=True)
