"""Scan lifecycle helpers for SessionManager."""

from datetime import UTC, datetime

from subsentinel.modules.recon.models import ScanOptions, ScanStatus, ScanSummary

from .db_models import Scan


class ScanMixin:
    """Provide scan creation, state transitions and listing."""

    def create_scan(self, target_domain: str, options: ScanOptions | None = None) -> Scan:
        """Create a pending scan row."""
        scan = Scan(
            target_domain=target_domain,
            status=ScanStatus.PENDING.value,
            scan_options=(options or ScanOptions()).to_dict(),
        )
        self.session.add(scan)
        self._commit()
        return scan

    def get_scan(self, scan_id: int | str) -> Scan | None:
        return self.session.get(Scan, int(scan_id))

    def list_scans(self, limit: int = 20, status: str | None = None) -> list[Scan]:
        """Most recent scans first."""
        query = self.session.query(Scan)
        if status:
            query = query.filter_by(status=status)
        return query.order_by(Scan.created_at.desc(), Scan.id.desc()).limit(limit).all()

    def delete_scan(self, scan_id: int | str) -> bool:
        scan = self.get_scan(scan_id)
        if scan is None:
            return False
        self.session.delete(scan)
        self._commit()
        return True

    def mark_running(self, scan_id: int | str, started_at: datetime) -> None:
        scan = self._require_scan(scan_id)
        scan.status = ScanStatus.RUNNING.value
        scan.started_at = started_at
        self._commit()

    def mark_completed(
        self, scan_id: int | str, completed_at: datetime, summary: ScanSummary
    ) -> None:
        scan = self._require_scan(scan_id)
        scan.status = ScanStatus.COMPLETED.value
        scan.completed_at = completed_at
        scan.total_subdomains = summary.total
        scan.active_subdomains = summary.active
        scan.anomalies = summary.anomalies
        scan.cloud_assets = summary.cloud_assets
        scan.takeover_vulnerable = summary.takeover_vulnerable
        self._commit()

    def mark_failed(self, scan_id: int | str, completed_at: datetime) -> None:
        self._finish(scan_id, ScanStatus.FAILED, completed_at)

    def mark_stopped(self, scan_id: int | str, completed_at: datetime) -> None:
        self._finish(scan_id, ScanStatus.STOPPED, completed_at)

    def _finish(self, scan_id: int | str, status: ScanStatus, completed_at: datetime) -> None:
        scan = self._require_scan(scan_id)
        scan.status = status.value
        scan.completed_at = completed_at
        scan.updated_at = datetime.now(UTC)
        self._commit()

    def get_summary(self, scan_id: int | str) -> ScanSummary:
        """Recompute the summary from the stored subdomain rows."""
        return ScanSummary.from_records(self.get_records(scan_id))
