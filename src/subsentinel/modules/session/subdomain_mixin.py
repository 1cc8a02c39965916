"""Subdomain row helpers for SessionManager."""

from collections.abc import Sequence

from subsentinel.modules.recon.models import CandidateSource, SubdomainRecord

from .db_models import Subdomain


def _to_row(scan_id: int, record: SubdomainRecord) -> Subdomain:
    return Subdomain(
        scan_id=scan_id,
        name=record.name,
        source=record.source.value,
        status=record.status,
        ip_addresses=list(record.ips),
        cname_record=record.cname,
        dns_records={"A": list(record.ips), "CNAME": record.cname},
        http_status=record.http_status,
        https_status=record.https_status,
        server=record.server,
        technologies=list(record.technologies),
        cloud_provider=record.cloud_provider,
        risk_score=record.risk_score,
        is_anomaly=record.is_anomaly,
        anomaly_reason=record.anomaly_reason,
        takeover_vulnerable=record.takeover_vulnerable,
        takeover_type=record.takeover_type,
        takeover_verified=record.takeover_verified,
        wayback_urls=list(record.wayback_urls),
        ports=list(record.exposed_ports),
        first_seen=record.first_seen,
        last_seen=record.last_seen,
    )


def _to_record(row: Subdomain) -> SubdomainRecord:
    return SubdomainRecord(
        name=row.name,
        source=CandidateSource(row.source),
        ips=list(row.ip_addresses or []),
        cname=row.cname_record,
        http_status=row.http_status,
        https_status=row.https_status,
        server=row.server,
        technologies=list(row.technologies or []),
        cloud_provider=row.cloud_provider,
        is_anomaly=bool(row.is_anomaly),
        anomaly_reason=row.anomaly_reason,
        takeover_vulnerable=bool(row.takeover_vulnerable),
        takeover_type=row.takeover_type,
        takeover_verified=bool(row.takeover_verified),
        risk_score=row.risk_score or 0,
        status=row.status,
        wayback_urls=list(row.wayback_urls or []),
        exposed_ports=list(row.ports or []),
        first_seen=row.first_seen,
        last_seen=row.last_seen,
    )


class SubdomainMixin:
    """Provide batch insertion and queries over subdomain rows."""

    def insert_subdomains(self, scan_id: int | str, records: Sequence[SubdomainRecord]) -> None:
        """Insert one batch of records; the whole batch is rolled back on error."""
        scan = self._require_scan(scan_id)
        self.session.add_all(_to_row(scan.id, record) for record in records)
        self._commit()

    def get_subdomains(self, scan_id: int | str, min_score: int = 0) -> list[Subdomain]:
        """Rows for a scan, highest risk first."""
        return (
            self.session.query(Subdomain)
            .filter_by(scan_id=int(scan_id))
            .filter(Subdomain.risk_score >= min_score)
            .order_by(Subdomain.risk_score.desc(), Subdomain.name)
            .all()
        )

    def get_records(self, scan_id: int | str, min_score: int = 0) -> list[SubdomainRecord]:
        return [_to_record(row) for row in self.get_subdomains(scan_id, min_score)]

    def subdomain_names(self, scan_id: int | str) -> list[str]:
        rows = self.session.query(Subdomain.name).filter_by(scan_id=int(scan_id)).all()
        return [name for (name,) in rows]
