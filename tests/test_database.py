"""Tests for database models and operations."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from sqlalchemy import inspect

from subsentinel.db.init import init_db
from subsentinel.db.models import Subdomain
from subsentinel.modules.recon import (
    CandidateSource,
    PersistenceError,
    ScanOptions,
    ScanSummary,
)
from subsentinel.modules.session import SessionManager


class TestDatabaseInitialization:
    """Test database initialization."""

    def test_init_db_creates_tables(self, db_path: Path):
        """Test that init_db creates all required tables."""
        init_db(db_path)

        assert db_path.exists()
        manager = SessionManager(db_path)
        try:
            tables = set(inspect(manager.engine).get_table_names())
        finally:
            manager.close()
        assert {"scans", "subdomains"} <= tables

    def test_init_db_creates_parent_directories(self, temp_dir: Path):
        """Test that init_db creates parent directories if needed."""
        nested_db = temp_dir / "nested" / "path" / "subsentinel.db"
        init_db(nested_db)

        assert nested_db.exists()

    def test_init_db_is_idempotent(self, session_manager: SessionManager, initialized_db: Path):
        """Test that re-initializing keeps existing rows."""
        scan = session_manager.create_scan("example.com")

        init_db(initialized_db)

        assert session_manager.get_scan(scan.id).target_domain == "example.com"


class TestScanLifecycle:
    """Test scan rows and their state transitions."""

    def test_create_scan(self, session_manager: SessionManager):
        scan = session_manager.create_scan("example.com", ScanOptions(http_probe=False))

        assert scan.id is not None
        assert scan.status == "pending"
        assert scan.scan_options["http_probe"] is False
        assert scan.scan_options["ct_lookup"] is True

    def test_running_then_completed(self, session_manager: SessionManager):
        scan = session_manager.create_scan("example.com")
        now = datetime.now(UTC)

        session_manager.mark_running(scan.id, now)
        assert session_manager.get_scan(scan.id).status == "running"

        summary = ScanSummary(total=4, active=2, anomalies=1, cloud_assets=3, takeover_vulnerable=1)
        session_manager.mark_completed(scan.id, now, summary)

        stored = session_manager.get_scan(scan.id)
        assert stored.status == "completed"
        assert stored.total_subdomains == 4
        assert stored.active_subdomains == 2
        assert stored.cloud_assets == 3
        assert stored.completed_at is not None

    def test_failed_and_stopped(self, session_manager: SessionManager):
        failed = session_manager.create_scan("a.com")
        stopped = session_manager.create_scan("b.com")

        session_manager.mark_failed(failed.id, datetime.now(UTC))
        session_manager.mark_stopped(stopped.id, datetime.now(UTC))

        assert session_manager.get_scan(failed.id).status == "failed"
        assert session_manager.get_scan(stopped.id).status == "stopped"

    def test_unknown_scan_raises(self, session_manager: SessionManager):
        with pytest.raises(PersistenceError):
            session_manager.mark_running(999, datetime.now(UTC))

    def test_list_scans_newest_first(self, session_manager: SessionManager):
        first = session_manager.create_scan("a.com")
        second = session_manager.create_scan("b.com")
        session_manager.mark_failed(first.id, datetime.now(UTC))

        assert [s.id for s in session_manager.list_scans()] == [second.id, first.id]
        assert [s.id for s in session_manager.list_scans(status="failed")] == [first.id]
        assert len(session_manager.list_scans(limit=1)) == 1


class TestSubdomainRows:
    """Test batch insertion and queries."""

    def test_insert_and_read_back(self, session_manager: SessionManager, make_record):
        scan = session_manager.create_scan("example.com")
        records = [
            make_record(
                "a.example.com",
                source=CandidateSource.CERTIFICATE_TRANSPARENCY,
                risk_score=10,
                technologies=["Nginx"],
                wayback_urls=["https://a.example.com/"],
            ),
            make_record("b.example.com", risk_score=70, cname="b.herokuapp.com", status="active"),
        ]

        session_manager.insert_subdomains(scan.id, records)

        stored = session_manager.get_records(scan.id)
        assert [r.name for r in stored] == ["b.example.com", "a.example.com"]
        assert stored[1].source is CandidateSource.CERTIFICATE_TRANSPARENCY
        assert stored[1].technologies == ["Nginx"]
        assert stored[1].wayback_urls == ["https://a.example.com/"]
        assert stored[0].cname == "b.herokuapp.com"
        assert stored[0].is_active
        assert session_manager.get_records(scan.id, min_score=50)[0].name == "b.example.com"

    def test_duplicate_name_batch_rolls_back(self, session_manager: SessionManager, make_record):
        scan = session_manager.create_scan("example.com")
        session_manager.insert_subdomains(scan.id, [make_record("a.example.com")])

        with pytest.raises(PersistenceError):
            session_manager.insert_subdomains(
                scan.id, [make_record("b.example.com"), make_record("a.example.com")]
            )

        assert session_manager.subdomain_names(scan.id) == ["a.example.com"]

    def test_summary_recomputed_from_rows(self, session_manager: SessionManager, make_record):
        scan = session_manager.create_scan("example.com")
        session_manager.insert_subdomains(
            scan.id,
            [
                make_record("a.example.com", status="active", is_anomaly=True),
                make_record("b.example.com", cloud_provider="aws"),
            ],
        )

        summary = session_manager.get_summary(scan.id)

        assert summary.total == 2
        assert summary.active == 1
        assert summary.anomalies == 1
        assert summary.cloud_assets == 1

    def test_delete_scan_cascades(self, session_manager: SessionManager, make_record):
        scan = session_manager.create_scan("example.com")
        session_manager.insert_subdomains(scan.id, [make_record("a.example.com")])

        assert session_manager.delete_scan(scan.id)
        assert session_manager.get_scan(scan.id) is None
        assert session_manager.session.query(Subdomain).count() == 0
        assert not session_manager.delete_scan(scan.id)
