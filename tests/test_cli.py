"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from subsentinel import cli as cli_module
from subsentinel.cli import app, get_project_dir
from subsentinel.config import ScannerSettings
from subsentinel.modules.recon import (
    CandidateSource,
    ScanOutcome,
    ScanStatus,
    ScanSummary,
    SubdomainRecord,
)
from subsentinel.modules.session import SessionManager

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich tables from wrapping subdomain names."""
    monkeypatch.setattr(cli_module.console, "width", 200)


def _records() -> list[SubdomainRecord]:
    return [
        SubdomainRecord(
            name="old-app.example.com",
            source=CandidateSource.CERTIFICATE_TRANSPARENCY,
            cname="old-app.herokuapp.com",
            https_status=404,
            cloud_provider="heroku",
            is_anomaly=True,
            anomaly_reason="Suspicious pattern: old",
            takeover_vulnerable=True,
            takeover_type="Heroku",
            takeover_verified=True,
            risk_score=75,
            status="active",
        ),
        SubdomainRecord(
            name="www.example.com",
            source=CandidateSource.WORDLIST,
            ips=["93.184.216.34"],
            https_status=200,
            risk_score=11,
            status="active",
        ),
    ]


@pytest.fixture
def cli_project(monkeypatch: pytest.MonkeyPatch, project_dir: Path) -> Path:
    """Resolve every command to the fixture project with default settings."""
    monkeypatch.setattr(cli_module, "require_project", lambda: project_dir)
    monkeypatch.setattr(cli_module, "get_verbose", lambda _project_dir: False)
    monkeypatch.setattr(cli_module, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli_module, "load_scanner_settings", lambda _project_dir: ScannerSettings())
    return project_dir


class FakeScanner:
    """Stands in for SubdomainScanner and records how it was driven."""

    instances: list["FakeScanner"] = []

    def __init__(self, store, settings):
        self.store = store
        self.settings = settings
        self.requests = []
        self.stopped = False
        self.outcome_status = ScanStatus.COMPLETED
        FakeScanner.instances.append(self)

    def stop(self) -> None:
        self.stopped = True

    async def run_scan(self, request):
        self.requests.append(request)
        records = _records()
        return ScanOutcome(
            success=True,
            scan_id=request.scan_id,
            summary=ScanSummary.from_records(records),
            records=records,
        )


class StoppedScanner(FakeScanner):
    async def run_scan(self, request):
        return ScanOutcome(
            success=False,
            scan_id=request.scan_id,
            error="Scan stopped before completion.",
            status=ScanStatus.STOPPED,
        )


class TestProjectDiscovery:
    """Test project directory helpers."""

    def test_get_project_dir_finds_project(self, project_dir: Path, monkeypatch):
        monkeypatch.chdir(project_dir)
        assert get_project_dir() == project_dir

    def test_commands_outside_project_fail(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 1
        assert "Not in a SubSentinel project" in result.output


class TestInitCommand:
    """Test the init command."""

    def test_init_creates_storage_and_database(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (temp_dir / ".subsentinel" / "subsentinel.db").exists()
        assert (temp_dir / ".subsentinel" / ".env").exists()
        assert "Initialized SubSentinel project" in result.output

    def test_init_twice_is_noop(self, project_dir: Path, monkeypatch):
        monkeypatch.chdir(project_dir)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert "already initialized" in result.output


class TestScanCommand:
    """Test the scan command with a fake scanner."""

    def test_scan_prints_summary_and_table(self, cli_project: Path, monkeypatch):
        FakeScanner.instances = []
        monkeypatch.setattr(cli_module, "SubdomainScanner", FakeScanner)

        result = runner.invoke(app, ["scan", "Example.com", "--no-wayback", "--workers", "3"])

        assert result.exit_code == 0, result.output
        scanner = FakeScanner.instances[0]
        request = scanner.requests[0]
        assert request.target_domain == "example.com"
        assert request.options.wayback_lookup is False
        assert request.options.ct_lookup is True
        assert scanner.settings.workers == 3
        assert "old-app.example.com" in result.output
        assert "Takeover" in result.output

        session = SessionManager(cli_project / ".subsentinel" / "subsentinel.db")
        try:
            scan = session.get_scan(request.scan_id)
            assert scan.target_domain == "example.com"
            assert scan.scan_options["wayback_lookup"] is False
        finally:
            session.close()

    def test_scan_writes_json(self, cli_project: Path, temp_dir: Path, monkeypatch):
        monkeypatch.setattr(cli_module, "SubdomainScanner", FakeScanner)
        out = temp_dir / "results.json"

        result = runner.invoke(app, ["scan", "example.com", "--json", str(out)])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["target"] == "example.com"
        assert data["summary"]["takeoverVulnerable"] == 1
        assert data["subdomains"][0]["name"] == "old-app.example.com"

    def test_scan_rejects_invalid_domain(self, cli_project: Path, monkeypatch):
        monkeypatch.setattr(cli_module, "SubdomainScanner", FakeScanner)
        FakeScanner.instances = []

        result = runner.invoke(app, ["scan", "169.254.169.254"])

        assert result.exit_code == 1
        assert "IP addresses are not allowed" in result.output
        assert FakeScanner.instances == []

    def test_scan_stopped_exits_nonzero(self, cli_project: Path, monkeypatch):
        monkeypatch.setattr(cli_module, "SubdomainScanner", StoppedScanner)

        result = runner.invoke(app, ["scan", "example.com"])

        assert result.exit_code == 1
        assert "stopped" in result.output


class TestHistoryAndShow:
    """Test listing and showing stored scans."""

    @pytest.fixture
    def seeded(self, cli_project: Path) -> tuple[int, int]:
        session = SessionManager(cli_project / ".subsentinel" / "subsentinel.db")
        try:
            first = session.create_scan("example.com")
            session.insert_subdomains(first.id, _records())
            second = session.create_scan("example.org")
            session.insert_subdomains(
                second.id,
                [
                    SubdomainRecord(name="www.example.com", source=CandidateSource.WORDLIST),
                    SubdomainRecord(name="vpn.example.com", source=CandidateSource.WORDLIST),
                ],
            )
            return first.id, second.id
        finally:
            session.close()

    def test_history_lists_scans(self, seeded):
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0, result.output
        assert "example.com" in result.output
        assert "example.org" in result.output

    def test_history_empty(self, cli_project: Path):
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "No scans yet" in result.output

    def test_show_filters(self, seeded):
        first, _ = seeded
        result = runner.invoke(app, ["show", str(first), "--min-score", "50"])
        assert result.exit_code == 0, result.output
        assert "old-app.example.com" in result.output
        assert "www.example.com" not in result.output
        assert "1/2 shown" in result.output

    def test_show_unknown_scan(self, cli_project: Path):
        result = runner.invoke(app, ["show", "42"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_compare(self, seeded):
        first, second = seeded
        result = runner.invoke(app, ["compare", str(first), str(second)])
        assert result.exit_code == 0, result.output
        assert "+ vpn.example.com" in result.output
        assert "- old-app.example.com" in result.output
        assert "Unchanged: 1" in result.output


class TestConfigCommand:
    """Test the config command."""

    def test_init_global_writes_yaml(self, temp_dir: Path, monkeypatch):
        monkeypatch.setattr(Path, "home", lambda: temp_dir)

        result = runner.invoke(app, ["config", "init", "--global"])

        assert result.exit_code == 0, result.output
        assert (temp_dir / ".subsentinel" / "config.yml").exists()
        assert "Created global config" in result.output

    def test_show_project_settings(self, project_dir: Path, monkeypatch):
        monkeypatch.delenv("SUBSENTINEL_DATA_DIR", raising=False)
        monkeypatch.chdir(project_dir)
        (project_dir / ".subsentinel" / ".env").write_text("SUBSENTINEL_WORKERS=4\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "SUBSENTINEL_WORKERS=4" in result.output

    def test_unknown_action(self):
        result = runner.invoke(app, ["config", "purge"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "SubSentinel" in result.output
