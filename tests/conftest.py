"""Test configuration and fixtures for SubSentinel."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from subsentinel.db.init import init_db
from subsentinel.modules.recon import (
    Candidate,
    CandidateSource,
    MemoryScanStore,
    SubdomainRecord,
)
from subsentinel.modules.session import SessionManager


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a mock project directory structure."""
    project_path = temp_dir / "test_project"
    project_path.mkdir()
    (project_path / ".subsentinel").mkdir()
    return project_path


@pytest.fixture
def db_path(project_dir: Path) -> Path:
    """Return the database path for a project."""
    return project_dir / ".subsentinel" / "subsentinel.db"


@pytest.fixture
def initialized_db(db_path: Path) -> Path:
    """Initialize the database and return its path."""
    init_db(db_path)
    return db_path


@pytest.fixture
def session_manager(initialized_db: Path) -> Generator[SessionManager, None, None]:
    """Create a session manager with an initialized database."""
    manager = SessionManager(initialized_db)
    yield manager
    manager.close()


@pytest.fixture
def memory_store() -> MemoryScanStore:
    return MemoryScanStore()


@pytest.fixture
def make_record():
    """Factory for subdomain records with sensible defaults."""

    def _make(name: str = "www.example.com", **overrides) -> SubdomainRecord:
        fields = {
            "name": name,
            "source": CandidateSource.WORDLIST,
            "ips": ["93.184.216.34"],
        }
        fields.update(overrides)
        return SubdomainRecord(**fields)

    return _make


@pytest.fixture
def wordlist_candidate() -> Candidate:
    return Candidate(name="api.example.com", source=CandidateSource.WORDLIST)
