"""Tests for configuration management."""

from pathlib import Path

import pytest

from subsentinel import config

SETTING_KEYS = (
    "SUBSENTINEL_WORKERS",
    "SUBSENTINEL_RATE_LIMIT_MS",
    "SUBSENTINEL_PROBE_TIMEOUT",
    "SUBSENTINEL_BODY_LIMIT",
    "SUBSENTINEL_BATCH_SIZE",
    "SUBSENTINEL_USER_AGENT",
    "SUBSENTINEL_VERBOSE",
)


@pytest.fixture
def isolated_config(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Point the global config at an empty home and clear scanner env vars."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    for key in SETTING_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("SUBSENTINEL_DATA_DIR", raising=False)
    return home


class TestLoadEnvFile:
    """Tests for load_env_file."""

    def test_load_env_file_missing_returns_empty(self, temp_dir: Path) -> None:
        env_path = temp_dir / ".env"
        assert not env_path.exists()
        assert config.load_env_file(env_path) == {}

    def test_load_env_file_parses_key_value(self, temp_dir: Path) -> None:
        env_path = temp_dir / ".env"
        env_path.write_text("FOO=bar\nBAZ=qux\n")
        assert config.load_env_file(env_path) == {"FOO": "bar", "BAZ": "qux"}

    def test_load_env_file_ignores_comments_and_strips_quotes(self, temp_dir: Path) -> None:
        env_path = temp_dir / ".env"
        env_path.write_text("# comment\n\nFOO=\"bar\"\n  \nBAR='baz'\n")
        assert config.load_env_file(env_path) == {"FOO": "bar", "BAR": "baz"}


class TestLoadGlobalConfig:
    """Tests for load_global_config."""

    def test_missing_returns_empty(self, isolated_config: Path) -> None:
        assert config.load_global_config() == {}

    def test_loads_yml(self, isolated_config: Path) -> None:
        config_dir = isolated_config / ".subsentinel"
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("SUBSENTINEL_WORKERS: 4\n")
        assert config.load_global_config() == {"SUBSENTINEL_WORKERS": 4}

    def test_create_global_config_writes_defaults(self, isolated_config: Path) -> None:
        path = config.create_global_config()
        assert path == isolated_config / ".subsentinel" / "config.yml"
        assert config.load_global_config()["SUBSENTINEL_WORKERS"] == 10


class TestProjectStorage:
    """Tests for project discovery and storage paths."""

    def test_storage_dir_none_returns_none(self) -> None:
        assert config.get_project_storage_dir(None) is None

    def test_marker_dir_is_storage(self, project_dir: Path) -> None:
        marker = project_dir / ".subsentinel"
        assert config.get_project_storage_dir(project_dir) == marker
        assert config.ensure_project_storage_dir(project_dir) == marker

    def test_marker_file_redirects(self, temp_dir: Path) -> None:
        project_path = temp_dir / "proj"
        project_path.mkdir()
        storage_path = temp_dir / "custom_storage"
        storage_path.mkdir()
        (project_path / ".subsentinel").write_text(str(storage_path))
        assert config.get_project_storage_dir(project_path) == storage_path

    def test_data_dir_creates_storage_and_marker(
        self, temp_dir: Path, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        project_path = temp_dir / "my_project"
        project_path.mkdir()
        data_root = temp_dir / "data_root"
        monkeypatch.setenv("SUBSENTINEL_DATA_DIR", str(data_root))

        storage = config.ensure_project_storage_dir(project_path)

        assert storage.is_dir()
        assert storage.parent == data_root
        assert "my_project" in storage.name
        assert (project_path / ".subsentinel").read_text() == str(storage)

    def test_db_and_env_paths(self, project_dir: Path) -> None:
        assert config.get_project_db_path(project_dir) == (
            project_dir / ".subsentinel" / "subsentinel.db"
        )
        assert config.get_project_env_path(project_dir) == project_dir / ".subsentinel" / ".env"
        assert config.get_project_db_path(None) is None

    def test_find_project_dir_from_nested(self, project_dir: Path) -> None:
        nested = project_dir / "a" / "b"
        nested.mkdir(parents=True)
        assert config.find_project_dir(nested) == project_dir

    def test_template_created_once(self, project_dir: Path) -> None:
        env_path = config.create_project_config_template(project_dir)
        assert "SUBSENTINEL_WORKERS" in env_path.read_text()
        env_path.write_text("SUBSENTINEL_WORKERS=3\n")
        config.create_project_config_template(project_dir)
        assert env_path.read_text() == "SUBSENTINEL_WORKERS=3\n"


class TestGetConfig:
    """Tests for get_config layering."""

    def test_env_wins(self, monkeypatch: pytest.MonkeyPatch, project_dir: Path) -> None:
        monkeypatch.setenv("SOME_KEY", "from_env")
        assert config.get_config("SOME_KEY", project_dir, default="default") == "from_env"

    def test_project_env_used_when_env_unset(
        self, isolated_config: Path, project_dir: Path
    ) -> None:
        (project_dir / ".subsentinel" / ".env").write_text("MY_KEY=from_project\n")
        assert config.get_config("MY_KEY", project_dir, default="x") == "from_project"

    def test_global_used_when_project_missing(self, isolated_config: Path) -> None:
        config_dir = isolated_config / ".subsentinel"
        config_dir.mkdir()
        (config_dir / "config.yml").write_text("GLOBAL_KEY: from_global\n")
        assert config.get_config("GLOBAL_KEY", None, default="x") == "from_global"

    def test_default_when_missing(self, isolated_config: Path, project_dir: Path) -> None:
        assert config.get_config("MISSING_KEY", project_dir, default="the_default") == "the_default"


class TestScannerSettings:
    """Tests for load_scanner_settings."""

    def test_defaults(self, isolated_config: Path, project_dir: Path) -> None:
        settings = config.load_scanner_settings(project_dir)
        assert settings == config.ScannerSettings()
        assert settings.workers == 10
        assert settings.rate_limit_interval == pytest.approx(0.1)
        assert settings.user_agent == "SubdomainSentinel/1.0"

    def test_project_and_env_overrides(
        self, isolated_config: Path, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (project_dir / ".subsentinel" / ".env").write_text(
            "SUBSENTINEL_WORKERS=4\nSUBSENTINEL_PROBE_TIMEOUT=2.5\n"
        )
        monkeypatch.setenv("SUBSENTINEL_WORKERS", "6")

        settings = config.load_scanner_settings(project_dir)

        assert settings.workers == 6
        assert settings.probe_timeout == 2.5

    def test_invalid_values_fall_back(
        self, isolated_config: Path, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SUBSENTINEL_WORKERS", "lots")
        monkeypatch.setenv("SUBSENTINEL_BATCH_SIZE", "0")

        settings = config.load_scanner_settings(project_dir)

        assert settings.workers == 10
        assert settings.batch_size == 50

    def test_verbose_flag(
        self, isolated_config: Path, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        assert not config.get_verbose(project_dir)
        monkeypatch.setenv("SUBSENTINEL_VERBOSE", "yes")
        assert config.get_verbose(project_dir)
