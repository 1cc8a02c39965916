"""Project storage directory and environment setup."""

import hashlib
import logging
import os
import re
import tempfile
from pathlib import Path

from .env_loader import CONFIG_DIR_NAME, global_config_dir, is_global_config_dir

logger = logging.getLogger(__name__)

DB_FILE_NAME = "subsentinel.db"


def _storage_name(project_dir: Path) -> str:
    slug = re.sub(r"[^a-zA-Z0-9_-]+", "-", project_dir.name).strip("-") or "project"
    digest = hashlib.sha1(str(project_dir).encode()).hexdigest()[:8]
    return f"{slug}-{digest}"


def find_project_dir(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a .subsentinel marker.

    Stops at the system temp root and skips the global config folder.
    """
    current = start or Path.cwd()
    try:
        temp_root = Path(tempfile.gettempdir()).resolve()
    except OSError:
        temp_root = None
    while current != current.parent:
        if temp_root and current.resolve() == temp_root:
            return None
        marker = current / CONFIG_DIR_NAME
        if marker.exists():
            if (
                marker.is_dir()
                and is_global_config_dir(marker)
                and not (marker / DB_FILE_NAME).exists()
            ):
                current = current.parent
                continue
            return current
        current = current.parent
    return None


def get_project_storage_dir(project_dir: Path | None) -> Path | None:
    """Resolve the storage directory for a project (.subsentinel or data dir)."""
    if project_dir is None:
        return None

    marker = project_dir / CONFIG_DIR_NAME
    if marker.is_file():
        try:
            target = marker.read_text().strip()
            if target:
                return Path(target)
        except (PermissionError, UnicodeDecodeError, OSError) as e:
            logger.warning(
                "Could not read project storage path from marker %s: %s",
                marker,
                e,
                exc_info=True,
            )
            return None

    if marker.is_dir():
        if is_global_config_dir(marker) and not (marker / DB_FILE_NAME).exists():
            return None
        return marker

    data_root = os.environ.get("SUBSENTINEL_DATA_DIR")
    if data_root:
        return Path(data_root) / _storage_name(project_dir)

    return marker


def ensure_project_storage_dir(project_dir: Path) -> Path:
    """Ensure the project storage directory exists and return it."""
    marker = project_dir / CONFIG_DIR_NAME
    if marker.is_dir():
        return marker

    if marker.is_file():
        target = marker.read_text().strip()
        if not target:
            raise ValueError("Project marker file is empty.")
        storage = Path(target)
        storage.mkdir(parents=True, exist_ok=True)
        return storage

    storage = get_project_storage_dir(project_dir)
    if storage is None:
        raise ValueError("Unable to resolve project storage directory.")

    storage.mkdir(parents=True, exist_ok=True)

    # Data-dir storage leaves a marker file pointing at it
    if storage != marker:
        marker.write_text(str(storage))

    return storage


def get_project_db_path(project_dir: Path | None) -> Path | None:
    """Get the project database path."""
    storage = get_project_storage_dir(project_dir)
    if storage is None:
        return None
    return storage / DB_FILE_NAME


def get_project_env_path(project_dir: Path | None) -> Path | None:
    """Get the project .env path."""
    storage = get_project_storage_dir(project_dir)
    if storage is None:
        return None
    return storage / ".env"


def create_project_config_template(project_dir: Path) -> Path:
    """Create a .env template file in the project storage directory."""
    storage_dir = ensure_project_storage_dir(project_dir)
    env_path = storage_dir / ".env"

    if not env_path.exists():
        template = """# SubSentinel scanner configuration
# Uncomment and adjust; environment variables take precedence.

# Concurrent candidates resolved/probed at once
# SUBSENTINEL_WORKERS=10

# Minimum spacing between requests to the same host (milliseconds)
# SUBSENTINEL_RATE_LIMIT_MS=100

# Per-attempt HTTP probe timeout (seconds)
# SUBSENTINEL_PROBE_TIMEOUT=10

# Response body characters kept for takeover verification
# SUBSENTINEL_BODY_LIMIT=10000

# Subdomain rows written per database batch
# SUBSENTINEL_BATCH_SIZE=50

# User-Agent sent to upstream sources and probe targets
# SUBSENTINEL_USER_AGENT=SubdomainSentinel/1.0

# SUBSENTINEL_VERBOSE=false
"""
        env_path.write_text(template)

    return env_path


def create_global_config() -> Path:
    """Create global config directory and file if they don't exist."""
    import yaml

    config_dir = global_config_dir()
    config_dir.mkdir(exist_ok=True)

    config_path = config_dir / "config.yml"
    if not config_path.exists():
        default_config = {
            "SUBSENTINEL_WORKERS": 10,
            "SUBSENTINEL_RATE_LIMIT_MS": 100,
            "SUBSENTINEL_PROBE_TIMEOUT": 10.0,
        }
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    return config_path
