"""Configuration getter functions."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from subsentinel.tools.http import DEFAULT_USER_AGENT

from .env_loader import load_global_config, load_project_config

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        project_dir: Optional project directory
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    return default


def _get_number(key: str, project_dir: Path | None, default, cast, minimum):
    raw = get_config(key, project_dir)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s=%r, using %s", key, raw, default)
        return default
    if value < minimum:
        logger.warning("Ignoring out-of-range %s=%r, using %s", key, raw, default)
        return default
    return value


def get_verbose(project_dir: Path | None = None) -> bool:
    """Whether verbose logging is switched on in config."""
    return str(get_config("SUBSENTINEL_VERBOSE", project_dir, default="")).lower() in TRUTHY


@dataclass(frozen=True)
class ScannerSettings:
    """Process-wide knobs for the reconnaissance pipeline."""

    workers: int = 10
    rate_limit_ms: int = 100
    probe_timeout: float = 10.0
    body_limit: int = 10_000
    batch_size: int = 50
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def rate_limit_interval(self) -> float:
        return self.rate_limit_ms / 1000.0


def load_scanner_settings(project_dir: Path | None = None) -> ScannerSettings:
    """Read scanner settings from env, project .env and global config."""
    defaults = ScannerSettings()
    return ScannerSettings(
        workers=_get_number("SUBSENTINEL_WORKERS", project_dir, defaults.workers, int, 1),
        rate_limit_ms=_get_number(
            "SUBSENTINEL_RATE_LIMIT_MS", project_dir, defaults.rate_limit_ms, int, 0
        ),
        probe_timeout=_get_number(
            "SUBSENTINEL_PROBE_TIMEOUT", project_dir, defaults.probe_timeout, float, 0.1
        ),
        body_limit=_get_number("SUBSENTINEL_BODY_LIMIT", project_dir, defaults.body_limit, int, 1),
        batch_size=_get_number("SUBSENTINEL_BATCH_SIZE", project_dir, defaults.batch_size, int, 1),
        user_agent=str(
            get_config("SUBSENTINEL_USER_AGENT", project_dir, default=defaults.user_agent)
        ),
    )
