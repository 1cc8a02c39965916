"""
Configuration management for SubSentinel.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.subsentinel/.env)
3. Global config file (~/.subsentinel/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    is_global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    ScannerSettings,
    get_config,
    get_verbose,
    load_scanner_settings,
)
from .project_setup import (
    create_global_config,
    create_project_config_template,
    ensure_project_storage_dir,
    find_project_dir,
    get_project_db_path,
    get_project_env_path,
    get_project_storage_dir,
)

__all__ = [
    # env_loader
    "is_global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "ScannerSettings",
    "get_config",
    "get_verbose",
    "load_scanner_settings",
    # project_setup
    "create_global_config",
    "create_project_config_template",
    "ensure_project_storage_dir",
    "find_project_dir",
    "get_project_db_path",
    "get_project_env_path",
    "get_project_storage_dir",
]
