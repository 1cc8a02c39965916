"""SubSentinel CLI - subdomain discovery and risk ranking."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from subsentinel.cli_commands import (  # noqa: F401
    compare_command,
    config_command,
    history_command,
    project_init,
    scan_command,
)
from subsentinel.cli_commands.shared import app, console, get_project_dir, require_project
from subsentinel.config import (
    create_global_config,
    create_project_config_template,
    ensure_project_storage_dir,
    get_project_db_path,
    get_project_env_path,
    get_verbose,
    load_global_config,
    load_project_config,
    load_scanner_settings,
)
from subsentinel.modules.recon import SubdomainScanner
from subsentinel.modules.session import SessionManager
from subsentinel.utils.async_utils import safe_async_run
from subsentinel.utils.debug import configure_logging

__all__ = [
    "SessionManager",
    "SubdomainScanner",
    "app",
    "configure_logging",
    "console",
    "create_global_config",
    "create_project_config_template",
    "ensure_project_storage_dir",
    "get_project_db_path",
    "get_project_dir",
    "get_project_env_path",
    "get_verbose",
    "load_global_config",
    "load_project_config",
    "load_scanner_settings",
    "main",
    "require_project",
    "safe_async_run",
]


@app.command()
def version() -> None:
    """Show the installed SubSentinel version."""
    try:
        current_version = pkg_version("subsentinel")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"SubSentinel {current_version}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
