"""Shared CLI app objects and project helpers."""

from pathlib import Path

import typer
from rich.console import Console

from subsentinel.config import find_project_dir, get_project_db_path, is_global_config_dir

app = typer.Typer(
    name="subsentinel",
    help="Subdomain discovery and risk ranking",
    no_args_is_help=True,
)
console = Console()


def get_project_dir() -> Path | None:
    """Find the project directory by looking for a .subsentinel marker."""
    return find_project_dir()


def require_project() -> Path:
    """Ensure the current directory is inside a SubSentinel project."""
    project_dir = get_project_dir()
    if project_dir:
        return project_dir

    home_marker = Path.home() / ".subsentinel"
    if home_marker.is_dir() and is_global_config_dir(home_marker):
        console.print(
            "[yellow]Note:[/yellow] ~/.subsentinel is a global config folder, not a project marker."
        )
    console.print("[red]Error: Not in a SubSentinel project. Run 'subsentinel init' first.[/red]")
    raise typer.Exit(1)


def require_db_path(project_dir: Path) -> Path:
    db_path = get_project_db_path(project_dir)
    if db_path is None:
        console.print("[red]Project storage not found. Run 'subsentinel init' first.[/red]")
        raise typer.Exit(1)
    return db_path


def risk_style(score: int) -> str:
    if score >= 70:
        return "bold red"
    if score >= 50:
        return "red"
    if score >= 25:
        return "yellow"
    return "green"
