"""Project initialization CLI command."""

from pathlib import Path

import typer
from rich.panel import Panel

from .deps import cli_module
from .shared import app, console


@app.command()
def init() -> None:
    """Initialize a SubSentinel project in the current directory."""
    project_dir = Path.cwd()
    marker = project_dir / ".subsentinel"

    if marker.exists():
        console.print(f"[yellow]Project already initialized at {project_dir}[/yellow]")
        return

    cli = cli_module()
    try:
        storage_dir = cli.ensure_project_storage_dir(project_dir)
        write_test = storage_dir / ".write_test"
        write_test.write_text("ok")
        write_test.unlink()
    except PermissionError as exc:
        console.print(
            "[red]Error: Project directory is not writable.[/red]\n"
            "[dim]Choose a writable location and run 'subsentinel init' again.[/dim]"
        )
        raise typer.Exit(1) from exc
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error initializing project storage: {exc}[/red]")
        raise typer.Exit(1) from exc

    db_path = cli.get_project_db_path(project_dir)
    cli.SessionManager(db_path).close()
    env_path = cli.create_project_config_template(project_dir)

    console.print(
        Panel(
            f"[green]Initialized SubSentinel project at[/green]\n{project_dir}\n\n"
            f"[dim]Database:[/dim] {db_path}\n"
            f"[dim]Settings:[/dim] {env_path}\n\n"
            "[yellow]Next:[/yellow] subsentinel scan example.com",
            title="SubSentinel",
            border_style="green",
        )
    )
