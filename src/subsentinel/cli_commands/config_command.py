"""Configuration CLI command."""

from pathlib import Path

import typer
import yaml

from .deps import cli_module
from .shared import app, console, get_project_dir


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, edit, init"),
    global_config: bool = typer.Option(
        False,
        "--global",
        help="Use the global config instead of the project's",
    ),
) -> None:
    """Manage SubSentinel scanner settings."""
    cli = cli_module()

    if action in ("init", "edit"):
        if global_config:
            config_path = cli.create_global_config()
        else:
            config_path = cli.create_project_config_template(cli.require_project())

        if action == "init":
            scope = "global" if global_config else "project"
            console.print(f"[green]Created {scope} config:[/green] {config_path}")
            if not global_config:
                console.print("[dim]Uncomment the settings you want to override.[/dim]")
        else:
            console.print(f"[green]Edit this file:[/green] {config_path}")
        return

    if action == "show":
        if global_config:
            console.print("[bold]Global Configuration (~/.subsentinel/config.yml):[/bold]")
            console.print(yaml.dump(cli.load_global_config(), default_flow_style=False))
            return

        project_dir = get_project_dir()
        if not project_dir:
            console.print(
                "[yellow]Not in a project directory. Use --global to show global config.[/yellow]"
            )
            return

        env_config = cli.load_project_config(project_dir)
        if not env_config:
            console.print("[dim]No project settings set. Run 'subsentinel config edit'.[/dim]")
            return

        env_path = cli.get_project_env_path(project_dir) or Path("unknown")
        console.print(f"[bold]Project Configuration ({env_path}):[/bold]")
        for key, value in env_config.items():
            console.print(f"  {key}={value}")
        return

    console.print(f"[red]Unknown action: {action}. Use 'show', 'edit', or 'init'.[/red]")
    raise typer.Exit(1)
