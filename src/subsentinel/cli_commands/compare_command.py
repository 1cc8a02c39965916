"""Scan comparison CLI command."""

import typer

from subsentinel.modules.recon import ScanSummary, compare_scans

from .deps import cli_module
from .shared import app, console, require_db_path


@app.command("compare")
def compare(
    old_id: int = typer.Argument(..., help="Baseline scan ID"),
    new_id: int = typer.Argument(..., help="Newer scan ID"),
) -> None:
    """Show subdomains added and removed between two scans."""
    cli = cli_module()
    session = cli.SessionManager(require_db_path(cli.require_project()))
    try:
        for scan_id in (old_id, new_id):
            if session.get_scan(scan_id) is None:
                console.print(f"[red]Scan {scan_id} not found.[/red]")
                raise typer.Exit(1)
        result = compare_scans(
            session.subdomain_names(old_id),
            session.subdomain_names(new_id),
            session.get_summary(old_id),
            session.get_summary(new_id),
        )
    finally:
        session.close()

    console.print(f"[bold]Scan #{old_id} → #{new_id}[/bold]")
    console.print(f"  Unchanged: {result.unchanged}")
    console.print(f"  [green]Added ({len(result.added)})[/green]")
    for name in result.added:
        console.print(f"    + {name}")
    console.print(f"  [red]Removed ({len(result.removed)})[/red]")
    for name in result.removed:
        console.print(f"    - {name}")

    labels = dict(zip(ScanSummary().to_dict(), ("Total", "Active", "Anomalies", "Cloud", "Takeover")))
    changes = ", ".join(
        f"{labels[key]} {delta:+d}" for key, delta in result.stats_change.items()
    )
    console.print(f"  [dim]{changes}[/dim]")
