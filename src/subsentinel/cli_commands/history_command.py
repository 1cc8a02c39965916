"""Scan history and stored-result CLI commands."""

import typer
from rich.table import Table

from subsentinel.modules.recon import RecordFilter, filter_records

from .deps import cli_module
from .scan_command import build_results_table
from .shared import app, console, require_db_path


@app.command("history")
def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of scans to list"),
    status: str | None = typer.Option(None, "--status", help="Only scans with this status"),
) -> None:
    """List previous scans."""
    cli = cli_module()
    session = cli.SessionManager(require_db_path(cli.require_project()))
    try:
        scans = session.list_scans(limit=limit, status=status)
    finally:
        session.close()

    if not scans:
        console.print("[yellow]No scans yet.[/yellow]")
        return

    table = Table()
    table.add_column("ID", justify="right")
    table.add_column("Target", style="cyan")
    table.add_column("Status")
    table.add_column("Total", justify="right")
    table.add_column("Active", justify="right")
    table.add_column("Anomalies", justify="right")
    table.add_column("Cloud", justify="right")
    table.add_column("Takeover", justify="right")
    table.add_column("Started")
    for scan in scans:
        table.add_row(
            str(scan.id),
            scan.target_domain,
            scan.status,
            str(scan.total_subdomains or 0),
            str(scan.active_subdomains or 0),
            str(scan.anomalies or 0),
            str(scan.cloud_assets or 0),
            str(scan.takeover_vulnerable or 0),
            scan.started_at.strftime("%Y-%m-%d %H:%M") if scan.started_at else "-",
        )
    console.print(table)


@app.command("show")
def show(
    scan_id: int = typer.Argument(..., help="Scan ID"),
    min_score: int = typer.Option(0, "--min-score", help="Minimum risk score"),
    active_only: bool = typer.Option(False, "--active-only", help="Only active subdomains"),
    anomalies: bool = typer.Option(False, "--anomalies", help="Only anomalous names"),
    cloud: bool = typer.Option(False, "--cloud", help="Only cloud-hosted assets"),
    takeover: bool = typer.Option(False, "--takeover", help="Only takeover candidates"),
    keyword: str = typer.Option("", "--keyword", "-k", help="Substring of the name"),
    provider: str | None = typer.Option(None, "--provider", help="Cloud provider, e.g. aws"),
) -> None:
    """Show the stored subdomains of a scan."""
    cli = cli_module()
    session = cli.SessionManager(require_db_path(cli.require_project()))
    try:
        scan = session.get_scan(scan_id)
        if scan is None:
            console.print(f"[red]Scan {scan_id} not found.[/red]")
            raise typer.Exit(1)
        records = session.get_records(scan_id)
        target = scan.target_domain
    finally:
        session.close()

    criteria = RecordFilter(
        active_only=active_only,
        anomalies_only=anomalies,
        cloud_only=cloud,
        takeover_only=takeover,
        keyword=keyword,
        min_score=min_score,
        cloud_provider=provider,
    )
    matched = filter_records(records, criteria)
    console.print(f"[bold]Scan #{scan_id}[/bold] {target}: {len(matched)}/{len(records)} shown")
    if matched:
        console.print(build_results_table(matched))
