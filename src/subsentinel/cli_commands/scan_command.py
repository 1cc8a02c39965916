"""Subdomain scan CLI command."""

from dataclasses import replace
from pathlib import Path

import typer
from rich.panel import Panel
from rich.table import Table

from subsentinel.modules.recon import (
    ScanOptions,
    ScanRequest,
    ScanStatus,
    rank_records,
    risk_level,
    validate_domain,
)
from subsentinel.modules.recon.results import records_to_json

from .deps import cli_module
from .shared import app, console, require_db_path, risk_style


@app.command("scan")
def scan(
    domain: str = typer.Argument(..., help="Target domain to enumerate and rank"),
    ct: bool = typer.Option(True, "--ct/--no-ct", help="Query certificate-transparency logs"),
    wordlist: bool = typer.Option(
        True, "--wordlist/--no-wordlist", help="Brute-force common prefixes"
    ),
    permutations: bool = typer.Option(
        True, "--permutations/--no-permutations", help="Try name permutations"
    ),
    probe: bool = typer.Option(True, "--probe/--no-probe", help="HTTP/HTTPS probe live names"),
    tech: bool = typer.Option(True, "--tech/--no-tech", help="Fingerprint technologies"),
    takeover: bool = typer.Option(
        True, "--takeover/--no-takeover", help="Check CNAMEs for takeover"
    ),
    wayback: bool = typer.Option(
        True, "--wayback/--no-wayback", help="Annotate active names with archived URLs"
    ),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Concurrent candidates"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Per-attempt probe timeout in seconds"
    ),
    top: int = typer.Option(20, "--top", help="Rows to show in the results table"),
    json_out: Path | None = typer.Option(None, "--json", help="Write results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Discover subdomains of DOMAIN and rank them by risk."""
    cli = cli_module()
    project_dir = cli.require_project()
    cli.configure_logging(verbose or cli.get_verbose(project_dir))

    validation = validate_domain(domain)
    if not validation.valid:
        console.print(f"[red]{validation.reason}[/red]")
        raise typer.Exit(1)

    settings = cli.load_scanner_settings(project_dir)
    if workers is not None:
        settings = replace(settings, workers=max(1, workers))
    if timeout is not None:
        settings = replace(settings, probe_timeout=max(0.1, timeout))

    options = ScanOptions(
        ct_lookup=ct,
        wordlist_bruteforce=wordlist,
        permutations=permutations,
        http_probe=probe,
        tech_fingerprint=tech,
        takeover_check=takeover,
        wayback_lookup=wayback,
    )

    session = cli.SessionManager(require_db_path(project_dir))
    try:
        scan_row = session.create_scan(validation.domain, options)
        scanner = cli.SubdomainScanner(session, settings)
        request = ScanRequest(scan_id=scan_row.id, target_domain=validation.domain, options=options)

        console.print(
            f"[blue]Scanning {validation.domain} (scan #{scan_row.id}, "
            f"{settings.workers} workers)...[/blue]"
        )
        outcome = cli.safe_async_run(scanner.run_scan(request), on_interrupt=scanner.stop)
    finally:
        session.close()

    if outcome.status is ScanStatus.STOPPED:
        console.print(f"[yellow]{outcome.error}[/yellow]")
        raise typer.Exit(1)
    if not outcome.success or outcome.summary is None:
        console.print(f"[red]{outcome.error}[/red]")
        raise typer.Exit(1)

    summary = outcome.summary
    console.print(
        Panel(
            f"Total: [bold]{summary.total}[/bold]   "
            f"Active: [green]{summary.active}[/green]   "
            f"Anomalies: [yellow]{summary.anomalies}[/yellow]   "
            f"Cloud assets: [cyan]{summary.cloud_assets}[/cyan]   "
            f"Takeover: [red]{summary.takeover_vulnerable}[/red]",
            title=f"[bold]Scan #{outcome.scan_id}[/bold] {validation.domain}",
            border_style="blue",
        )
    )

    ranked = rank_records(outcome.records)
    if ranked:
        console.print(build_results_table(ranked[:top]))
        if len(ranked) > top:
            console.print(f"[dim]... {len(ranked) - top} more. Use 'subsentinel show'.[/dim]")
    else:
        console.print("[yellow]No subdomains with DNS records found.[/yellow]")

    if json_out is not None:
        json_out.write_text(records_to_json(outcome.records, summary, validation.domain))
        console.print(f"[green]Results written to {json_out}[/green]")


def build_results_table(records) -> Table:
    table = Table(show_lines=False)
    table.add_column("Risk", justify="right")
    table.add_column("Subdomain", style="cyan")
    table.add_column("Status")
    table.add_column("HTTP")
    table.add_column("Cloud")
    table.add_column("Flags")

    for record in records:
        flags = []
        if record.takeover_vulnerable:
            label = "verified" if record.takeover_verified else "possible"
            flags.append(f"takeover:{record.takeover_type} ({label})")
        if record.is_anomaly:
            flags.append(record.anomaly_reason or "anomaly")
        http = record.https_status if record.https_status is not None else record.http_status
        table.add_row(
            f"[{risk_style(record.risk_score)}]{record.risk_score} "
            f"{risk_level(record.risk_score)}[/]",
            record.name,
            record.status,
            "-" if http is None else str(http),
            record.cloud_provider or "-",
            "; ".join(flags) or "-",
        )
    return table
