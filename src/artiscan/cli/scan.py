"""CLI command: artiscan scan <file> — upload a file and show the report."""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.markup import escape

from artiscan.artifact.models import Candidate
from artiscan.config import ArtiscanConfig
from artiscan.errors import InvalidArtifactType, ScanFailed
from artiscan.presentation.base import NullPresenter, PresentationAdapter
from artiscan.presentation.console import ConsolePresenter
from artiscan.report.models import RiskLevel
from artiscan.session.manager import ScanSession
from artiscan.transport.http import HttpxTransport

console = Console(stderr=True)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--api-url",
    default=None,
    help="Scanning service base URL (default: http://localhost:5000/api).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds to wait for the service (default: 300).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.pass_context
def scan(
    ctx: click.Context,
    file: str,
    api_url: str | None,
    timeout: float | None,
    as_json: bool,
) -> None:
    """Upload FILE to the scanning service and display the risk report."""
    try:
        config = ArtiscanConfig.load(ctx.obj.get("config_path"))
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    if api_url is not None:
        config.api_url = api_url
    if timeout is not None:
        config.timeout = timeout

    adapter: PresentationAdapter = (
        NullPresenter() if as_json else ConsolePresenter(console)
    )
    session = ScanSession(
        HttpxTransport(base_url=config.api_url, timeout=config.timeout),
        endpoint=config.scan_endpoint,
        adapter=adapter,
    )

    try:
        session.select(Candidate.from_path(file))
    except InvalidArtifactType as exc:
        if as_json:
            console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(1)

    if not as_json:
        console.print(f"Submitting to [cyan]{config.api_url}[/cyan]")

    try:
        report = asyncio.run(session.submit())
    except ScanFailed as exc:
        if as_json:
            console.print(f"[red]Scan failed:[/red] {escape(str(exc))}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))

    if report.risk_level == RiskLevel.CRITICAL:
        console.print("\n[red]Risk level CRITICAL[/red]")
        sys.exit(1)
