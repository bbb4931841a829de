"""Console presenter — renders session events and reports with Rich."""

from __future__ import annotations

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from artiscan.artifact.models import Artifact
from artiscan.errors import InvalidArtifactType, ScanFailed
from artiscan.report.models import RiskLevel, ScanReport
from artiscan.session.models import SessionState

_RISK_COLORS = {
    RiskLevel.CRITICAL: "#ff0055",
    RiskLevel.HIGH: "#ff5500",
    RiskLevel.MEDIUM: "#ffcc00",
    RiskLevel.SAFE: "#00f3ff",
}

_SEVERITY_COLORS = {
    "CRITICAL": "red",
    "HIGH": "dark_orange",
    "MEDIUM": "yellow",
    "LOW": "blue",
}


class ConsolePresenter:
    """Prints selection, progress and results to a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def on_artifact_selected(self, artifact: Artifact) -> None:
        name = escape(artifact.name)
        self._console.print(
            f"Selected [cyan]{name}[/cyan] [dim]({artifact.size_label})[/dim]"
        )

    def on_artifact_rejected(self, reason: InvalidArtifactType) -> None:
        self._console.print(f"[red]{escape(str(reason))}[/red]")

    def on_lifecycle_change(
        self,
        state: SessionState,
        payload: ScanReport | ScanFailed | None = None,
    ) -> None:
        if state == SessionState.SUBMITTING:
            self._console.print("[bold]Scanning...[/bold]")
        elif state == SessionState.COMPLETED and isinstance(payload, ScanReport):
            self._console.print(render_report(payload))
        elif state == SessionState.FAILED and payload is not None:
            self._console.print(f"[red]Scan failed:[/red] {escape(str(payload))}")
            self._console.print(
                "[dim]Please ensure the backend server is running.[/dim]"
            )


def render_report(report: ScanReport) -> Group:
    """Build the score header, summary cards, findings and recommendations."""
    color = _RISK_COLORS.get(report.risk_level, "white")
    header = Panel(
        Text.from_markup(
            f"Security score [bold {color}]{report.security_score}[/]/100"
            f"   Risk [bold {color}]{report.risk_level.value}[/]"
        ),
        title="Scan Report",
        border_style=color,
    )
    return Group(
        header,
        _render_summary(report),
        _render_findings(report),
        _render_recommendations(report),
    )


def _render_summary(report: ScanReport) -> Table:
    table = Table(show_header=True, header_style="bold", expand=True, box=None)
    table.add_column("[#ff0055]CRITICAL THREATS[/]", justify="center")
    table.add_column("[#ff5500]HIGH RISK[/]", justify="center")
    table.add_column("[#ffcc00]WARNINGS[/]", justify="center")
    table.add_column("TOTAL ISSUES", justify="center")
    s = report.summary
    table.add_row(str(s.critical), str(s.high), str(s.medium), str(s.total_issues))
    return table


def _render_findings(report: ScanReport) -> Panel:
    if not report.findings:
        return Panel(
            Text("No threats detected. System secure.", style="green"),
            title="Findings",
            border_style="blue",
        )

    table = Table(show_header=True, header_style="bold", expand=True, box=None)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Severity", width=10)
    table.add_column("Description", ratio=1)

    for finding in report.findings:
        sev_color = _SEVERITY_COLORS.get(finding.severity.upper(), "white")
        table.add_row(
            Text(finding.category),
            Text(finding.severity, style=sev_color),
            Text(finding.description),
        )

    return Panel(table, title=f"Findings ({len(report.findings)})", border_style="blue")


def _render_recommendations(report: ScanReport) -> Panel:
    if not report.recommendations:
        body = Text("No recommendations available.", style="dim italic")
    else:
        body = Text("\n".join(f"- {rec}" for rec in report.recommendations))
    return Panel(body, title="Recommendations", border_style="blue")
