"""CLI command: artiscan check <file> — validate a file without uploading it."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from artiscan.artifact.models import Candidate
from artiscan.artifact.validator import ArtifactValidator
from artiscan.errors import InvalidArtifactType

console = Console(stderr=True)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def check(file: str) -> None:
    """Check that FILE is a supported executable and show its size."""
    try:
        artifact = ArtifactValidator().validate(Candidate.from_path(file))
    except InvalidArtifactType as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(1)

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Name", escape(artifact.name))
    table.add_row("Type", artifact.extension)
    table.add_row("Size", artifact.size_label)
    console.print(table)
    console.print("[green]Ready to scan.[/green]")
