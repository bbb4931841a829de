"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from artiscan import __version__


@click.group()
@click.version_option(version=__version__, prog_name="artiscan")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """artiscan — submit .exe and .apk files to a remote scanning service."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from artiscan.cli.check import check  # noqa: F811
    from artiscan.cli.scan import scan  # noqa: F811

    main.add_command(check)
    main.add_command(scan)


_register_commands()
