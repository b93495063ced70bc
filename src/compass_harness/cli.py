"""Command-line interface for compass-harness."""

from __future__ import annotations

import sys
from typing import Optional

import click

from compass_harness import __version__
from compass_harness.core.errors import EXIT_DOCTOR_FAILURE, EXIT_OK


@click.group()
@click.version_option(version=__version__, prog_name="compass-harness")
def main() -> None:
    """compass-harness: waits and named commands for Compass UI tests."""


@main.command()
@click.option(
    "--dist-dir",
    default=None,
    metavar="DIR",
    help="Directory holding the packaged application.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    metavar="FILE",
    help="Harness config file (YAML or JSON) to validate.",
)
def doctor(dist_dir: Optional[str], config_path: Optional[str]) -> None:
    """Validate the environment before running UI tests.

    Exits with code 0 when all checks pass, or 10 when one or more fail.
    """
    from compass_harness.doctor import run_doctor

    report = run_doctor(dist_dir=dist_dir, config_path=config_path)
    _print_report(report)

    if report.passed:
        click.echo("\nAll checks passed.")
        sys.exit(EXIT_OK)
    click.echo(
        "\nOne or more checks failed. Fix the issues above and re-run "
        "`compass-harness doctor`.",
        err=True,
    )
    sys.exit(EXIT_DOCTOR_FAILURE)


@main.command()
def commands() -> None:
    """List the named scenario commands."""
    from compass_harness.core.registry import CommandRegistry
    from compass_harness.scenarios import add_commands

    registry = add_commands(CommandRegistry())
    width = max(len(n) for n in registry.names())
    for name, summary in registry.describe().items():
        click.echo(f"  {name.ljust(width)}  {summary}")


def _print_report(report) -> None:
    click.echo(f"compass-harness doctor\n{'─' * 30}")
    for check in report.checks:
        icon = "✓" if check.passed else "✗"
        click.echo(f"  [{icon}] {check.name}: {check.message}")
        if check.hint:
            click.echo(f"       ↳ {check.hint}")
