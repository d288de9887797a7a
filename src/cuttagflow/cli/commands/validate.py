"""Installation validation command."""

from __future__ import annotations

import sys

import click

from cuttagflow import __version__
from cuttagflow.cli.exit_codes import EXIT_ERROR


@click.command()
def validate() -> None:
    """Check that every external tool the pipeline needs is on PATH."""
    from cuttagflow.utils.dependency_checker import DependencyChecker

    click.echo(f"Validating CutTagFlow {__version__} dependencies...")
    checker = DependencyChecker()
    ok = checker.check_all()
    checker.print_report()
    if not ok:
        sys.exit(EXIT_ERROR)
    click.echo("✓ All required tools found")
