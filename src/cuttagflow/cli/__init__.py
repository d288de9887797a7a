"""Command line interface for CutTagFlow."""

from cuttagflow.cli.main import cli, main

__all__ = ["cli", "main"]
