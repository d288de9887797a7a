"""`show-checkpoint` subcommand implementation."""

from __future__ import annotations

from pathlib import Path

import click


@click.command(name="show-checkpoint")
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Output directory of the run [default: .]",
)
@click.option("-n", "--prefix", required=True, help="Run prefix used for the marker files")
def show_checkpoint(output: Path, prefix: str) -> None:
    """Show which stages of a run are done and the cached spike-in counts."""
    from cuttagflow.config import Config
    from cuttagflow.core.pipeline import Pipeline

    cfg = Config()
    cfg.output_dir = output
    cfg.prefix = prefix
    Pipeline(cfg).show_checkpoint_info()
