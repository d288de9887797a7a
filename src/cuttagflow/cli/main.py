"""Click application entrypoint for CutTagFlow."""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from types import FrameType
from typing import Optional

import click

from cuttagflow import __version__
from cuttagflow.cli.exit_codes import EXIT_ERROR, EXIT_SIGINT, EXIT_SIGTERM, EXIT_SUCCESS
from cuttagflow.exceptions import CutTagFlowError
from cuttagflow.utils.logging import get_logger, level_from_verbosity, setup_logging

from .commands.checkpoint import show_checkpoint
from .commands.config import init_config
from .commands.validate import validate
from .common_options import (
    config_option,
    input_options,
    output_option,
    threads_option,
    verbose_option,
)
from .pipeline import PipelineOptions, execute_pipeline


class _Terminated(KeyboardInterrupt):
    """Raised from the SIGTERM handler so it unwinds like an interrupt."""


def _handle_signal(signum: int, frame: Optional[FrameType]) -> None:
    """Turn SIGINT/SIGTERM into an exception that unwinds the stage loop."""
    sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
    click.echo(f"\n{sig_name} received, stopping...", err=True)
    if signum == signal.SIGTERM:
        raise _Terminated(f"{sig_name} received")
    raise KeyboardInterrupt(f"{sig_name} received")


def _print_help(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(ctx.get_help(), color=ctx.color)
        ctx.exit()


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(f"CutTagFlow {__version__}")
        ctx.exit()


@click.group(
    context_settings=dict(help_option_names=["-h", "--help"]),
    invoke_without_command=True,
    add_help_option=False,
)
# Version option (use -V to avoid conflict with -v/--verbose)
@click.option(
    "-V",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit.",
)
@input_options
@output_option
@config_option
@threads_option
@verbose_option
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write a detailed (DEBUG) log to this file",
)
@click.option("--show-steps", is_flag=True, help="Show pipeline stages and exit")
@click.option("--dry-run", is_flag=True, help="Validate inputs and show the plan without running")
@click.option(
    "-h",
    "--help",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_help,
    help="Show this message and exit.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    treat_r1: Optional[Path],
    treat_r2: Optional[Path],
    ctrl_r1: Optional[Path],
    ctrl_r2: Optional[Path],
    prefix: Optional[str],
    genome_fasta: Optional[Path],
    genome_gff: Optional[Path],
    spikein_fasta: Optional[Path],
    output: Optional[Path],
    config: Optional[Path],
    threads: Optional[int],
    verbose: int,
    log_file: Optional[Path],
    show_steps: bool,
    dry_run: bool,
) -> None:
    """CutTagFlow: spike-in normalized Cut&Tag analysis.

    Run directly as:

    cuttagflow -a T_R1 -b T_R2 -d C_R1 -e C_R2 -n PREFIX -f genome.fa -g genome.gff -s spikein.fa

    Completed stages are recorded in 0_Checkpoints/ and skipped on rerun.
    """
    if ctx.invoked_subcommand:
        return

    setup_logging(level=level_from_verbosity(verbose), log_file=log_file)
    logger = get_logger("cli")

    try:
        opts = PipelineOptions(
            inputs={
                "treat_r1": treat_r1,
                "treat_r2": treat_r2,
                "ctrl_r1": ctrl_r1,
                "ctrl_r2": ctrl_r2,
                "genome_fasta": genome_fasta,
                "genome_gff": genome_gff,
                "spikein_fasta": spikein_fasta,
            },
            prefix=prefix,
            output=output,
            config_path=config,
            threads=threads,
            dry_run=dry_run,
            show_steps=show_steps,
            log_file=log_file,
            verbose=verbose,
        )
        execute_pipeline(opts, logger, ctx)

    except _Terminated:
        logger.warning("Pipeline terminated")
        sys.exit(EXIT_SIGTERM)
    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        sys.exit(EXIT_SIGINT)
    except CutTagFlowError as exc:
        logger.error(f"Pipeline error: {exc}")
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)


cli.add_command(show_checkpoint)
cli.add_command(init_config)
cli.add_command(validate)


def main(argv: list[str] | None = None) -> int:
    """Main entry point with signal handling."""
    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        cli(argv)
        return EXIT_SUCCESS
    except _Terminated:
        return EXIT_SIGTERM
    except KeyboardInterrupt:
        return EXIT_SIGINT
    except SystemExit as exc:
        # Preserve explicit exit codes from cli()
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
