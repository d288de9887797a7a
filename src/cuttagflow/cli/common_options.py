"""Shared Click options for CutTagFlow CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import click

F = TypeVar("F", bound=Callable[..., None])


def _input_path_option(short: str, long: str, dest: str, help_text: str) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        return click.option(
            short,
            long,
            dest,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            required=False,
            help=help_text,
        )(func)

    return decorator


treat_r1_option = _input_path_option("-a", "--treat-r1", "treat_r1", "Treatment read 1 FASTQ")
treat_r2_option = _input_path_option("-b", "--treat-r2", "treat_r2", "Treatment read 2 FASTQ")
ctrl_r1_option = _input_path_option("-d", "--ctrl-r1", "ctrl_r1", "Control read 1 FASTQ")
ctrl_r2_option = _input_path_option("-e", "--ctrl-r2", "ctrl_r2", "Control read 2 FASTQ")
genome_fasta_option = _input_path_option(
    "-f", "--genome-fasta", "genome_fasta", "Reference genome FASTA"
)
genome_gff_option = _input_path_option(
    "-g", "--genome-gff", "genome_gff", "Reference genome annotation (GFF/GTF)"
)
spikein_fasta_option = _input_path_option(
    "-s", "--spikein-fasta", "spikein_fasta", "Spike-in genome FASTA (e.g. E. coli)"
)


def prefix_option(func: F) -> F:
    """Run prefix option."""
    return click.option(
        "-n",
        "--prefix",
        default=None,
        help="Prefix for output files and checkpoint markers",
    )(func)


def output_option(func: F) -> F:
    """Output directory option."""
    return click.option(
        "-o",
        "--output",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Output directory [default: .]",
    )(func)


def config_option(func: F) -> F:
    """Configuration file option."""
    return click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file (YAML)",
    )(func)


def threads_option(func: F) -> F:
    """Threads option."""
    return click.option(
        "-t",
        "--threads",
        type=click.IntRange(min=1),
        default=None,
        help="Number of threads [default: 16]",
    )(func)


def verbose_option(func: F) -> F:
    """Verbosity option."""
    return click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )(func)


def input_options(func: F) -> F:
    """Apply the seven input file options plus the run prefix."""
    decorators = [
        treat_r1_option,
        treat_r2_option,
        ctrl_r1_option,
        ctrl_r2_option,
        prefix_option,
        genome_fasta_option,
        genome_gff_option,
        spikein_fasta_option,
    ]
    # Click applies decorators bottom-up
    for decorator in reversed(decorators):
        func = decorator(func)
    return func
