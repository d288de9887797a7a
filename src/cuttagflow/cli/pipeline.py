"""Shared pipeline execution helpers for the CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import click

from cuttagflow.cli.exit_codes import EXIT_USAGE
from cuttagflow.config import INPUT_FIELDS, Config, load_config
from cuttagflow.exceptions import ConfigurationError
from cuttagflow.utils.logging import level_from_name, setup_logging


@dataclass
class PipelineOptions:
    """Container for pipeline execution options."""

    # Keys of INPUT_FIELDS mapped to CLI values (None when not given)
    inputs: Dict[str, Optional[Path]] = field(default_factory=dict)
    prefix: Optional[str] = None
    output: Optional[Path] = None  # None means use config or default
    config_path: Optional[Path] = None
    threads: Optional[int] = None  # None means use config or default
    dry_run: bool = False
    show_steps: bool = False
    log_file: Optional[Path] = None
    verbose: int = 0


def show_pipeline_stages() -> None:
    """List stages without touching the filesystem."""
    from cuttagflow.core.pipeline import Pipeline

    click.echo("\nCutTagFlow Pipeline Stages:")
    click.echo("-" * 60)
    for stage in Pipeline.STAGES:
        mode = "per sample" if stage.paired else "combined"
        click.echo(f"  {stage.number}. {stage.name:<11} - {stage.description} [{mode}]")
    click.echo("-" * 60)
    click.echo(f"Total: {len(Pipeline.STAGES)} stages\n")


def _usage_error(message: str, ctx: Optional[click.Context]) -> None:
    click.echo(f"Error: {message}", err=True)
    if ctx is None:
        ctx = click.get_current_context(silent=True)
    if ctx is not None:
        click.echo(ctx.get_usage(), err=True)
        click.echo("Try '-h' for help.", err=True)
    sys.exit(EXIT_USAGE)


def build_config(opts: PipelineOptions) -> Config:
    """Merge CLI values over the config file over defaults."""
    cfg = load_config(opts.config_path) if opts.config_path else Config()

    for attr in INPUT_FIELDS:
        value = opts.inputs.get(attr)
        if value is not None:
            setattr(cfg, attr, Path(value))
    if opts.prefix is not None:
        cfg.prefix = opts.prefix
    if opts.output is not None:
        cfg.output_dir = opts.output
    if opts.threads is not None:
        cfg.threads = opts.threads
    return cfg


def execute_pipeline(
    opts: PipelineOptions,
    logger: logging.Logger,
    ctx: Optional[click.Context] = None,
) -> None:
    """Resolve options, validate inputs and run (or describe) the pipeline."""
    if opts.show_steps:
        show_pipeline_stages()
        return

    try:
        cfg = build_config(opts)
    except ConfigurationError as exc:
        _usage_error(str(exc), ctx)

    # CLI logging flags take precedence over config file values
    if opts.verbose == 0:
        setup_logging(
            level=level_from_name(cfg.runtime.log_level),
            log_file=opts.log_file or cfg.runtime.log_file,
        )

    missing = cfg.missing_inputs()
    if missing:
        _usage_error(
            "Missing required option(s): " + ", ".join(missing)
            + ". Inputs can also be given in a config file (-c).",
            ctx,
        )

    try:
        cfg.validate()
    except ConfigurationError as exc:
        _usage_error(str(exc), ctx)

    if opts.dry_run:
        logger.info("Dry run mode - showing what would be executed:")
        show_pipeline_stages()
        click.echo(f"Treatment: {cfg.treat_r1} {cfg.treat_r2}")
        click.echo(f"Control:   {cfg.ctrl_r1} {cfg.ctrl_r2}")
        click.echo(f"Genome:    {cfg.genome_fasta} ({cfg.genome_gff})")
        click.echo(f"Spike-in:  {cfg.spikein_fasta}")
        click.echo(f"Output to: {Path(cfg.output_dir).absolute()} (prefix {cfg.prefix})")
        click.echo(f"Using {cfg.threads} threads")
        return

    from cuttagflow.core.pipeline import Pipeline

    pipeline = Pipeline(cfg)
    result = pipeline.run()

    click.echo(f"CutTagFlow finished: {len(result.executed)} stage(s) run, "
               f"{len(result.skipped)} already done")
    for label, factor in result.norm_factors.items():
        click.echo(f"  {label} normalization factor: {factor}")
    click.echo(f"  Peaks: {result.peak_file}")
