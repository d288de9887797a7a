"""Pipeline driver: tool check, reference provisioning and the stage sequence.

Completion is tracked only through marker files (see CheckpointStore), so
a rerun after a failure resumes at the first stage without a marker.
Normalization factors are never stored: they are recomputed from the cached
spike-in counts on every run, after stage 2 and before stage 3.
"""

from __future__ import annotations

from typing import Optional

from cuttagflow.config import Config
from cuttagflow.core.checkpoint import CheckpointStore
from cuttagflow.core.layout import OutputLayout
from cuttagflow.core.normalization import NormalizationCalculator, NormalizationFactors
from cuttagflow.core.pipeline_types import (
    PipelineResult,
    PipelineStage,
    Sample,
    SampleRole,
    StageStatus,
)
from cuttagflow.core.runner import StageRunner
from cuttagflow.core.steps.definitions import PIPELINE_STAGES, STAGES_BY_NAME
from cuttagflow.exceptions import PipelineError
from cuttagflow.modules.index_provisioner import ReferenceIndex
from cuttagflow.utils.logging import get_logger
from cuttagflow.utils.progress import iter_progress


class Pipeline:
    """Cut&Tag pipeline for one treatment/control pair."""

    STAGES: list[PipelineStage] = PIPELINE_STAGES

    def __init__(self, config: Config):
        self.config = config
        self.logger = get_logger(self.__class__.__name__)

        prefix = str(config.prefix)
        self.layout = OutputLayout(config.output_dir, prefix)
        self.checkpoints = CheckpointStore(self.layout.checkpoint_dir, prefix)
        self.runner = StageRunner(self.checkpoints)
        self.normalizer = NormalizationCalculator()

        self.samples: dict[SampleRole, Sample] = {
            SampleRole.TREATMENT: Sample(
                SampleRole.TREATMENT, config.treat_r1, config.treat_r2, prefix
            ),
            SampleRole.CONTROL: Sample(SampleRole.CONTROL, config.ctrl_r1, config.ctrl_r2, prefix),
        }

        self.references: Optional[ReferenceIndex] = None
        self.norm_factors: Optional[NormalizationFactors] = None
        self.result = PipelineResult()

    # ===================== DRIVER =====================

    def run(self) -> PipelineResult:
        """Run every pending stage in order; raises on the first failure."""
        self._check_dependencies()
        self.references = self._provision_indices()
        self.layout.create()
        self._write_config_snapshot()

        iterator = iter_progress(
            self.STAGES,
            total=len(self.STAGES),
            desc="Stages",
            enabled=self.config.runtime.enable_progress,
        )
        for stage in iterator:
            ran = self._execute_stage(stage)
            (self.result.executed if ran else self.result.skipped).append(stage.name)

            if stage is STAGES_BY_NAME["spikein"]:
                self._compute_normalization()

        self.result.peak_file = self.layout.peak_file
        self.logger.info("Pipeline completed successfully")
        return self.result

    def _check_dependencies(self) -> None:
        from cuttagflow.core.steps.preprocess import check_dependencies

        check_dependencies(self)

    def _provision_indices(self) -> ReferenceIndex:
        from cuttagflow.modules.index_provisioner import IndexProvisioner

        provisioner = IndexProvisioner(
            threads=self.config.threads,
            rebuild_stale=self.config.runtime.rebuild_stale_indices,
        )
        return provisioner.provision(
            genome_fasta=self.config.genome_fasta,
            spikein_fasta=self.config.spikein_fasta,
            annotation=self.config.genome_gff,
            feature_types=self.config.tools.tss_feature_types,
        )

    def _write_config_snapshot(self) -> None:
        from cuttagflow.config import save_config

        try:
            save_config(self.config, self.layout.config_snapshot)
        except OSError as exc:
            self.logger.warning(f"Could not write {self.layout.config_snapshot}: {exc}")

    def _compute_normalization(self) -> None:
        counts = {role: self.checkpoints.read_count(role) for role in SampleRole}
        self.norm_factors = self.normalizer.compute(
            counts[SampleRole.TREATMENT], counts[SampleRole.CONTROL]
        )
        self.result.spikein_counts = {role.label: count for role, count in counts.items()}
        self.result.norm_factors = self.norm_factors.to_dict()

    def _execute_stage(self, stage: PipelineStage) -> bool:
        method_name = f"_stage_{stage.name}"
        method = getattr(self, method_name, None)
        if method is None:
            raise PipelineError(f"Stage implementation not found: {method_name}")
        return method(stage)

    # ===================== STAGE IMPLEMENTATIONS =====================
    # Work units look up the step function at call time so they can be patched.

    def _stage_qc(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import preprocess

        return self.runner.run(
            stage,
            paired={
                role: (lambda s=sample: preprocess.run_qc_sample(self, s))
                for role, sample in self.samples.items()
            },
        )

    def _stage_spikein(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import preprocess

        return self.runner.run(
            stage,
            paired={
                role: (lambda s=sample: preprocess.run_spikein_sample(self, s))
                for role, sample in self.samples.items()
            },
            finalize=lambda: preprocess.verify_spikein_counts(self),
        )

    def _stage_genome(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import genome

        return self.runner.run(
            stage,
            paired={
                role: (lambda s=sample: genome.run_genome_sample(self, s))
                for role, sample in self.samples.items()
            },
        )

    def _stage_peakcall(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import downstream

        return self.runner.run(stage, work_unit=lambda: downstream.peak_calling(self))

    def _stage_annotation(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import downstream

        return self.runner.run(stage, work_unit=lambda: downstream.annotation(self))

    def _stage_metaplot(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import downstream

        return self.runner.run(stage, work_unit=lambda: downstream.metaplot(self))

    def _stage_motif(self, stage: PipelineStage) -> bool:
        from cuttagflow.core.steps import downstream

        return self.runner.run(stage, work_unit=lambda: downstream.motif(self))

    # ===================== REPORTING =====================

    def show_stages(self) -> None:
        """Print the stage list with checkpoint status."""
        import click

        click.echo("CutTagFlow Pipeline Stages:")
        click.echo("=" * 70)
        name_width = max(len(s.name) for s in self.STAGES)
        for stage in self.STAGES:
            status = "✓" if self.checkpoints.is_stage_done(stage) else "○"
            mode = "per sample" if stage.paired else "combined"
            click.echo(
                f"{status} Stage {stage.number}: {stage.name:<{name_width}} "
                f"- {stage.description} [{mode}]"
            )
        click.echo("=" * 70)

    def show_checkpoint_info(self) -> None:
        """Print marker and spike-in cache status for the configured prefix."""
        import click

        summary = self.checkpoints.summary(self.STAGES)
        done = [name for name, status in summary.items() if status is StageStatus.DONE]

        click.echo("\nCheckpoint Information")
        click.echo("=" * 50)
        click.echo(f"Checkpoint directory: {self.checkpoints.checkpoint_dir}")
        click.echo(f"Prefix: {self.layout.prefix}")
        click.echo("-" * 50)
        click.echo(f"Progress: {len(done)}/{len(self.STAGES)} stages completed")
        if done:
            click.echo(f"Completed: {', '.join(done)}")
        pending = [name for name in summary if name not in done]
        if pending:
            click.echo(f"Next stage: {pending[0]}")

        for role in SampleRole:
            cached = self.checkpoints.read_cached_value(role.cache_key)
            click.echo(f"{role.label} spike-in count: {cached if cached else 'not cached'}")
        click.echo("=" * 50)
