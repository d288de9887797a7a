"""Stage executors for read QC and spike-in alignment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cuttagflow.core.pipeline_types import Sample, SampleRole
from cuttagflow.exceptions import PipelineError, SpikeinCountError

if TYPE_CHECKING:
    from cuttagflow.core.pipeline import Pipeline


def check_dependencies(pipeline: Pipeline) -> None:
    """Resolve every external tool before any data is touched."""
    from cuttagflow.utils.dependency_checker import DependencyChecker

    checker = DependencyChecker(logger=pipeline.logger.getChild("dependency_checker"))
    if not checker.check_all():
        checker.print_report()
        checker.raise_if_missing_required()

    pipeline.logger.info("All required dependencies are available")


def run_qc_sample(pipeline: Pipeline, sample: Sample) -> None:
    """Stage 1 (one sample): trim reads with fastp."""
    from cuttagflow.external.fastp import Fastp

    artifacts = pipeline.layout.artifacts(sample)
    fastp = Fastp(threads=pipeline.config.threads)
    fastp.trim_paired(
        read1=sample.read1,
        read2=sample.read2,
        out_read1=artifacts.clean_r1,
        out_read2=artifacts.clean_r2,
        html_report=artifacts.fastp_html,
        json_report=artifacts.fastp_json,
    )


def run_spikein_sample(pipeline: Pipeline, sample: Sample) -> int:
    """Stage 2 (one sample): align to the spike-in genome and cache the mapped count."""
    from cuttagflow.external.bowtie2 import Bowtie2
    from cuttagflow.external.samtools import Samtools

    artifacts = pipeline.layout.artifacts(sample)
    threads = pipeline.config.threads

    Bowtie2(threads=threads).align_paired(
        index_prefix=pipeline.references.spikein_index,
        read1=artifacts.clean_r1,
        read2=artifacts.clean_r2,
        output_sam=artifacts.spikein_sam,
    )

    samtools = Samtools(threads=threads)
    samtools.sort_bam(artifacts.spikein_sam, artifacts.spikein_bam)
    samtools.index_bam(artifacts.spikein_bam)
    artifacts.spikein_sam.unlink(missing_ok=True)

    count = samtools.count_mapped(artifacts.spikein_bam)
    pipeline.checkpoints.cache_count(sample.role, count)
    pipeline.logger.info(f"{sample.sample_id} spike-in reads: {count:,}")
    return count


def verify_spikein_counts(pipeline: Pipeline) -> dict[SampleRole, int]:
    """Both count caches must be readable before the spike-in stage is marked done."""
    try:
        return {role: pipeline.checkpoints.read_count(role) for role in SampleRole}
    except SpikeinCountError as exc:
        raise PipelineError(f"Spike-in stage produced no usable count: {exc}") from exc
