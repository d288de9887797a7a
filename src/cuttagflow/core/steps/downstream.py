"""Stage executors that combine both samples: peaks, annotation, metaplot, motifs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cuttagflow.core.pipeline_types import SampleRole
from cuttagflow.exceptions import PipelineError
from cuttagflow.modules.annotation import collapse_annotation_table, filter_annotation_features

if TYPE_CHECKING:
    from cuttagflow.core.pipeline import Pipeline

HEATMAP_COLORS = ("white,red", "white,blue")


def _require_peaks(pipeline: Pipeline):
    peaks = pipeline.layout.peak_file
    if not peaks.exists():
        raise PipelineError(f"Peak file not found: {peaks}")
    return peaks


def peak_calling(pipeline: Pipeline) -> None:
    """Stage 4: MACS2 treatment vs control."""
    from cuttagflow.external.macs2 import Macs2

    layout = pipeline.layout
    treatment = layout.artifacts(pipeline.samples[SampleRole.TREATMENT])
    control = layout.artifacts(pipeline.samples[SampleRole.CONTROL])

    peaks = Macs2().callpeak(
        treatment_bam=treatment.dedup_bam,
        control_bam=control.dedup_bam,
        genome_size=pipeline.references.genome_size,
        outdir=layout.peaks_dir,
        name=layout.prefix,
        log_file=layout.macs2_log,
        input_format=str(pipeline.config.tools.macs2.get("format", "BAMPE")),
    )
    if not peaks.exists():
        raise PipelineError(f"MACS2 finished but {peaks} was not written")


def annotation(pipeline: Pipeline) -> None:
    """Stage 5: overlap peaks with fine-grained annotation features."""
    from cuttagflow.external.bedtools import Bedtools

    layout = pipeline.layout
    peaks = _require_peaks(pipeline)

    kept = filter_annotation_features(
        pipeline.config.genome_gff,
        layout.annotation_features,
        pipeline.config.tools.annotation_exclude_types,
    )
    pipeline.logger.debug(f"{kept:,} annotation features used for peak annotation")

    Bedtools().intersect_loj(peaks, layout.annotation_features, layout.annotation_joined)
    rows = collapse_annotation_table(layout.annotation_joined, layout.peak_annotation)
    pipeline.logger.info(f"Annotated {rows:,} peaks: {layout.peak_annotation}")


def metaplot(pipeline: Pipeline) -> None:
    """Stage 6: TSS-centred signal profile and heatmap for both samples."""
    from cuttagflow.external.deeptools import ComputeMatrix, PlotHeatmap, PlotProfile

    layout = pipeline.layout
    tools = pipeline.config.tools
    bigwigs = [layout.artifacts(pipeline.samples[role]).bigwig for role in SampleRole]

    ComputeMatrix(threads=pipeline.config.threads).reference_point(
        bigwigs=bigwigs,
        regions_bed=pipeline.references.tss_bed,
        output_matrix=layout.tss_matrix,
        upstream=tools.tss_upstream,
        downstream=tools.tss_downstream,
    )
    PlotProfile().plot(layout.tss_matrix, layout.tss_profile)
    PlotHeatmap().plot(layout.tss_matrix, layout.tss_heatmap, HEATMAP_COLORS)


def motif(pipeline: Pipeline) -> None:
    """Stage 7: HOMER motif discovery on the called peaks."""
    from cuttagflow.external.homer import FindMotifsGenome

    layout = pipeline.layout
    peaks = _require_peaks(pipeline)

    FindMotifsGenome(threads=pipeline.config.threads).find_motifs(
        peak_file=peaks,
        genome_fasta=pipeline.references.genome_fasta,
        output_dir=layout.motif_run_dir,
        log_file=layout.homer_log,
    )
