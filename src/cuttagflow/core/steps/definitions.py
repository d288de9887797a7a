"""Canonical stage ordering and user-facing metadata."""

from __future__ import annotations

from cuttagflow.core.pipeline_types import PipelineStage


# Fixed stage order. Stage numbers are part of the checkpoint marker names
# (<prefix>.<number>_<name>.done) and must not change between releases.
PIPELINE_STAGES: list[PipelineStage] = [
    PipelineStage(
        1,
        "qc",
        "Trim and quality-check reads (fastp)",
        paired=True,
    ),
    PipelineStage(
        2,
        "spikein",
        "Align to spike-in genome and count mapped reads",
        paired=True,
    ),
    PipelineStage(
        3,
        "genome",
        "Subsample by spike-in factor, align, deduplicate, bigWig",
        paired=True,
    ),
    PipelineStage(
        4,
        "peakcall",
        "Call peaks, treatment vs control (MACS2)",
    ),
    PipelineStage(
        5,
        "annotation",
        "Annotate peaks with overlapping features (bedtools)",
    ),
    PipelineStage(
        6,
        "metaplot",
        "TSS profile and heatmap (deepTools)",
    ),
    PipelineStage(
        7,
        "motif",
        "Motif discovery in peaks (HOMER)",
    ),
]

STAGES_BY_NAME: dict[str, PipelineStage] = {stage.name: stage for stage in PIPELINE_STAGES}
