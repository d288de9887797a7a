"""Core orchestration: stage definitions, checkpoints, runner and driver."""

from cuttagflow.core.checkpoint import CheckpointStore
from cuttagflow.core.normalization import NormalizationFactors, compute_normalization_factors
from cuttagflow.core.pipeline_types import PipelineStage, Sample, SampleRole, StageStatus
from cuttagflow.core.runner import StageRunner

__all__ = [
    "CheckpointStore",
    "NormalizationFactors",
    "PipelineStage",
    "Sample",
    "SampleRole",
    "StageRunner",
    "StageStatus",
    "compute_normalization_factors",
]
