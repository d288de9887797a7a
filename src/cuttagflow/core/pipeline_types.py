"""Shared pipeline types.

This module intentionally contains only lightweight dataclasses/enums so it
can be imported by stage definitions without pulling in the pipeline
implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class SampleRole(Enum):
    """The two sample roles of a Cut&Tag comparison."""

    TREATMENT = "treatment"
    CONTROL = "control"

    @property
    def label(self) -> str:
        """Name used in sample identifiers and file names."""
        return "Treatment" if self is SampleRole.TREATMENT else "Control"

    @property
    def cache_key(self) -> str:
        """Key of the spike-in count cache file."""
        return "treat" if self is SampleRole.TREATMENT else "ctrl"


class StageStatus(Enum):
    """Completion state of a stage (DONE iff its marker file exists)."""

    PENDING = "pending"
    DONE = "done"


@dataclass(frozen=True)
class Sample:
    """One paired-end sample."""

    role: SampleRole
    read1: Path
    read2: Path
    prefix: str

    @property
    def sample_id(self) -> str:
        return f"{self.prefix}_{self.role.label}"


@dataclass(frozen=True)
class SampleArtifacts:
    """Per-sample intermediate and output files."""

    clean_r1: Path
    clean_r2: Path
    fastp_html: Path
    fastp_json: Path
    spikein_sam: Path
    spikein_bam: Path
    norm_r1: Path
    norm_r2: Path
    norm_r1_ids: Path
    genome_sam: Path
    genome_bam: Path
    dedup_bam: Path
    dedup_metrics: Path
    dedup_log: Path
    bigwig: Path


@dataclass(frozen=True)
class PipelineStage:
    """A named unit of work in the fixed pipeline order."""

    number: int
    name: str
    description: str
    paired: bool = False

    @property
    def label(self) -> str:
        return f"{self.number}_{self.name}"


@dataclass
class PipelineResult:
    """Outcome of a pipeline run."""

    executed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    spikein_counts: Dict[str, int] = field(default_factory=dict)
    norm_factors: Dict[str, str] = field(default_factory=dict)
    peak_file: Optional[Path] = None
