"""Output directory tree and artifact naming."""

from __future__ import annotations

from pathlib import Path

from cuttagflow import constants as C
from cuttagflow.core.pipeline_types import Sample, SampleArtifacts


class OutputLayout:
    """Paths of every directory and file a run produces under one output root."""

    def __init__(self, root: Path, prefix: str):
        self.root = Path(root)
        self.prefix = prefix

        self.checkpoint_dir = self.root / C.DIR_CHECKPOINT
        self.qc_dir = self.root / C.DIR_QC
        self.spikein_dir = self.root / C.DIR_SPIKEIN
        self.norm_dir = self.root / C.DIR_NORM
        self.genome_dir = self.root / C.DIR_GENOME
        self.bigwig_dir = self.root / C.DIR_BIGWIG
        self.peaks_dir = self.root / C.DIR_PEAKS
        self.annotation_dir = self.root / C.DIR_ANNOTATION
        self.metaplot_dir = self.root / C.DIR_METAPLOT
        self.motif_dir = self.root / C.DIR_MOTIF

    def directories(self) -> list[Path]:
        return [self.root / name for name in C.OUTPUT_DIRS]

    def create(self) -> None:
        for directory in self.directories():
            directory.mkdir(parents=True, exist_ok=True)

    def artifacts(self, sample: Sample) -> SampleArtifacts:
        sid = sample.sample_id
        return SampleArtifacts(
            clean_r1=self.qc_dir / f"{sid}_R1.clean.fq.gz",
            clean_r2=self.qc_dir / f"{sid}_R2.clean.fq.gz",
            fastp_html=self.qc_dir / f"{sid}.fastp.html",
            fastp_json=self.qc_dir / f"{sid}.fastp.json",
            spikein_sam=self.spikein_dir / f"{sid}-spikein.sam",
            spikein_bam=self.spikein_dir / f"{sid}-spikein.sort.bam",
            norm_r1=self.norm_dir / f"{sid}_R1.clean.spk-norm.fq.gz",
            norm_r2=self.norm_dir / f"{sid}_R2.clean.spk-norm.fq.gz",
            norm_r1_ids=self.norm_dir / f"{sid}_R1.spk-norm.ids.txt",
            genome_sam=self.genome_dir / f"{sid}.sam",
            genome_bam=self.genome_dir / f"{sid}.sort.bam",
            dedup_bam=self.genome_dir / f"{sid}.sort.rmdup.bam",
            dedup_metrics=self.genome_dir / f"{sid}_markdup_metrics.txt",
            dedup_log=self.genome_dir / f"{sid}.rmdup.log",
            bigwig=self.bigwig_dir / f"{sid}.bigWig",
        )

    # ---- run-level outputs ----
    @property
    def peak_file(self) -> Path:
        return self.peaks_dir / f"{self.prefix}_peaks.narrowPeak"

    @property
    def macs2_log(self) -> Path:
        return self.peaks_dir / f"{self.prefix}-macs2.log"

    @property
    def annotation_features(self) -> Path:
        return self.annotation_dir / f"{self.prefix}.annotation_features.gff"

    @property
    def annotation_joined(self) -> Path:
        return self.annotation_dir / f"{self.prefix}_peaks.intersect.txt"

    @property
    def peak_annotation(self) -> Path:
        return self.annotation_dir / f"{self.prefix}_peaks.annotated.txt"

    @property
    def tss_matrix(self) -> Path:
        return self.metaplot_dir / f"{self.prefix}.TSS.gz"

    @property
    def tss_profile(self) -> Path:
        return self.metaplot_dir / f"{self.prefix}.TSS.profile.pdf"

    @property
    def tss_heatmap(self) -> Path:
        return self.metaplot_dir / f"{self.prefix}.TSS.heatmap.pdf"

    @property
    def motif_run_dir(self) -> Path:
        return self.motif_dir / self.prefix

    @property
    def homer_log(self) -> Path:
        return self.motif_run_dir / f"{self.prefix}-homer.log"

    @property
    def config_snapshot(self) -> Path:
        return self.checkpoint_dir / f"{self.prefix}.config.yaml"
