"""Tests for the output tree and artifact naming."""

from pathlib import Path

from cuttagflow.constants import OUTPUT_DIRS
from cuttagflow.core.layout import OutputLayout
from cuttagflow.core.pipeline_types import Sample, SampleRole


def test_create_builds_all_directories(tmp_path):
    layout = OutputLayout(tmp_path / "out", "exp")
    layout.create()
    layout.create()
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == sorted(OUTPUT_DIRS)


def test_sample_artifact_names(tmp_path):
    layout = OutputLayout(tmp_path, "exp")
    sample = Sample(SampleRole.CONTROL, Path("c1.fq"), Path("c2.fq"), "exp")
    art = layout.artifacts(sample)

    assert art.clean_r1 == tmp_path / "1_QualityControl" / "exp_Control_R1.clean.fq.gz"
    assert art.spikein_bam == tmp_path / "2_SpikeIn_Alignment" / "exp_Control-spikein.sort.bam"
    assert art.norm_r2 == tmp_path / "3_Normalized_Fastq" / "exp_Control_R2.clean.spk-norm.fq.gz"
    assert art.dedup_bam == tmp_path / "4_Genome_Alignment" / "exp_Control.sort.rmdup.bam"
    assert art.bigwig == tmp_path / "5_BigWig" / "exp_Control.bigWig"


def test_run_level_outputs(tmp_path):
    layout = OutputLayout(tmp_path, "exp")
    assert layout.peak_file == tmp_path / "6_PeakCalling" / "exp_peaks.narrowPeak"
    assert layout.peak_annotation.parent.name == "7_Annotation"
    assert layout.tss_matrix.name == "exp.TSS.gz"
    assert layout.homer_log == tmp_path / "9_Motif" / "exp" / "exp-homer.log"
