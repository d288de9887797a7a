"""Stage executor for spike-in-normalized genome alignment.

Per sample, strictly in order:

1. subsample cleaned R1 by the normalization factor (seqkit sample);
2. select the matching R2 mates by read identifier (seqkit grep);
3. align to the genome with a read group named after the sample;
4. sort and index, then drop the raw SAM;
5. remove PCR duplicates (picard MarkDuplicates), index the result and
   drop the pre-deduplication BAM;
6. write an RPGC-normalized bigWig (bamCoverage).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from cuttagflow.core.pipeline_types import Sample
from cuttagflow.exceptions import PipelineError
from cuttagflow.modules.fastq import write_read_ids

if TYPE_CHECKING:
    from cuttagflow.core.pipeline import Pipeline


def _remove_bam(bam: Path) -> None:
    bam.unlink(missing_ok=True)
    Path(f"{bam}.bai").unlink(missing_ok=True)


def run_genome_sample(pipeline: Pipeline, sample: Sample) -> None:
    """Stage 3 (one sample)."""
    from cuttagflow.external.bowtie2 import Bowtie2
    from cuttagflow.external.deeptools import BamCoverage
    from cuttagflow.external.picard import Picard
    from cuttagflow.external.samtools import Samtools
    from cuttagflow.external.seqkit import Seqkit

    factors = pipeline.norm_factors
    if factors is None:
        raise PipelineError("Normalization factors must be computed before genome alignment")

    cfg = pipeline.config
    tools = cfg.tools
    artifacts = pipeline.layout.artifacts(sample)
    threads = cfg.threads
    logger = pipeline.logger

    seqkit = Seqkit(threads=threads)
    seqkit.sample(
        artifacts.clean_r1,
        artifacts.norm_r1,
        proportion=factors.as_argument(sample.role),
        seed=tools.seqkit.get("seed"),
    )
    kept = write_read_ids(artifacts.norm_r1, artifacts.norm_r1_ids)
    logger.info(f"{sample.sample_id}: {kept:,} read pairs kept after normalization")
    seqkit.grep_ids(artifacts.norm_r1_ids, artifacts.clean_r2, artifacts.norm_r2)

    Bowtie2(threads=threads).align_paired(
        index_prefix=pipeline.references.genome_index,
        read1=artifacts.norm_r1,
        read2=artifacts.norm_r2,
        output_sam=artifacts.genome_sam,
        read_group=sample.sample_id,
    )

    samtools = Samtools(threads=threads)
    samtools.sort_bam(artifacts.genome_sam, artifacts.genome_bam)
    samtools.index_bam(artifacts.genome_bam)
    artifacts.genome_sam.unlink(missing_ok=True)

    Picard().mark_duplicates(
        input_bam=artifacts.genome_bam,
        output_bam=artifacts.dedup_bam,
        metrics_file=artifacts.dedup_metrics,
        log_file=artifacts.dedup_log,
        remove_duplicates=bool(tools.picard.get("remove_duplicates", True)),
    )
    samtools.index_bam(artifacts.dedup_bam)
    _remove_bam(artifacts.genome_bam)

    BamCoverage(threads=threads).to_bigwig(
        bam_file=artifacts.dedup_bam,
        output_bigwig=artifacts.bigwig,
        bin_size=tools.bin_size,
        effective_genome_size=pipeline.references.genome_size,
    )
