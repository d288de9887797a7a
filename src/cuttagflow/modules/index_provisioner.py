"""Idempotent construction of reference-derived artifacts.

Three artifacts are derived from the user's reference files:

- the FASTA index (``<genome.fa>.fai``), also used for the genome size;
- bowtie2 indices for the genome and the spike-in, stored next to each
  FASTA with the FASTA path as index prefix;
- the TSS BED (``<annotation>.tss.bed``).

Each is built only when absent. Presence is judged by file existence: an
artifact built from an older version of its source is reused as-is unless
``rebuild_stale`` is enabled, in which case an artifact older than its
source (by modification time) is rebuilt. A failed build leaves whatever
the tool wrote on disk; remove it before retrying.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from cuttagflow.constants import (
    BOWTIE2_INDEX_SUFFIXES,
    FASTA_INDEX_SUFFIX,
    TSS_BED_SUFFIX,
    TSS_FEATURE_TYPES,
)
from cuttagflow.exceptions import ExternalToolError, IndexBuildError
from cuttagflow.modules.tss import write_tss_bed
from cuttagflow.utils.logging import LogTemplates, get_logger


@dataclass(frozen=True)
class ReferenceIndex:
    """Resolved reference artifacts shared (read-only) by every stage."""

    genome_fasta: Path
    genome_index: Path
    spikein_index: Path
    tss_bed: Path
    genome_size: int


def _with_suffix(path: Path, suffix: str) -> Path:
    return Path(str(path) + suffix)


class IndexProvisioner:
    """Build missing reference indices, reusing existing ones."""

    def __init__(
        self,
        threads: int = 1,
        rebuild_stale: bool = False,
        samtools=None,
        bowtie2_build=None,
        logger: Optional[logging.Logger] = None,
    ):
        self.threads = threads
        self.rebuild_stale = rebuild_stale
        self.logger = logger or get_logger("index_provisioner")
        self._samtools = samtools
        self._bowtie2_build = bowtie2_build

    @property
    def samtools(self):
        if self._samtools is None:
            from cuttagflow.external.samtools import Samtools

            self._samtools = Samtools(threads=self.threads)
        return self._samtools

    @property
    def bowtie2_build(self):
        if self._bowtie2_build is None:
            from cuttagflow.external.bowtie2 import Bowtie2Build

            self._bowtie2_build = Bowtie2Build(threads=self.threads)
        return self._bowtie2_build

    def _is_current(self, artifact: Path, source: Path) -> bool:
        """True if the artifact exists and (when checking staleness) is not older than source."""
        if not artifact.exists():
            return False
        if self.rebuild_stale and artifact.stat().st_mtime < source.stat().st_mtime:
            self.logger.warning(f"{artifact} is older than {source}; rebuilding")
            return False
        return True

    def ensure_sequence_index(self, fasta: Path) -> Path:
        """Return ``<fasta>.fai``, running ``samtools faidx`` first if needed."""
        fasta = Path(fasta)
        fai = _with_suffix(fasta, FASTA_INDEX_SUFFIX)
        if self._is_current(fai, fasta):
            self.logger.info(LogTemplates.INDEX_FOUND.format(kind="FASTA index", path=fai))
            return fai

        self.logger.info(LogTemplates.INDEX_BUILD.format(kind="FASTA index", path=fai))
        try:
            self.samtools.faidx(fasta)
        except ExternalToolError as exc:
            raise IndexBuildError(f"samtools faidx failed for {fasta}: {exc}") from exc
        if not fai.exists():
            raise IndexBuildError(f"samtools faidx did not produce {fai}")
        return fai

    def find_aligner_index(self, fasta: Path) -> Optional[Path]:
        """Return the first bowtie2 index marker file present for a FASTA prefix."""
        for suffix in BOWTIE2_INDEX_SUFFIXES:
            candidate = _with_suffix(Path(fasta), suffix)
            if candidate.exists():
                return candidate
        return None

    def ensure_aligner_index(self, fasta: Path, threads: Optional[int] = None) -> Path:
        """Return the bowtie2 index prefix for a FASTA, building the index if absent.

        The prefix is the FASTA path itself, so the index lives next to it.
        """
        fasta = Path(fasta)
        marker = self.find_aligner_index(fasta)
        if marker is not None and self._is_current(marker, fasta):
            self.logger.info(LogTemplates.INDEX_FOUND.format(kind="bowtie2 index", path=fasta))
            return fasta

        self.logger.info(LogTemplates.INDEX_BUILD.format(kind="bowtie2 index", path=fasta))
        if threads is not None:
            self.bowtie2_build.threads = threads
        try:
            self.bowtie2_build.build(fasta, fasta)
        except ExternalToolError as exc:
            raise IndexBuildError(
                f"bowtie2-build failed for {fasta}: {exc}. "
                "Remove any partial *.bt2 files before retrying."
            ) from exc
        if self.find_aligner_index(fasta) is None:
            raise IndexBuildError(f"bowtie2-build did not produce an index for {fasta}")
        return fasta

    def ensure_tss_coordinates(
        self,
        annotation: Path,
        feature_types: Sequence[str] = TSS_FEATURE_TYPES,
    ) -> Path:
        """Return ``<annotation>.tss.bed``, deriving it from the annotation if absent."""
        annotation = Path(annotation)
        tss_bed = _with_suffix(annotation, TSS_BED_SUFFIX)
        if self._is_current(tss_bed, annotation):
            self.logger.info(LogTemplates.INDEX_FOUND.format(kind="TSS BED", path=tss_bed))
            return tss_bed

        self.logger.info(LogTemplates.INDEX_BUILD.format(kind="TSS BED", path=tss_bed))
        write_tss_bed(annotation, tss_bed, feature_types)
        return tss_bed

    @staticmethod
    def genome_size(fai: Path) -> int:
        """Total sequence length listed in a FASTA index."""
        lengths = pd.read_csv(fai, sep="\t", header=None, usecols=[1], dtype={1: "int64"})
        return int(lengths[1].sum())

    def provision(
        self,
        genome_fasta: Path,
        spikein_fasta: Path,
        annotation: Path,
        feature_types: Sequence[str] = TSS_FEATURE_TYPES,
    ) -> ReferenceIndex:
        """Ensure every reference artifact exists and return their locations."""
        fai = self.ensure_sequence_index(genome_fasta)
        genome_size = self.genome_size(fai)
        self.logger.info(f"Genome size: {genome_size:,} bp")

        genome_index = self.ensure_aligner_index(genome_fasta, self.threads)
        spikein_index = self.ensure_aligner_index(spikein_fasta, self.threads)
        tss_bed = self.ensure_tss_coordinates(annotation, feature_types)

        return ReferenceIndex(
            genome_fasta=Path(genome_fasta),
            genome_index=genome_index,
            spikein_index=spikein_index,
            tss_bed=tss_bed,
            genome_size=genome_size,
        )
