"""External tool wrappers (CutTagFlow).

This package provides Python wrappers for the external bioinformatics tools
the pipeline drives:
- fastp: read trimming
- Bowtie2 / bowtie2-build: alignment and index construction
- Samtools: FASTA index, BAM sort/index, read counting
- SeqKit: proportional subsampling
- Picard: duplicate removal
- deepTools: coverage tracks, TSS matrices and plots
- MACS2: peak calling
- bedtools: peak annotation
- HOMER: motif discovery
"""

from cuttagflow.external.base import ExternalTool
from cuttagflow.external.bedtools import Bedtools
from cuttagflow.external.bowtie2 import Bowtie2, Bowtie2Build
from cuttagflow.external.deeptools import BamCoverage, ComputeMatrix, PlotHeatmap, PlotProfile
from cuttagflow.external.fastp import Fastp
from cuttagflow.external.homer import FindMotifsGenome
from cuttagflow.external.macs2 import Macs2
from cuttagflow.external.picard import Picard
from cuttagflow.external.samtools import Samtools
from cuttagflow.external.seqkit import Seqkit

__all__ = [
    "ExternalTool",
    "BamCoverage",
    "Bedtools",
    "Bowtie2",
    "Bowtie2Build",
    "ComputeMatrix",
    "Fastp",
    "FindMotifsGenome",
    "Macs2",
    "Picard",
    "PlotHeatmap",
    "PlotProfile",
    "Samtools",
    "Seqkit",
]
