"""Unified constants for CutTagFlow.

Directory names, file suffixes and analysis defaults shared across the
layout, index provisioning and stage modules.
"""

# ================== Output Directory Layout ==================
DIR_CHECKPOINT: str = "0_Checkpoints"
DIR_QC: str = "1_QualityControl"
DIR_SPIKEIN: str = "2_SpikeIn_Alignment"
DIR_NORM: str = "3_Normalized_Fastq"
DIR_GENOME: str = "4_Genome_Alignment"
DIR_BIGWIG: str = "5_BigWig"
DIR_PEAKS: str = "6_PeakCalling"
DIR_ANNOTATION: str = "7_Annotation"
DIR_METAPLOT: str = "8_Metaplot"
DIR_MOTIF: str = "9_Motif"

OUTPUT_DIRS: tuple = (
    DIR_CHECKPOINT,
    DIR_QC,
    DIR_SPIKEIN,
    DIR_NORM,
    DIR_GENOME,
    DIR_BIGWIG,
    DIR_PEAKS,
    DIR_ANNOTATION,
    DIR_METAPLOT,
    DIR_MOTIF,
)

# ================== Derived Reference Artifacts ==================
FASTA_INDEX_SUFFIX: str = ".fai"
# bowtie2-build writes <prefix>.1.bt2 (or .1.bt2l for large genomes)
BOWTIE2_INDEX_SUFFIXES: tuple = (".1.bt2", ".1.bt2l")
TSS_BED_SUFFIX: str = ".tss.bed"

# ================== Annotation Feature Types ==================
# Gene-like GFF feature kinds whose start sites are used for metaplots
TSS_FEATURE_TYPES: tuple = (
    "gene",
    "transcript",
    "mRNA",
    "lnc_RNA",
    "lncRNA",
    "miRNA",
    "rRNA",
    "tRNA",
)

# Feature kinds removed before intersecting peaks with the annotation
ANNOTATION_EXCLUDE_TYPES: tuple = ("gene", "transcript", "chromosome")

# Consecutive annotation rows sharing this many leading characters are collapsed
ANNOTATION_UNIQ_WIDTH: int = 40

# ================== Normalization ==================
# Decimal places of spike-in normalization factors (truncated, not rounded)
NORM_FACTOR_PRECISION: int = 6

# ================== Analysis Defaults ==================
DEFAULT_THREADS: int = 16
DEFAULT_BIN_SIZE: int = 10
DEFAULT_TSS_UPSTREAM: int = 2000
DEFAULT_TSS_DOWNSTREAM: int = 2000
DEFAULT_SAMPLING_SEED: int = 11
