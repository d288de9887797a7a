"""Processing modules (CutTagFlow).

- index_provisioner: FASTA / bowtie2 / TSS artifacts
- tss: TSS BED derivation from GFF/GTF
- annotation: annotation feature filtering and join collapsing
- fastq: read identifiers for mate-consistent subsampling
"""

from cuttagflow.modules.index_provisioner import IndexProvisioner, ReferenceIndex
from cuttagflow.modules.tss import TSSRecord, extract_tss_records, write_tss_bed

__all__ = [
    "IndexProvisioner",
    "ReferenceIndex",
    "TSSRecord",
    "extract_tss_records",
    "write_tss_bed",
]
