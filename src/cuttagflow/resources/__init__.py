"""Resource files and configuration templates."""


def get_default_config() -> str:
    """Return default configuration YAML content."""
    return """# CutTagFlow Configuration File

# Inputs (can be overridden by CLI arguments)
treat_r1: ~
treat_r2: ~
ctrl_r1: ~
ctrl_r2: ~
genome_fasta: ~
genome_gff: ~
spikein_fasta: ~
output_dir: "."
prefix: ~

# Runtime settings
runtime:
  log_level: "WARNING"
  log_file: ~
  enable_progress: true
  # Rebuild .fai / bowtie2 / TSS files when the source is newer.
  # Default false: existing artifacts are reused even if stale.
  rebuild_stale_indices: false

# Performance settings
performance:
  threads: 16

# External tool parameters
tools:
  bin_size: 10
  tss_upstream: 2000
  tss_downstream: 2000
  tss_feature_types: [gene, transcript, mRNA, lnc_RNA, lncRNA, miRNA, rRNA, tRNA]
  annotation_exclude_types: [gene, transcript, chromosome]
  seqkit:
    seed: 11
  macs2:
    format: "BAMPE"
  picard:
    remove_duplicates: true
"""
