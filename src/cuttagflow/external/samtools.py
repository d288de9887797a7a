"""Samtools wrapper."""

from pathlib import Path

from cuttagflow.exceptions import ExternalToolError
from cuttagflow.external.base import ExternalTool


class Samtools(ExternalTool):
    """Samtools FASTA/BAM manipulation."""

    tool_name = "samtools"

    def sort_bam(self, input_sam: Path, output_bam: Path) -> None:
        """Coordinate-sort a SAM/BAM file into BAM."""
        cmd = [
            self.tool_name, "sort",
            "-@", str(self.threads),
            "-O", "bam",
            "-o", str(output_bam),
            str(input_sam),
        ]

        output_bam.parent.mkdir(parents=True, exist_ok=True)
        stdout, stderr = self.run(cmd, capture_output=True)
        if stdout:
            self.logger.debug(f"samtools sort output: {stdout[:500]}")
        self.logger.info(f"Sorted BAM saved to: {output_bam}")

    def index_bam(self, bam_file: Path) -> None:
        """Index BAM file."""
        cmd = [self.tool_name, "index", str(bam_file)]

        stdout, stderr = self.run(cmd, capture_output=True)
        if stdout:
            self.logger.debug(f"samtools index output: {stdout[:500]}")
        self.logger.info(f"BAM index created: {bam_file}.bai")

    def faidx(self, reference_fasta: Path) -> None:
        """Create FASTA index (.fai) for a reference."""
        cmd = [self.tool_name, "faidx", str(reference_fasta)]
        stdout, stderr = self.run(cmd, capture_output=True)
        if stdout:
            self.logger.debug(f"samtools faidx output: {stdout[:500]}")
        self.logger.info(f"Reference index created: {reference_fasta}.fai")

    def count_mapped(self, bam_file: Path) -> int:
        """Count mapped records (`samtools view -c -F 4`)."""
        cmd = [self.tool_name, "view", "-c", "-F", "4", str(bam_file)]
        stdout, _ = self.run(cmd, capture_output=True)
        text = stdout.strip()
        try:
            count = int(text)
        except ValueError:
            raise ExternalToolError(
                f"samtools view -c returned a non-integer count: {text!r}",
                command=cmd,
            )
        self.logger.info(f"Mapped reads in {bam_file.name}: {count:,}")
        return count
