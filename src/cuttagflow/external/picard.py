"""Picard wrapper."""

from pathlib import Path

from cuttagflow.external.base import ExternalTool


class Picard(ExternalTool):
    """Picard MarkDuplicates."""

    tool_name = "picard"

    def mark_duplicates(
        self,
        input_bam: Path,
        output_bam: Path,
        metrics_file: Path,
        log_file: Path,
        remove_duplicates: bool = True,
    ) -> None:
        """Mark (and by default drop) duplicate reads."""
        cmd = [
            self.tool_name, "MarkDuplicates",
            "--REMOVE_DUPLICATES", "true" if remove_duplicates else "false",
            "-I", str(input_bam),
            "-O", str(output_bam),
            "-M", str(metrics_file),
        ]
        self.run(cmd, log_file=log_file)
        self.logger.info(f"Deduplicated BAM saved to: {output_bam}")
