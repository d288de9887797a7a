"""Bowtie2 wrappers (index build and paired-end alignment)."""

from pathlib import Path
from typing import Optional

from cuttagflow.external.base import ExternalTool


class Bowtie2Build(ExternalTool):
    """bowtie2-build index construction."""

    tool_name = "bowtie2-build"

    def build(self, reference_fasta: Path, index_prefix: Path) -> None:
        """Build a bowtie2 index for a FASTA under the given prefix."""
        cmd = [
            self.tool_name,
            "--threads", str(self.threads),
            str(reference_fasta),
            str(index_prefix),
        ]
        self.run(cmd, capture_output=True)
        self.logger.info(f"Bowtie2 index built: {index_prefix}")


class Bowtie2(ExternalTool):
    """bowtie2 paired-end aligner."""

    tool_name = "bowtie2"

    def align_paired(
        self,
        index_prefix: Path,
        read1: Path,
        read2: Path,
        output_sam: Path,
        read_group: Optional[str] = None,
    ) -> str:
        """Align a read pair; returns bowtie2's alignment summary (stderr)."""
        cmd = [
            self.tool_name,
            "-p", str(self.threads),
            "-x", str(index_prefix),
            "-1", str(read1),
            "-2", str(read2),
        ]
        if read_group:
            cmd.extend(["--rg-id", read_group, "--rg", f"SM:{read_group}"])
        cmd.extend(["-S", str(output_sam)])

        output_sam.parent.mkdir(parents=True, exist_ok=True)
        _, stderr = self.run(cmd, capture_output=True)
        if stderr:
            self.logger.debug(f"bowtie2 summary:\n{stderr.strip()}")
        return stderr
