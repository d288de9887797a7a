"""SeqKit wrapper for proportional subsampling and ID-based selection."""

from pathlib import Path
from typing import Optional

from cuttagflow.external.base import ExternalTool


class Seqkit(ExternalTool):
    """SeqKit FASTQ subsampling."""

    tool_name = "seqkit"

    def sample(
        self,
        input_fastq: Path,
        output_fastq: Path,
        proportion: str,
        seed: Optional[int] = None,
    ) -> None:
        """Keep each record with probability `proportion`."""
        cmd = [self.tool_name, "sample", "-p", proportion]
        if seed is not None:
            cmd.extend(["-s", str(seed)])
        cmd.extend(["-j", str(self.threads), "-o", str(output_fastq), str(input_fastq)])

        output_fastq.parent.mkdir(parents=True, exist_ok=True)
        self.run(cmd, capture_output=True)
        self.logger.info(f"Subsampled {input_fastq.name} at {proportion} -> {output_fastq.name}")

    def grep_ids(self, pattern_file: Path, input_fastq: Path, output_fastq: Path) -> None:
        """Keep records whose ID is listed in `pattern_file` (one per line)."""
        cmd = [
            self.tool_name, "grep",
            "-f", str(pattern_file),
            "-j", str(self.threads),
            "-o", str(output_fastq),
            str(input_fastq),
        ]
        output_fastq.parent.mkdir(parents=True, exist_ok=True)
        self.run(cmd, capture_output=True)
        self.logger.info(f"Selected mates from {input_fastq.name} -> {output_fastq.name}")
