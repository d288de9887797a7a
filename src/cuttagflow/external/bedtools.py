"""bedtools wrapper."""

from pathlib import Path

from cuttagflow.external.base import ExternalTool


class Bedtools(ExternalTool):
    """bedtools interval operations."""

    tool_name = "bedtools"

    def intersect_loj(self, a_file: Path, b_file: Path, output_file: Path) -> None:
        """Left outer join of A with B (`intersect -wa -wb -loj`), written to output_file."""
        cmd = [
            self.tool_name, "intersect",
            "-a", str(a_file),
            "-b", str(b_file),
            "-wa", "-wb", "-loj",
        ]
        self.run(cmd, stdout_file=output_file)
        self.logger.info(f"Intersection written: {output_file}")
