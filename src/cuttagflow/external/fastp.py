"""fastp wrapper."""

from pathlib import Path

from cuttagflow.external.base import ExternalTool


class Fastp(ExternalTool):
    """fastp paired-end trimming and QC reporting."""

    tool_name = "fastp"

    def trim_paired(
        self,
        read1: Path,
        read2: Path,
        out_read1: Path,
        out_read2: Path,
        html_report: Path,
        json_report: Path,
    ) -> None:
        """Trim a read pair, writing cleaned reads plus HTML/JSON reports."""
        cmd = [
            self.tool_name,
            "-i", str(read1),
            "-I", str(read2),
            "-o", str(out_read1),
            "-O", str(out_read2),
            "-h", str(html_report),
            "-j", str(json_report),
            "-w", str(self.threads),
        ]
        out_read1.parent.mkdir(parents=True, exist_ok=True)
        self.run(cmd, capture_output=True)
        self.logger.info(f"fastp report: {html_report}")
