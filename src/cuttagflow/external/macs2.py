"""MACS2 wrapper."""

from pathlib import Path

from cuttagflow.external.base import ExternalTool


class Macs2(ExternalTool):
    """MACS2 peak caller."""

    tool_name = "macs2"

    def callpeak(
        self,
        treatment_bam: Path,
        control_bam: Path,
        genome_size: int,
        outdir: Path,
        name: str,
        log_file: Path,
        input_format: str = "BAMPE",
    ) -> Path:
        """Call peaks for treatment vs control; returns the narrowPeak path."""
        cmd = [
            self.tool_name, "callpeak",
            "-t", str(treatment_bam),
            "-c", str(control_bam),
            "-f", input_format,
            "-g", str(genome_size),
            "--bdg",
            "--outdir", str(outdir),
            "-n", name,
        ]
        outdir.mkdir(parents=True, exist_ok=True)
        self.run(cmd, log_file=log_file)
        peaks = outdir / f"{name}_peaks.narrowPeak"
        self.logger.info(f"Peaks written: {peaks}")
        return peaks
