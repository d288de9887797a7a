"""HOMER wrapper."""

from pathlib import Path

from cuttagflow.external.base import ExternalTool


class FindMotifsGenome(ExternalTool):
    """HOMER findMotifsGenome.pl de novo and known motif search."""

    tool_name = "findMotifsGenome.pl"

    def find_motifs(
        self,
        peak_file: Path,
        genome_fasta: Path,
        output_dir: Path,
        log_file: Path,
    ) -> None:
        cmd = [
            self.tool_name,
            str(peak_file),
            str(genome_fasta),
            str(output_dir),
            "-p", str(self.threads),
        ]
        output_dir.mkdir(parents=True, exist_ok=True)
        self.run(cmd, log_file=log_file)
        self.logger.info(f"Motif report written to: {output_dir}")
