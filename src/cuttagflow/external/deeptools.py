"""deepTools wrappers (coverage tracks, TSS matrices and plots)."""

from pathlib import Path
from typing import Sequence

from cuttagflow.external.base import ExternalTool


class BamCoverage(ExternalTool):
    """bamCoverage: RPGC-normalized bigWig from a BAM."""

    tool_name = "bamCoverage"

    def to_bigwig(
        self,
        bam_file: Path,
        output_bigwig: Path,
        bin_size: int,
        effective_genome_size: int,
    ) -> None:
        cmd = [
            self.tool_name,
            "--bam", str(bam_file),
            "--binSize", str(bin_size),
            "--outFileName", str(output_bigwig),
            "--outFileFormat", "bigwig",
            "--ignoreDuplicates",
            "--normalizeUsing", "RPGC",
            "--numberOfProcessors", str(self.threads),
            "--effectiveGenomeSize", str(effective_genome_size),
        ]
        output_bigwig.parent.mkdir(parents=True, exist_ok=True)
        self.run(cmd, capture_output=True)
        self.logger.info(f"bigWig written: {output_bigwig}")


class ComputeMatrix(ExternalTool):
    """computeMatrix reference-point around TSSs."""

    tool_name = "computeMatrix"

    def reference_point(
        self,
        bigwigs: Sequence[Path],
        regions_bed: Path,
        output_matrix: Path,
        upstream: int,
        downstream: int,
    ) -> None:
        cmd = [self.tool_name, "reference-point", "-S"]
        cmd.extend(str(bw) for bw in bigwigs)
        cmd.extend([
            "-R", str(regions_bed),
            "--referencePoint", "TSS",
            "-a", str(upstream),
            "-b", str(downstream),
            "-out", str(output_matrix),
            "-p", str(self.threads),
        ])
        output_matrix.parent.mkdir(parents=True, exist_ok=True)
        self.run(cmd, capture_output=True)


class PlotProfile(ExternalTool):
    """plotProfile metaplot."""

    tool_name = "plotProfile"

    def plot(self, matrix: Path, output: Path, plots_per_row: int = 2) -> None:
        cmd = [
            self.tool_name,
            "-m", str(matrix),
            "--perGroup",
            "--numPlotsPerRow", str(plots_per_row),
            "-out", str(output),
        ]
        self.run(cmd, capture_output=True)


class PlotHeatmap(ExternalTool):
    """plotHeatmap TSS heatmap."""

    tool_name = "plotHeatmap"

    def plot(self, matrix: Path, output: Path, color_list: Sequence[str]) -> None:
        cmd = [self.tool_name, "-m", str(matrix), "--colorList"]
        cmd.extend(color_list)
        cmd.extend(["-out", str(output)])
        self.run(cmd, capture_output=True)
