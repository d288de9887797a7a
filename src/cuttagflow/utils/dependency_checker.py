"""Dependency checker for CutTagFlow.

Performs pre-flight checks for every external executable the pipeline
drives. All of them are required. Tools are only resolved on PATH (and
optionally asked for their version); nothing is executed against data.
"""

import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Iterable, List, Optional

from packaging import version

from cuttagflow.exceptions import DependencyError
from cuttagflow.utils.logging import get_logger


@dataclass
class Tool:
    """Tool dependency definition."""

    name: str
    purpose: str
    install_hint: str
    min_version: Optional[str] = None


def get_tool_version(tool_name: str, version_arg: str = "--version") -> Optional[str]:
    """Get version string from a tool, or None if it cannot be determined."""
    try:
        result = subprocess.run(
            [tool_name, version_arg],
            capture_output=True,
            text=True,
            timeout=5,
        )
        output = result.stdout + result.stderr
        match = re.search(r"(\d+\.\d+(?:\.\d+)?)", output)
        if match:
            return match.group(1)
    except (OSError, subprocess.SubprocessError):
        pass
    return None


def compare_versions(current: str, minimum: str) -> bool:
    """Return True if current >= minimum (unparseable versions pass)."""
    try:
        return version.parse(current) >= version.parse(minimum)
    except version.InvalidVersion:
        return True


TOOLS = [
    Tool(
        name="samtools",
        purpose="FASTA indexing, BAM sorting/indexing and read counting",
        install_hint="conda install -c bioconda samtools",
        min_version="1.10",
    ),
    Tool(
        name="bowtie2",
        purpose="Paired-end alignment to genome and spike-in",
        install_hint="conda install -c bioconda bowtie2",
    ),
    Tool(
        name="bowtie2-build",
        purpose="Aligner index construction",
        install_hint="conda install -c bioconda bowtie2",
    ),
    Tool(
        name="fastp",
        purpose="Read trimming and quality control",
        install_hint="conda install -c bioconda fastp",
    ),
    Tool(
        name="seqkit",
        purpose="Spike-in proportional subsampling and mate selection",
        install_hint="conda install -c bioconda seqkit",
    ),
    Tool(
        name="picard",
        purpose="Duplicate removal",
        install_hint="conda install -c bioconda picard",
    ),
    Tool(
        name="bamCoverage",
        purpose="Normalized coverage tracks (deepTools)",
        install_hint="conda install -c bioconda deeptools",
    ),
    Tool(
        name="macs2",
        purpose="Peak calling",
        install_hint="conda install -c bioconda macs2",
    ),
    Tool(
        name="bedtools",
        purpose="Peak annotation by interval intersection",
        install_hint="conda install -c bioconda bedtools",
    ),
    Tool(
        name="computeMatrix",
        purpose="TSS signal matrix (deepTools)",
        install_hint="conda install -c bioconda deeptools",
    ),
    Tool(
        name="plotProfile",
        purpose="TSS metaplot rendering (deepTools)",
        install_hint="conda install -c bioconda deeptools",
    ),
    Tool(
        name="plotHeatmap",
        purpose="TSS heatmap rendering (deepTools)",
        install_hint="conda install -c bioconda deeptools",
    ),
    Tool(
        name="findMotifsGenome.pl",
        purpose="Motif discovery (HOMER)",
        install_hint="conda install -c bioconda homer",
    ),
]


class DependencyChecker:
    """Check and report on tool dependencies."""

    def __init__(self, tools: Optional[Iterable[Tool]] = None, logger=None):
        self.tools = list(tools) if tools is not None else list(TOOLS)
        self.logger = logger or get_logger("dependency_checker")
        self.missing_required: List[Tool] = []
        self.found_tools: List[str] = []
        self.version_warnings: List[str] = []

    def check_all(self) -> bool:
        """Check all dependencies.

        Returns:
            True if all required tools are available
        """
        self.logger.info("Checking dependencies...")
        self.missing_required = []
        self.found_tools = []
        self.version_warnings = []

        for tool in self.tools:
            if shutil.which(tool.name) is None:
                self.missing_required.append(tool)
                self.logger.error(f"✗ {tool.name} not found (REQUIRED)")
                continue

            self.found_tools.append(tool.name)
            if not tool.min_version:
                self.logger.debug(f"✓ {tool.name} found")
                continue

            current_version = get_tool_version(tool.name)
            if current_version and not compare_versions(current_version, tool.min_version):
                warning = (
                    f"{tool.name}: version {current_version} < recommended {tool.min_version}"
                )
                self.version_warnings.append(warning)
                self.logger.warning(f"⚠ {warning}")
            else:
                self.logger.debug(f"✓ {tool.name} v{current_version or 'unknown'}")

        return not self.missing_required

    def format_report(self) -> str:
        """Render a dependency report as text."""
        lines = ["", "=" * 70, "CutTagFlow Dependency Check", "=" * 70]

        if self.found_tools:
            lines.append("\n✓ Found tools:")
            lines.extend(f"  - {name}" for name in sorted(self.found_tools))

        if self.version_warnings:
            lines.append("\n⚠ Version warnings:")
            lines.extend(f"  - {warning}" for warning in self.version_warnings)

        if self.missing_required:
            lines.append("\n✗ Missing REQUIRED tools:")
            for tool in self.missing_required:
                lines.append(f"  - {tool.name}")
                lines.append(f"    Purpose: {tool.purpose}")
                lines.append(f"    Install: {tool.install_hint}")
            lines.append("\n" + "=" * 70)
            lines.append("ERROR: Cannot proceed without required dependencies.")
        else:
            lines.append("\n" + "=" * 70)
            lines.append("✓ All required dependencies satisfied!")
        lines.append("=" * 70)
        return "\n".join(lines)

    def print_report(self) -> None:
        """Print a detailed dependency report."""
        print(self.format_report())

    def raise_if_missing_required(self) -> None:
        """Raise DependencyError naming every missing required tool."""
        if self.missing_required:
            names = [tool.name for tool in self.missing_required]
            raise DependencyError(
                "Required tool(s) not found in PATH: " + ", ".join(names),
                missing=names,
            )
