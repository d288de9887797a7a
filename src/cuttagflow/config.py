"""Configuration management for CutTagFlow."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml

from cuttagflow.constants import (
    ANNOTATION_EXCLUDE_TYPES,
    DEFAULT_BIN_SIZE,
    DEFAULT_SAMPLING_SEED,
    DEFAULT_THREADS,
    DEFAULT_TSS_DOWNSTREAM,
    DEFAULT_TSS_UPSTREAM,
    TSS_FEATURE_TYPES,
)
from cuttagflow.exceptions import ConfigurationError

# Input attributes and the CLI flags that set them
INPUT_FIELDS: Dict[str, str] = {
    "treat_r1": "-a/--treat-r1",
    "treat_r2": "-b/--treat-r2",
    "ctrl_r1": "-d/--ctrl-r1",
    "ctrl_r2": "-e/--ctrl-r2",
    "genome_fasta": "-f/--genome-fasta",
    "genome_gff": "-g/--genome-gff",
    "spikein_fasta": "-s/--spikein-fasta",
}


@dataclass
class RuntimeConfig:
    """Runtime configuration."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    # Show a tqdm bar over stages
    enable_progress: bool = True
    # Rebuild derived indices whose source file is newer (mtime).
    # Off by default: existing artifacts are trusted as-is.
    rebuild_stale_indices: bool = False


@dataclass
class PerformanceConfig:
    """Performance-related configuration."""

    threads: int = DEFAULT_THREADS


@dataclass
class ToolConfig:
    """External tool configuration."""

    bin_size: int = DEFAULT_BIN_SIZE
    tss_upstream: int = DEFAULT_TSS_UPSTREAM
    tss_downstream: int = DEFAULT_TSS_DOWNSTREAM
    tss_feature_types: List[str] = field(default_factory=lambda: list(TSS_FEATURE_TYPES))
    annotation_exclude_types: List[str] = field(
        default_factory=lambda: list(ANNOTATION_EXCLUDE_TYPES)
    )
    seqkit: Dict[str, Any] = field(default_factory=lambda: {"seed": DEFAULT_SAMPLING_SEED})
    macs2: Dict[str, Any] = field(default_factory=lambda: {"format": "BAMPE"})
    picard: Dict[str, Any] = field(default_factory=lambda: {"remove_duplicates": True})


@dataclass
class Config:
    """Main configuration class."""

    # Treatment and control read pairs
    treat_r1: Optional[Path] = None
    treat_r2: Optional[Path] = None
    ctrl_r1: Optional[Path] = None
    ctrl_r2: Optional[Path] = None

    # Reference inputs
    genome_fasta: Optional[Path] = None
    genome_gff: Optional[Path] = None
    spikein_fasta: Optional[Path] = None

    output_dir: Path = Path(".")
    prefix: Optional[str] = None

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    tools: ToolConfig = field(default_factory=ToolConfig)

    @property
    def threads(self) -> int:
        return self.performance.threads

    @threads.setter
    def threads(self, value: int):
        self.performance.threads = value

    def missing_inputs(self) -> List[str]:
        """Return the CLI flags of required inputs that are not set."""
        missing = [flag for attr, flag in INPUT_FIELDS.items() if not getattr(self, attr)]
        if not self.prefix:
            missing.append("-n/--prefix")
        return missing

    def validate(self) -> None:
        """Validate configuration."""
        missing = self.missing_inputs()
        if missing:
            raise ConfigurationError("Missing required input(s): " + ", ".join(missing))

        for attr in INPUT_FIELDS:
            path = Path(getattr(self, attr))
            if not path.exists():
                raise ConfigurationError(f"Input file not found ({attr}): {path}")

        if "/" in str(self.prefix):
            raise ConfigurationError(f"Prefix must not contain '/': {self.prefix}")

        if self.performance.threads < 1:
            raise ConfigurationError("Threads must be >= 1")
        if self.tools.bin_size < 1:
            raise ConfigurationError("tools.bin_size must be >= 1")
        if self.tools.tss_upstream < 0 or self.tools.tss_downstream < 0:
            raise ConfigurationError("TSS window sizes must be >= 0")
        if not self.tools.tss_feature_types:
            raise ConfigurationError("tools.tss_feature_types must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""

        def path_to_str(obj):
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: path_to_str(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [path_to_str(item) for item in obj]
            return obj

        return path_to_str(asdict(self))


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")

    cfg = Config()

    for attr in list(INPUT_FIELDS) + ["output_dir"]:
        if data.get(attr) is not None:
            setattr(cfg, attr, Path(data[attr]))
    if data.get("prefix") is not None:
        cfg.prefix = str(data["prefix"])
    if data.get("threads") is not None:
        cfg.performance.threads = int(data["threads"])

    sections = {
        "runtime": cfg.runtime,
        "performance": cfg.performance,
        "tools": cfg.tools,
    }
    for section_name, target in sections.items():
        section = data.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ConfigurationError(f"Config section '{section_name}' must be a mapping")
        for key, value in section.items():
            if not hasattr(target, key):
                raise ConfigurationError(f"Unknown config option: {section_name}.{key}")
            if value is None:
                continue
            if section_name == "runtime" and key == "log_file":
                value = Path(value)
            setattr(target, key, value)

    return cfg


def save_config(cfg: Config, path: Path) -> None:
    """Save configuration to YAML file."""
    data = cfg.to_dict()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
