"""Peak annotation helpers.

Peaks are intersected with the annotation after removing coarse features
(genes, transcripts, whole chromosomes) so each peak picks up the finer
features it overlaps. Consecutive joined rows that share the same leading
characters (the peak coordinates) are collapsed to the first row.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Sequence

from cuttagflow.constants import ANNOTATION_EXCLUDE_TYPES, ANNOTATION_UNIQ_WIDTH
from cuttagflow.utils.logging import get_logger

logger = get_logger("annotation")


def filter_annotation_features(
    annotation: Path,
    output: Path,
    exclude_types: Sequence[str] = ANNOTATION_EXCLUDE_TYPES,
) -> int:
    """Copy annotation records whose feature type is not excluded; returns rows kept.

    Comment lines are dropped.
    """
    excluded = frozenset(exclude_types)
    kept = 0
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(annotation, "r", encoding="utf-8", errors="replace") as src, open(
        output, "w", encoding="utf-8"
    ) as dst:
        for line in src:
            if not line.strip() or line.startswith("#"):
                continue
            fields = line.rstrip("\n").split("\t")
            if len(fields) > 2 and fields[2] in excluded:
                continue
            dst.write(line if line.endswith("\n") else line + "\n")
            kept += 1

    logger.debug(f"Kept {kept:,} annotation features in {output}")
    return kept


def collapse_adjacent(lines: Iterable[str], width: int = ANNOTATION_UNIQ_WIDTH) -> Iterator[str]:
    """Yield lines, skipping any whose first `width` characters equal the previous line's."""
    previous = None
    for line in lines:
        key = line.rstrip("\n")[:width]
        if key == previous:
            continue
        previous = key
        yield line


def collapse_annotation_table(
    joined: Path, output: Path, width: int = ANNOTATION_UNIQ_WIDTH
) -> int:
    """Collapse a bedtools join table into one row per leading key; returns rows written."""
    written = 0
    with open(joined, "r", encoding="utf-8", errors="replace") as src, open(
        output, "w", encoding="utf-8"
    ) as dst:
        for line in collapse_adjacent(src, width):
            dst.write(line)
            written += 1
    return written
