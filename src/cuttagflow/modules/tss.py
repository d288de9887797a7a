"""Transcription start site (TSS) coordinates from a GFF/GTF annotation.

Each gene-like feature becomes a zero-length BED interval at its start site:

    +  strand: (start - 1, start)
    -  strand: (end - 1, end)

Records are sanitized before use, in this order:

1. comment lines and records with fewer than 9 fields are skipped;
2. all whitespace is removed from the chromosome and strand fields;
3. whitespace runs (including CR/LF) in the attributes field become ';';
4. records whose strand is not exactly '+' or '-' are dropped.

The result is deduplicated on (chrom, start, end, strand) and sorted by
chrom, start, end, strand so that downstream windowing is deterministic.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Sequence

import pandas as pd

from cuttagflow.constants import TSS_FEATURE_TYPES
from cuttagflow.utils.logging import get_logger

logger = get_logger("tss")

BED_COLUMNS = ["chrom", "start", "end", "name", "score", "strand"]
DEDUP_KEYS = ["chrom", "start", "end", "strand"]

_WHITESPACE = re.compile(r"\s+")


class TSSRecord(NamedTuple):
    """One BED6 row at a transcription start site."""

    chrom: str
    start: int
    end: int
    name: str
    score: str
    strand: str


def parse_tss_record(record: str, feature_types: Sequence[str]) -> Optional[TSSRecord]:
    """Return the TSS interval for one annotation record, or None if it is skipped."""
    if record.startswith("#"):
        return None

    fields = record.split("\t")
    if len(fields) < 9 or fields[2] not in feature_types:
        return None

    chrom = _WHITESPACE.sub("", fields[0])
    strand = _WHITESPACE.sub("", fields[6])
    attributes = _WHITESPACE.sub(";", fields[8])

    try:
        if strand == "+":
            position = int(fields[3])
        elif strand == "-":
            position = int(fields[4])
        else:
            return None
    except ValueError:
        return None

    return TSSRecord(chrom, position - 1, position, attributes, "0", strand)


def extract_tss_records(
    records: Iterable[str],
    feature_types: Sequence[str] = TSS_FEATURE_TYPES,
) -> List[TSSRecord]:
    """Derive deduplicated, sorted TSS records from raw annotation records."""
    feature_set = frozenset(feature_types)
    parsed = [
        tss for tss in (parse_tss_record(r, feature_set) for r in records) if tss is not None
    ]
    if not parsed:
        return []

    df = pd.DataFrame(parsed, columns=BED_COLUMNS)
    df = df.drop_duplicates(subset=DEDUP_KEYS, keep="first")
    df = df.sort_values(DEDUP_KEYS, kind="mergesort")
    return [
        TSSRecord(chrom, int(start), int(end), name, score, strand)
        for chrom, start, end, name, score, strand in df.itertuples(index=False, name=None)
    ]


def read_annotation_records(annotation: Path) -> List[str]:
    """Split an annotation file into records on LF only.

    A carriage return is kept inside its field so that the attribute
    sanitization turns it into a separator.
    """
    with open(annotation, "r", encoding="utf-8", errors="replace", newline="") as handle:
        text = handle.read()
    records = text.split("\n")
    if records and records[-1] == "":
        records.pop()
    return records


def write_tss_bed(
    annotation: Path,
    output: Path,
    feature_types: Sequence[str] = TSS_FEATURE_TYPES,
) -> int:
    """Write the TSS BED for an annotation file; returns the number of rows."""
    records = extract_tss_records(read_annotation_records(annotation), feature_types)

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8", newline="\n") as handle:
        for rec in records:
            handle.write(
                f"{rec.chrom}\t{rec.start}\t{rec.end}\t{rec.name}\t{rec.score}\t{rec.strand}\n"
            )

    if not records:
        logger.warning(f"No TSS records derived from {annotation}")
    logger.info(f"Wrote {len(records):,} TSS records to {output}")
    return len(records)
