"""FASTQ helpers for keeping mates consistent after subsampling."""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import IO, Iterator

from cuttagflow.exceptions import FileFormatError


def _open_text(path: Path) -> IO[str]:
    if str(path).endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8", errors="replace")
    return open(path, "r", encoding="utf-8", errors="replace")


def iter_read_ids(fastq: Path) -> Iterator[str]:
    """Yield the identifier of every record: header text up to the first whitespace, without '@'."""
    with _open_text(fastq) as handle:
        for line_number, line in enumerate(handle):
            if line_number % 4:
                continue
            if not line.startswith("@"):
                raise FileFormatError(
                    f"{fastq}: expected FASTQ header at line {line_number + 1}, got {line[:40]!r}"
                )
            parts = line[1:].split(maxsplit=1)
            if parts:
                yield parts[0]


def write_read_ids(fastq: Path, output: Path) -> int:
    """Write one read identifier per line; returns the number written."""
    count = 0
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as out:
        for read_id in iter_read_ids(fastq):
            out.write(read_id + "\n")
            count += 1
    return count
