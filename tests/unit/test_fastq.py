"""Tests for FASTQ read-identifier extraction."""

import gzip

import pytest

from cuttagflow.exceptions import FileFormatError
from cuttagflow.modules.fastq import iter_read_ids, write_read_ids

RECORDS = (
    "@read1/1 extra info\nACGT\n+\nIIII\n"
    "@read2 1:N:0:ATCACG\nGGCC\n+\n@@@@\n"
)


def test_ids_from_plain_fastq(tmp_path):
    fq = tmp_path / "r1.fq"
    fq.write_text(RECORDS)
    assert list(iter_read_ids(fq)) == ["read1/1", "read2"]


def test_ids_from_gzipped_fastq(tmp_path):
    fq = tmp_path / "r1.fq.gz"
    with gzip.open(fq, "wt") as handle:
        handle.write(RECORDS)
    out = tmp_path / "ids" / "r1.ids.txt"
    assert write_read_ids(fq, out) == 2
    assert out.read_text() == "read1/1\nread2\n"


def test_quality_line_starting_with_at_is_not_a_header(tmp_path):
    fq = tmp_path / "r1.fq"
    fq.write_text(RECORDS)
    # the second record's quality string starts with '@'
    assert len(list(iter_read_ids(fq))) == 2


def test_malformed_header_raises(tmp_path):
    fq = tmp_path / "bad.fq"
    fq.write_text("read1\nACGT\n+\nIIII\n")
    with pytest.raises(FileFormatError):
        list(iter_read_ids(fq))
