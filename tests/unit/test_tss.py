"""Tests for TSS coordinate derivation."""

from cuttagflow.modules.tss import (
    TSSRecord,
    extract_tss_records,
    parse_tss_record,
    read_annotation_records,
    write_tss_bed,
)

FEATURES = frozenset({"gene", "mRNA"})


def _gff(*rows):
    return ["\t".join(str(field) for field in row) for row in rows]


class TestParseRecord:
    def test_plus_strand_uses_start(self):
        rec = parse_tss_record("chr1\tsrc\tgene\t100\t500\t.\t+\t.\tID=g1", FEATURES)
        assert rec == TSSRecord("chr1", 99, 100, "ID=g1", "0", "+")

    def test_minus_strand_uses_end(self):
        rec = parse_tss_record("chr1\tsrc\tgene\t200\t800\t.\t-\t.\tID=g2", FEATURES)
        assert rec == TSSRecord("chr1", 799, 800, "ID=g2", "0", "-")

    def test_comment_and_short_records_skipped(self):
        assert parse_tss_record("#chr1\tsrc\tgene\t1\t2\t.\t+\t.\tID=x", FEATURES) is None
        assert parse_tss_record("chr1\tsrc\tgene\t1\t2", FEATURES) is None

    def test_feature_not_in_whitelist_skipped(self):
        assert parse_tss_record("chr1\tsrc\texon\t1\t2\t.\t+\t.\tID=e", FEATURES) is None

    def test_unknown_strand_dropped(self):
        assert parse_tss_record("chr1\tsrc\tgene\t1\t2\t.\t.\t.\tID=x", FEATURES) is None
        assert parse_tss_record("chr1\tsrc\tgene\t1\t2\t.\t?\t.\tID=x", FEATURES) is None

    def test_non_integer_position_dropped(self):
        assert parse_tss_record("chr1\tsrc\tgene\tabc\t2\t.\t+\t.\tID=x", FEATURES) is None

    def test_whitespace_sanitization(self):
        rec = parse_tss_record("ch r1 \tsrc\tgene\t10\t20\t.\t + \t.\tID=a; Name=b\r", FEATURES)
        assert rec.chrom == "chr1"
        assert rec.strand == "+"
        assert rec.name == "ID=a;;Name=b;"


class TestExtract:
    def test_two_gene_example(self):
        records = _gff(
            ("chr1", "src", "gene", 100, 500, ".", "+", ".", "ID=g1"),
            ("chr1", "src", "gene", 200, 800, ".", "-", ".", "ID=g2"),
        )
        assert extract_tss_records(records, FEATURES) == [
            TSSRecord("chr1", 99, 100, "ID=g1", "0", "+"),
            TSSRecord("chr1", 799, 800, "ID=g2", "0", "-"),
        ]

    def test_duplicates_keep_first_and_output_sorted(self):
        records = _gff(
            ("chr2", "src", "gene", 5, 50, ".", "+", ".", "ID=late"),
            ("chr1", "src", "gene", 300, 900, ".", "+", ".", "ID=first"),
            ("chr1", "src", "mRNA", 300, 700, ".", "+", ".", "ID=second"),
            ("chr1", "src", "gene", 10, 90, ".", "+", ".", "ID=early"),
        )
        result = extract_tss_records(records, FEATURES)
        assert [r.name for r in result] == ["ID=early", "ID=first", "ID=late"]
        assert all(isinstance(r.start, int) for r in result)

    def test_same_position_different_strand_kept(self):
        records = _gff(
            ("chr1", "src", "gene", 100, 100, ".", "+", ".", "ID=p"),
            ("chr1", "src", "gene", 1, 100, ".", "-", ".", "ID=m"),
        )
        result = extract_tss_records(records, FEATURES)
        assert [(r.start, r.strand) for r in result] == [(99, "+"), (99, "-")]

    def test_empty_input(self):
        assert extract_tss_records([], FEATURES) == []


class TestWriteBed:
    def test_embedded_newline_in_attributes(self, tmp_path):
        annotation = tmp_path / "genes.gff"
        annotation.write_bytes(
            b"##gff-version 3\n"
            b"chr1\tsrc\tgene\t100\t500\t.\t+\t.\tID=g1;\rNote=x\n"
            b"chr1\tsrc\tgene\t200\t800\t.\t-\t.\tID=g2\n"
        )
        output = tmp_path / "genes.gff.tss.bed"

        assert write_tss_bed(annotation, output, FEATURES) == 2
        lines = output.read_text().splitlines()
        assert lines == [
            "chr1\t99\t100\tID=g1;;Note=x\t0\t+",
            "chr1\t799\t800\tID=g2\t0\t-",
        ]
        for line in lines:
            assert len(line.split("\t")) == 6

    def test_read_records_splits_on_lf_only(self, tmp_path):
        path = tmp_path / "a.gff"
        path.write_bytes(b"a\rb\nc\n")
        assert read_annotation_records(path) == ["a\rb", "c"]

    def test_no_records_writes_empty_file(self, tmp_path):
        annotation = tmp_path / "empty.gff"
        annotation.write_text("# nothing\n")
        output = tmp_path / "empty.tss.bed"
        assert write_tss_bed(annotation, output, FEATURES) == 0
        assert output.read_text() == ""
