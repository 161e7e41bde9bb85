"""Tests for SAM parsing and CIGAR walking."""

from __future__ import annotations

import pytest

from gview import models
from gview.cigar import (
    CIGAR_DEL,
    CIGAR_MATCH,
    CIGAR_SOFT_CLIP,
    cigar_reference_length,
    parse_cigar,
)
from gview.models import Read
from gview.sam import aligned_bases, parse_sam, read_sam

HEADER = "@HD\tVN:1.6\tSO:coordinate\n@SQ\tSN:chr1\tLN:1000\n"


def _sam_line(qname="r1", flag=0, rname="chr1", pos=100, mapq=60, cigar="8M", seq="ACGTACGT"):
    return "\t".join(
        [qname, str(flag), rname, str(pos), str(mapq), cigar, "*", "0", "0", seq, "I" * len(seq)]
    )


def _read(cigar: str, seq: str, start: int = 0) -> Read:
    return Read("q", "chr1", start, start + len(seq), "+", 60, cigar, seq, "*")


class TestParseSam:
    def test_forward_read(self):
        result = parse_sam(HEADER + _sam_line() + "\n")
        (read,) = result.reads["chr1"]
        assert (read.id, read.start, read.end, read.strand) == ("r1", 99, 107, "+")
        assert read.mapping_quality == 60
        assert read.cigar == "8M"
        assert read.sequence == "ACGTACGT"
        assert read.quality == "IIIIIIII"

    def test_reverse_flag(self):
        (read,) = parse_sam(_sam_line(flag=16)).reads["chr1"]
        assert read.strand == "-"
        assert read.is_reverse

    def test_reverse_bit_among_others(self):
        (read,) = parse_sam(_sam_line(flag=16 | 2 | 1)).reads["chr1"]
        assert read.strand == "-"

    @pytest.mark.parametrize("rname, pos", [("*", 0), ("chr1", 0), ("*", 10)])
    def test_unmapped_dropped_without_counting(self, rname, pos):
        result = parse_sam(_sam_line(flag=4, rname=rname, pos=pos))
        assert result.reads == {}
        assert result.skipped == 0

    def test_short_and_non_numeric_lines_skipped(self):
        text = "r1\t0\tchr1\t5\n" + _sam_line(mapq="high") + "\n"
        result = parse_sam(text)
        assert result.reads == {}
        assert result.skipped == 2

    def test_groups_by_reference(self):
        text = "\n".join([_sam_line(rname="chr1"), _sam_line(rname="chr2"), _sam_line(rname="chr1")])
        result = parse_sam(text)
        assert {name: len(reads) for name, reads in result.reads.items()} == {"chr1": 2, "chr2": 1}

    def test_reference_end_uses_cigar(self):
        (read,) = parse_sam(_sam_line(cigar="2S4M10D2M")).reads["chr1"]
        assert read.end == 107
        assert read.reference_end == 99 + 16

    def test_read_sam(self, write_file):
        path = write_file(HEADER + _sam_line() + "\n", "aln.sam")
        assert len(read_sam(path).reads["chr1"]) == 1


class TestCigar:
    def test_parse_cigar(self):
        assert parse_cigar("5S10M2D") == [(CIGAR_SOFT_CLIP, 5), (CIGAR_MATCH, 10), (CIGAR_DEL, 2)]

    @pytest.mark.parametrize(
        "cigar, expected",
        [("50M", 50), ("10M2I10M", 20), ("10=1X10=", 21), ("3H5S10M", 10), ("*", 0)],
    )
    def test_reference_length(self, cigar, expected):
        assert cigar_reference_length(cigar) == expected

    def test_read_span_shares_cigar_helpers(self):
        assert models.cigar_reference_length is cigar_reference_length
        read = Read("q", "chr1", 10, 14, "+", 60, "2M6N2M", "ACGT", "*")
        assert read.reference_end == 20

    def test_unaligned_read_keeps_sequence_span(self):
        assert Read("q", "chr1", 10, 14, "+", 0, "*", "ACGT", "*").reference_end == 14


class TestAlignedBases:
    def test_simple_match(self):
        aligned, inserts = aligned_bases(_read("4M", "acgt", start=10), 0, 100)
        assert aligned == {10: "A", 11: "C", 12: "G", 13: "T"}
        assert not inserts

    def test_window_clips_positions(self):
        aligned, _ = aligned_bases(_read("4M", "ACGT", start=10), 11, 13)
        assert aligned == {11: "C", 12: "G"}

    def test_soft_clip_consumes_query_only(self):
        aligned, _ = aligned_bases(_read("2S3M", "NNACG", start=5), 0, 20)
        assert aligned == {5: "A", 6: "C", 7: "G"}

    def test_deletion_marked_with_gap(self):
        aligned, _ = aligned_bases(_read("2M2D2M", "ACGT"), 0, 10)
        assert aligned == {0: "A", 1: "C", 2: "-", 3: "-", 4: "G", 5: "T"}

    def test_insertion_anchored_to_previous_base(self):
        aligned, inserts = aligned_bases(_read("2M3I1M", "ACGGGT"), 0, 10)
        assert aligned == {0: "A", 1: "C", 2: "T"}
        assert inserts == {1: ["G", "G", "G"]}

    def test_spliced_gap_skips_reference(self):
        aligned, _ = aligned_bases(_read("2M100N2M", "ACGT"), 0, 200)
        assert sorted(aligned) == [0, 1, 102, 103]
