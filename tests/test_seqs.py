"""Tests for sequence utilities."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gview.errors import InvalidArgumentError
from gview.models import Feature, ViewRange
from gview.seqs import (
    feature_protein,
    feature_sequence,
    format_fasta,
    gc_content,
    gc_windows,
    parse_region,
    reverse_complement,
    subsequence,
    translate,
)

dna = st.text(alphabet="ACGTN", max_size=300)


class TestReverseComplement:
    @given(dna)
    @settings(max_examples=100)
    def test_involution(self, seq):
        assert reverse_complement(reverse_complement(seq)) == seq

    @given(dna)
    @settings(max_examples=50)
    def test_preserves_length(self, seq):
        assert len(reverse_complement(seq)) == len(seq)

    def test_known_value(self):
        assert reverse_complement("AACGTN") == "NACGTT"

    def test_iupac_codes(self):
        assert reverse_complement("RYKM") == "KMRY"


class TestTranslate:
    @given(dna)
    @settings(max_examples=50)
    def test_one_residue_per_codon(self, seq):
        assert len(translate(seq)) == len(seq) // 3

    def test_lowercase_input(self):
        assert translate("atggcctaa") == "MA*"

    def test_reverse_strand(self):
        assert translate(reverse_complement("ATGTGGTAA"), strand=-1) == "MW*"

    def test_ambiguous_codon(self):
        assert translate("ATGNNN") == "MX"


class TestGCContent:
    @pytest.mark.parametrize(
        "seq, expected",
        [("GGCC", 100.0), ("ATAT", 0.0), ("", 0.0), ("ACGT", 50.0), ("NNGC", 50.0)],
    )
    def test_values(self, seq, expected):
        assert gc_content(seq) == expected

    def test_windows_cover_all_but_tail(self):
        seq = "G" * 10 + "A" * 10 + "GC" * 5 + "AT" * 2
        windows = gc_windows(seq, target_windows=50, min_window=10)
        assert [(w.start, w.end, w.fraction) for w in windows] == [
            (0, 10, 1.0),
            (10, 20, 0.0),
            (20, 30, 1.0),
        ]

    def test_window_size_grows_with_length(self):
        windows = gc_windows("A" * 1000, target_windows=50, min_window=10)
        assert {w.end - w.start for w in windows} == {20}
        assert len(windows) == 49


class TestSlicing:
    def test_feature_sequence_one_based(self):
        assert feature_sequence("AACCGGTT", Feature("gene", 3, 6)) == "CCGG"

    def test_subsequence_clips_end(self):
        assert subsequence("ACGT", 2, 99) == "CGT"

    def test_subsequence_rejects_zero(self):
        with pytest.raises(InvalidArgumentError):
            subsequence("ACGT", 0, 3)

    def test_feature_protein_from_sequence(self):
        seq = "NN" + "ATGAAATAA" + "NN"
        assert feature_protein(seq, Feature("CDS", 3, 11)) == "MK*"

    def test_feature_protein_prefers_translation(self):
        cds = Feature("CDS", 1, 9, qualifiers={"translation": "MKVL"})
        assert feature_protein("ATGAAATAA", cds) == "MKVL"

    def test_format_fasta_wraps(self):
        assert format_fasta("h", "ACGTA", width=2) == ">h\nAC\nGT\nA"


class TestParseRegion:
    def test_range_with_chromosome(self):
        assert parse_region("chr2:101-200", 1000) == ("chr2", ViewRange(100, 200))

    def test_single_position_opens_window(self):
        assert parse_region("11", 5000, window=100) == (None, ViewRange(10, 110))

    def test_end_clamped(self):
        assert parse_region("900-5000", 1000) == (None, ViewRange(899, 1000))

    def test_zero_start_clamped(self):
        assert parse_region("0-10", 100) == (None, ViewRange(0, 10))

    @pytest.mark.parametrize("text", ["", "chr1:", "abc", "10-20-30", "chr1:x-9"])
    def test_unparseable(self, text):
        with pytest.raises(InvalidArgumentError, match="cannot parse region"):
            parse_region(text, 100)

    def test_outside_sequence(self):
        with pytest.raises(InvalidArgumentError, match="outside"):
            parse_region("500-600", 100)
