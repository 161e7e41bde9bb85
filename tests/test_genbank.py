"""Tests for GenBank parsing."""

from __future__ import annotations

import pytest

from gview.genbank import parse_genbank, parse_location

UNIT = "ATGAAAGTACTGGCGCGTTAA"


class TestParseLocation:
    @pytest.mark.parametrize(
        "location, expected",
        [
            ("123..456", (123, 456, 1)),
            ("complement(123..456)", (123, 456, -1)),
            ("42", (42, 42, 1)),
            ("<1..>300", (1, 300, 1)),
            ("102^103", (102, 103, 1)),
            ("order(5..10,1..3)", (1, 10, 1)),
            ("complement(join(10..20,30..40))", (10, 40, -1)),
            ("join(AB000001.1:1..5,100..200)", (100, 200, 1)),
            ("complement(join(X12345.2:<1..>9000,50..60,J00001:7))", (50, 60, -1)),
        ],
    )
    def test_spans(self, location, expected):
        assert parse_location(location) == expected

    def test_no_position(self):
        assert parse_location("gap()") is None

    def test_only_remote_parts(self):
        assert parse_location("join(AB000001.1:1..5,AB000002.1:10..20)") is None


class TestParseGenBank:
    def test_records_and_sequences(self, genbank_text):
        result = parse_genbank(genbank_text)
        assert list(result.sequences) == ["NC_demo", "second"]
        assert result.sequences["NC_demo"] == (UNIT * 6)[:120]
        assert result.sequences["second"] == "GGGGCCCC"

    def test_feature_types_and_order(self, genbank_text):
        features = parse_genbank(genbank_text).annotations["NC_demo"]
        assert [f.type for f in features] == ["source", "promoter", "gene", "CDS", "gene", "gene"]

    def test_complement_strand(self, genbank_text):
        last = parse_genbank(genbank_text).annotations["NC_demo"][-1]
        assert (last.start, last.end, last.strand) == (95, 118, -1)
        assert last.qualifiers == {"locus_tag": "DEMO_0003"}

    def test_qualifiers_quotes_stripped(self, genbank_text):
        gene = parse_genbank(genbank_text).annotations["NC_demo"][2]
        assert gene.qualifiers == {"gene": "abcA", "locus_tag": "DEMO_0001"}
        assert gene.name == "abcA"

    def test_multiline_qualifiers(self, genbank_text):
        cds = parse_genbank(genbank_text).annotations["NC_demo"][3]
        assert cds.qualifiers["product"] == "ABC transporter ATP-binding protein"
        assert cds.qualifiers["translation"] == "MKVLLAR"

    def test_flag_qualifier(self, genbank_text):
        pseudo = parse_genbank(genbank_text).annotations["NC_demo"][4]
        assert pseudo.qualifiers["pseudo"] == ""

    def test_join_location_span(self, genbank_text):
        (misc,) = parse_genbank(genbank_text).annotations["second"]
        assert (misc.type, misc.start, misc.end) == ("misc_feature", 2, 7)

    def test_header_continuation_lines_are_not_features(self, genbank_text):
        features = parse_genbank(genbank_text).annotations["NC_demo"]
        assert all(f.type != "Bacteria" for f in features)

    def test_lines_before_locus_ignored(self):
        text = "FEATURES\n     gene            1..5\nORIGIN\n        1 acgt\n//\n"
        result = parse_genbank(text)
        assert result.sequences == {}
        assert result.annotations == {}

    def test_missing_terminator_still_commits(self):
        text = "LOCUS       x  4 bp\nORIGIN\n        1 acgt\n"
        assert parse_genbank(text).sequences == {"x": "ACGT"}

    def test_record_without_origin_has_empty_sequence(self):
        text = "LOCUS       x  4 bp\nFEATURES             Location/Qualifiers\n     gene            1..4\n//\n"
        result = parse_genbank(text)
        assert result.sequences == {"x": ""}
        assert len(result.annotations["x"]) == 1

    def test_unparseable_location_is_skipped(self):
        text = "LOCUS       x  4 bp\nFEATURES             Location/Qualifiers\n     gap             unknown\n//\n"
        result = parse_genbank(text)
        assert result.annotations == {"x": []}
        assert result.skipped == 1

    def test_multiline_location(self):
        text = (
            "LOCUS       x  400 bp\n"
            "FEATURES             Location/Qualifiers\n"
            "     CDS             join(1..10,\n"
            "                     200..300)\n"
            "                     /gene=\"g\"\n"
            "//\n"
        )
        (cds,) = parse_genbank(text).annotations["x"]
        assert (cds.start, cds.end) == (1, 300)
        assert cds.qualifiers == {"gene": "g"}
