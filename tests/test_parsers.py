"""Tests for format detection and multi-file loading."""

from __future__ import annotations

import pytest

from gview.parsers import EXTENSIONS, PARSERS, detect_format, load_file, load_model, parse


class TestDetectFormat:
    @pytest.mark.parametrize("extension, expected", sorted(EXTENSIONS.items()))
    def test_extensions(self, extension, expected):
        assert detect_format(f"data/sample{extension}") == expected
        assert detect_format(extension.upper()) == expected

    @pytest.mark.parametrize("name", sorted(PARSERS))
    def test_format_names(self, name):
        assert detect_format(name) == name

    def test_unknown_falls_back_to_fasta(self, caplog):
        with caplog.at_level("INFO", logger="gview.parsers"):
            assert detect_format("reads.bam") == "fasta"
        assert "Unrecognised format" in caplog.text


class TestParse:
    def test_dispatch(self):
        result = parse("chr1\t0\t5\n", ".bed")
        assert result.format == "bed"
        assert result.annotations["chr1"][0].start == 1

    def test_bytes_with_invalid_utf8(self):
        result = parse(b">s\nAC\xffGT\n", "fasta")
        assert "s" in result.sequences

    def test_parse_logs_summary(self, caplog):
        with caplog.at_level("INFO", logger="gview"):
            parse("chr1\tsrc\tgene\n", "gff")
        assert "1 line(s) skipped" in caplog.text

    def test_skipped_lines_logged_at_debug(self, caplog):
        with caplog.at_level("DEBUG", logger="gview"):
            parse("chr1\t5\n", "vcf")
        assert "VCF line 1" in caplog.text


class TestLoad:
    def test_load_file_by_extension(self, genbank_text, write_file):
        result = load_file(write_file(genbank_text, "demo.gbk"))
        assert result.format == "genbank"
        assert result.chromosomes == ["NC_demo", "second"]

    def test_load_model_combines_formats(self, write_file, write_fasta):
        paths = [
            write_fasta([("chr1", "ACGT" * 25)], "ref.fa"),
            write_file("chr1\tsrc\tgene\t1\t40\t.\t+\t.\tID=g1\nbad\n", "genes.gff"),
            write_file("chr1\t10\t.\tA\tG\t.\tPASS\t.\n", "calls.vcf"),
        ]
        model = load_model(paths)
        assert len(model.sequence("chr1")) == 100
        assert len(model.annotations["chr1"]) == 1
        assert model.variants["chr1"][0].start == 9
        assert model.skipped == 1

    def test_later_file_replaces_store(self, write_file):
        first = write_file("chr1\t0\t5\n", "a.bed")
        second = write_file("chr2\t0\t5\n", "b.bed")
        model = load_model([first, second])
        assert list(model.annotations) == ["chr2"]
