"""Shared fixtures for gview tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

GENBANK_TEXT = """\
LOCUS       NC_demo                  120 bp    DNA     circular BCT 01-JAN-2024
DEFINITION  Demo plasmid.
ACCESSION   NC_demo
SOURCE      Escherichia coli
  ORGANISM  Escherichia coli
            Bacteria; Pseudomonadota; Gammaproteobacteria.
FEATURES             Location/Qualifiers
     source          1..120
                     /organism="Escherichia coli"
     promoter        1..9
                     /note="P1"
     gene            10..45
                     /gene="abcA"
                     /locus_tag="DEMO_0001"
     CDS             10..45
                     /gene="abcA"
                     /locus_tag="DEMO_0001"
                     /product="ABC transporter
                     ATP-binding protein"
                     /translation="MKVL
                     LAR"
     gene            60..90
                     /gene="abcB"
                     /pseudo
     gene            complement(95..118)
                     /locus_tag="DEMO_0003"
ORIGIN
        1 atgaaagtac tggcgcgtta aatgaaagta ctggcgcgtt aaatgaaagt actggcgcgt
       61 taaatgaaag tactggcgcg ttaaatgaaa gtactggcgc gttaaatgaa agtactggcg
//
LOCUS       second                    8 bp    DNA     linear
FEATURES             Location/Qualifiers
     misc_feature    join(2..3,6..7)
ORIGIN
        1 ggggcccc
//
"""


@pytest.fixture
def genbank_text() -> str:
    """Two-record GenBank file with gene/CDS pairs and multi-line qualifiers."""
    return GENBANK_TEXT


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture that writes text to a file under tmp_path and returns the path."""

    def _write(text: str, filename: str) -> Path:
        path = tmp_path / filename
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def write_fasta(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture that writes sequences to a FASTA file and returns the path."""

    def _write(sequences: list[tuple[str, str]], filename: str = "test.fasta") -> Path:
        path = tmp_path / filename
        lines = [f">{name}\n{seq}\n" for name, seq in sequences]
        path.write_text("".join(lines))
        return path

    return _write
