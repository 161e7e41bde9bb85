"""Sequence utilities: reverse complement, translation, GC content, slicing.

All functions are pure and operate on plain strings. Sequences are expected
upper-case, as the parsers produce them.

Examples:
    >>> reverse_complement("ATGC")
    'GCAT'
    >>> translate("ATGGCCTAA")
    'MA*'
    >>> gc_content("GGCA")
    75.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gview.config import (
    BASE_COLORS,
    FALLBACK_BASE_COLOR,
    GC_MIN_WINDOW,
    GC_TARGET_WINDOWS,
    GOTO_WINDOW,
)
from gview.errors import InvalidArgumentError
from gview.models import Feature, ViewRange

COMPLEMENT: dict[str, str] = {
    "A": "T", "T": "A", "G": "C", "C": "G",
    "N": "N", "R": "Y", "Y": "R", "S": "S",
    "W": "W", "K": "M", "M": "K", "B": "V",
    "D": "H", "H": "D", "V": "B",
}  # fmt: skip

_COMPLEMENT_TABLE = str.maketrans(COMPLEMENT)

CODON_TABLE: dict[str, str] = {
    "TTT": "F", "TTC": "F", "TTA": "L", "TTG": "L",
    "TCT": "S", "TCC": "S", "TCA": "S", "TCG": "S",
    "TAT": "Y", "TAC": "Y", "TAA": "*", "TAG": "*",
    "TGT": "C", "TGC": "C", "TGA": "*", "TGG": "W",
    "CTT": "L", "CTC": "L", "CTA": "L", "CTG": "L",
    "CCT": "P", "CCC": "P", "CCA": "P", "CCG": "P",
    "CAT": "H", "CAC": "H", "CAA": "Q", "CAG": "Q",
    "CGT": "R", "CGC": "R", "CGA": "R", "CGG": "R",
    "ATT": "I", "ATC": "I", "ATA": "I", "ATG": "M",
    "ACT": "T", "ACC": "T", "ACA": "T", "ACG": "T",
    "AAT": "N", "AAC": "N", "AAA": "K", "AAG": "K",
    "AGT": "S", "AGC": "S", "AGA": "R", "AGG": "R",
    "GTT": "V", "GTC": "V", "GTA": "V", "GTG": "V",
    "GCT": "A", "GCC": "A", "GCA": "A", "GCG": "A",
    "GAT": "D", "GAC": "D", "GAA": "E", "GAG": "E",
    "GGT": "G", "GGC": "G", "GGA": "G", "GGG": "G",
}  # fmt: skip


@dataclass
class GCWindow:
    """GC fraction of ``seq[start:end]`` (0-based, relative to the input)."""

    start: int
    end: int
    fraction: float


def reverse_complement(seq: str) -> str:
    """Reverse *seq* and complement each base through the IUPAC table.

    Characters outside the table pass through unchanged.

    Examples:
        >>> reverse_complement("AACGTN")
        'NACGTT'
        >>> reverse_complement("RYKM")
        'KMRY'
        >>> reverse_complement("AC-x")
        'x-GT'
    """
    return seq.translate(_COMPLEMENT_TABLE)[::-1]


def translate(dna: str, strand: int = 1) -> str:
    """Translate *dna* with the standard genetic code.

    Args:
        dna: Nucleotide sequence; case is ignored.
        strand: ``-1`` translates the reverse complement.

    Returns:
        One residue per complete codon, ``*`` for stops and ``X`` for codons
        with ambiguous bases. A trailing partial codon is dropped.

    Examples:
        >>> translate("ATGAAATGA")
        'MK*'
        >>> translate("atgNNNgg")
        'MX'
        >>> translate("TTACAT", strand=-1)
        'M*'
    """
    seq = dna.upper()
    if strand == -1:
        seq = reverse_complement(seq)
    return "".join(CODON_TABLE.get(seq[i : i + 3], "X") for i in range(0, len(seq) - 2, 3))


def gc_content(seq: str) -> float:
    """Percentage of ``G``/``C`` bases in *seq*, rounded to 2 decimals.

    Examples:
        >>> gc_content("GCGC"), gc_content("ATAT"), gc_content("")
        (100.0, 0.0, 0.0)
        >>> gc_content("ACG")
        66.67
    """
    if not seq:
        return 0.0
    gc = seq.count("G") + seq.count("C")
    return round(gc / len(seq) * 100, 2)


def gc_windows(
    seq: str,
    target_windows: int = GC_TARGET_WINDOWS,
    min_window: int = GC_MIN_WINDOW,
) -> list[GCWindow]:
    """Split *seq* into roughly *target_windows* windows and report GC per window.

    The window size is ``max(min_window, len(seq) // target_windows)``.
    Windows start while ``start < len(seq) - window``, so the tail shorter
    than or equal to one window is not reported.

    Examples:
        >>> [w.fraction for w in gc_windows("GGGGGGGGGGAAAAAAAAAACCCCCCCCCC")]
        [1.0, 0.0]
        >>> gc_windows("ACGT")
        []
    """
    window = max(min_window, len(seq) // target_windows)
    windows: list[GCWindow] = []
    for start in range(0, len(seq) - window, window):
        chunk = seq[start : start + window]
        gc = chunk.count("G") + chunk.count("C")
        windows.append(GCWindow(start, start + window, gc / window))
    return windows


def base_color(base: str) -> str:
    """Display color for a nucleotide.

    Examples:
        >>> base_color("a") == BASE_COLORS["A"]
        True
        >>> base_color("R") == FALLBACK_BASE_COLOR
        True
    """
    return BASE_COLORS.get(base.upper(), FALLBACK_BASE_COLOR)


# -- Slicing and export ----------------------------------------------------


def subsequence(seq: str, start: int, end: int) -> str:
    """Slice *seq* with 1-based inclusive coordinates.

    Positions past the end of the sequence are clipped.

    Examples:
        >>> subsequence("ACGTACGT", 2, 4)
        'CGT'
        >>> subsequence("ACGT", 3, 10)
        'GT'
        >>> subsequence("ACGT", 0, 2)
        Traceback (most recent call last):
            ...
        gview.errors.InvalidArgumentError: start must be >= 1, got 0
    """
    if start < 1:
        raise InvalidArgumentError(f"start must be >= 1, got {start}")
    if end < start:
        return ""
    return seq[start - 1 : end]


def feature_sequence(seq: str, feature: Feature) -> str:
    """Forward-strand DNA under *feature*."""
    return subsequence(seq, feature.start, feature.end)


def feature_protein(seq: str, feature: Feature) -> str:
    """Protein for a CDS-like feature.

    Uses the ``translation`` qualifier when the annotation carries one, and
    translates the feature DNA on the feature's strand otherwise.

    Examples:
        >>> cds = Feature("CDS", 1, 6, strand=-1)
        >>> feature_protein("TTACAT", cds)
        'M*'
        >>> feature_protein("", Feature("CDS", 1, 6, qualifiers={"translation": "MKL"}))
        'MKL'
    """
    translation = feature.qualifiers.get("translation")
    if translation:
        return translation
    return translate(feature_sequence(seq, feature), feature.strand)


def region_header(chromosome: str, view: ViewRange) -> str:
    """FASTA header for an exported window, 1-based inclusive.

    Examples:
        >>> region_header("chr1", ViewRange(99, 200))
        'chr1:100-200'
    """
    return f"{chromosome}:{view.start + 1}-{view.end}"


def format_fasta(header: str, seq: str, width: int | None = None) -> str:
    """Render one FASTA record, ``>header`` then the sequence.

    Args:
        header: Header text without the leading ``>``.
        seq: Sequence body.
        width: Wrap the body at this many characters; ``None`` keeps one line.

    Examples:
        >>> format_fasta("chr1:1-4", "ACGT")
        '>chr1:1-4\\nACGT'
        >>> print(format_fasta("x", "ACGTACGT", width=3))
        >x
        ACG
        TAC
        GT
    """
    if width:
        body = "\n".join(seq[i : i + width] for i in range(0, len(seq), width))
    else:
        body = seq
    return f">{header}\n{body}"


_REGION_RE = re.compile(r"^\s*(?:(?P<chrom>[^:\s]+):)?(?P<start>[\d,]+)(?:-(?P<end>[\d,]+))?\s*$")


def parse_region(
    text: str,
    seq_length: int,
    window: int = GOTO_WINDOW,
) -> tuple[str | None, ViewRange]:
    """Parse a go-to string into a chromosome and a clamped view range.

    Accepts ``"1000"``, ``"1000-2000"`` and ``"chr1:1000-2000"`` (1-based,
    inclusive; commas allowed). A single position opens a *window*-sized
    view starting there.

    Args:
        text: Region string.
        seq_length: Length of the target sequence, used for clamping.
        window: Width of the view opened by a single position.

    Returns:
        ``(chromosome or None, ViewRange)`` with 0-based half-open bounds.

    Raises:
        InvalidArgumentError: If the text does not parse or the clamped range
            is empty.

    Examples:
        >>> parse_region("chr1:1,001-2000", 5000)
        ('chr1', ViewRange(start=1000, end=2000))
        >>> parse_region("4500", 5000)
        (None, ViewRange(start=4499, end=5000))
        >>> parse_region("9000-9100", 5000)
        Traceback (most recent call last):
            ...
        gview.errors.InvalidArgumentError: region '9000-9100' is outside a sequence of length 5000
    """
    match = _REGION_RE.match(text)
    if match is None:
        raise InvalidArgumentError(f"cannot parse region {text!r}")
    start = int(match["start"].replace(",", "")) - 1
    if match["end"] is not None:
        end = int(match["end"].replace(",", ""))
    else:
        end = start + window
    start = max(0, start)
    end = min(seq_length, end)
    if start >= end:
        raise InvalidArgumentError(f"region {text!r} is outside a sequence of length {seq_length}")
    return match["chrom"], ViewRange(start, end)
