"""FASTA parsing.

Each ``>`` header starts a record named by its first whitespace-delimited
token; the following lines are concatenated, whitespace-free and upper-cased.

Examples:
    >>> result = parse_fasta(">chr1 E. coli\\nacgt\\nAC GT\\n>chr2\\nNNNN\\n")
    >>> result.sequences
    {'chr1': 'ACGTACGT', 'chr2': 'NNNN'}
"""

from __future__ import annotations

import logging
from pathlib import Path

from gview.lines import as_text
from gview.models import ParseResult

logger = logging.getLogger(__name__)


def parse_fasta(data: str | bytes) -> ParseResult:
    """Parse FASTA text into a ``ParseResult`` carrying only sequences.

    Args:
        data: FASTA content as text or UTF-8 bytes.

    Returns:
        ParseResult whose ``sequences`` maps record names to sequences.
        Lines before the first header, and records whose header has no
        name, are counted as skipped.

    Examples:
        >>> parse_fasta("ACGT\\n>chr1\\nAC\\n").sequences
        {'chr1': 'AC'}
        >>> parse_fasta("ACGT\\n>chr1\\nAC\\n").skipped
        1
        >>> parse_fasta("").sequences
        {}
    """
    sequences: dict[str, str] = {}
    skipped = 0
    name: str | None = None
    buf: list[str] = []
    for line in as_text(data).splitlines():
        line = line.strip()
        if line.startswith(">"):
            if name:
                sequences[name] = "".join(buf)
            tokens = line[1:].split()
            name = tokens[0] if tokens else None
            if name is None:
                skipped += 1
                logger.debug("FASTA header without a name: %r", line)
            buf = []
        elif line:
            if name:
                buf.append("".join(line.split()).upper())
            else:
                skipped += 1
    if name:
        sequences[name] = "".join(buf)
    logger.info("Parsed FASTA: %d sequence(s), %d line(s) skipped", len(sequences), skipped)
    return ParseResult("fasta", sequences=sequences, skipped=skipped)


def read_fasta(path: str | Path) -> ParseResult:
    """Parse a FASTA file from disk.

    Args:
        path: Path to the FASTA file.

    Returns:
        ParseResult with the file's sequences.

    Examples:
        >>> import tempfile; from pathlib import Path
        >>> d = Path(tempfile.mkdtemp())
        >>> fasta = d / "test.fa"
        >>> _ = fasta.write_text(">seq1\\nACGT\\n>seq2\\nTGCA\\n")
        >>> read_fasta(fasta).sequences
        {'seq1': 'ACGT', 'seq2': 'TGCA'}
        >>> read_fasta(d / "missing.fa")
        Traceback (most recent call last):
            ...
        FileNotFoundError: ...
    """
    return parse_fasta(Path(path).read_bytes())
