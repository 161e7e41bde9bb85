"""GenBank flat-file parsing.

A line-oriented state machine: ``LOCUS`` opens a record, ``FEATURES``
switches to feature-table mode, ``ORIGIN`` switches to sequence mode and
``//`` closes the record. Feature locations are reduced to a single span
(``start``/``end``/``strand``), which is all the browser draws.

Examples:
    >>> text = '''LOCUS       demo   12 bp    DNA     linear
    ... FEATURES             Location/Qualifiers
    ...      gene            complement(3..11)
    ...                      /gene="abc"
    ... ORIGIN
    ...         1 acgtacgtac gt
    ... //'''
    >>> result = parse_genbank(text)
    >>> result.sequences
    {'demo': 'ACGTACGTACGT'}
    >>> f = result.annotations['demo'][0]
    >>> f.type, f.start, f.end, f.strand, f.qualifiers
    ('gene', 3, 11, -1, {'gene': 'abc'})
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from gview.lines import as_text
from gview.models import Feature, ParseResult

logger = logging.getLogger(__name__)

# Column layout of the feature table
FEATURE_INDENT = 5
QUALIFIER_INDENT = 21

_REMOTE_ACCESSION_RE = re.compile(r"[A-Za-z_][\w.]*:[<>]?\d+(?:\.\.[<>]?\d+)?")
_NUMBER_RE = re.compile(r"\d+")


def parse_location(location: str) -> tuple[int, int, int] | None:
    """Reduce a GenBank location string to ``(start, end, strand)``.

    Ranges, single positions, ``complement(...)`` and ``join``/``order``
    lists are supported; a multi-part location becomes its outer span.
    Partial markers (``<``/``>``) are ignored.

    Args:
        location: Location text from the feature table.

    Returns:
        1-based inclusive span and strand, or ``None`` when the location
        holds no position.

    Examples:
        >>> parse_location("123..456")
        (123, 456, 1)
        >>> parse_location("complement(123..456)")
        (123, 456, -1)
        >>> parse_location("789")
        (789, 789, 1)
        >>> parse_location("join(<10..20,30..>40)")
        (10, 40, 1)
        >>> parse_location("complement(join(AB000001.1:1..5,100..200))")
        (100, 200, -1)
        >>> parse_location("unknown") is None
        True
    """
    strand = -1 if "complement" in location else 1
    positions = [int(n) for n in _NUMBER_RE.findall(_REMOTE_ACCESSION_RE.sub("", location))]
    if not positions:
        return None
    return min(positions), max(positions), strand


class _GenBankReader:
    """Accumulates records while ``parse_genbank`` walks the lines."""

    def __init__(self) -> None:
        self.sequences: dict[str, str] = {}
        self.annotations: dict[str, list[Feature]] = {}
        self.skipped = 0
        self.record: str | None = None
        self.in_features = False
        self.in_origin = False
        self.seq_buf: list[str] = []
        # Open feature: type, location text, qualifiers
        self.feature: tuple[str, list[str], dict[str, str]] | None = None
        self.qualifier: str | None = None

    def start_record(self, line: str) -> None:
        self.end_record()
        parts = line.split()
        self.record = parts[1] if len(parts) > 1 else None
        if self.record is None:
            self.skipped += 1
            logger.debug("LOCUS line without a name: %r", line)
            return
        self.sequences[self.record] = ""
        self.annotations[self.record] = []

    def end_record(self) -> None:
        self.close_feature()
        if self.record is not None and self.seq_buf:
            self.sequences[self.record] = "".join(self.seq_buf)
        self.in_features = False
        self.in_origin = False
        self.seq_buf = []
        self.record = None

    def open_feature(self, line: str) -> None:
        self.close_feature()
        key, _, location = line.strip().partition(" ")
        self.feature = (key, [location.strip()], {})

    def close_feature(self) -> None:
        if self.feature is None or self.record is None:
            self.feature = None
            self.qualifier = None
            return
        key, location_parts, qualifiers = self.feature
        location = "".join(location_parts)
        span = parse_location(location)
        if span is None:
            self.skipped += 1
            logger.debug("Feature %s with unparseable location %r skipped", key, location)
        else:
            start, end, strand = span
            qualifiers = {k: v.replace('"', "") for k, v in qualifiers.items()}
            self.annotations[self.record].append(Feature(key, start, end, strand, qualifiers))
        self.feature = None
        self.qualifier = None

    def add_qualifier(self, text: str) -> None:
        key, _, value = text[1:].partition("=")
        self.feature[2][key] = value
        self.qualifier = key

    def continue_feature(self, text: str) -> None:
        _, location_parts, qualifiers = self.feature
        if self.qualifier is None:
            location_parts.append(text)
        elif self.qualifier == "translation":
            qualifiers[self.qualifier] += text
        else:
            qualifiers[self.qualifier] += " " + text

    def feature_line(self, line: str) -> None:
        indent = len(line) - len(line.lstrip(" "))
        text = line.strip()
        if indent == FEATURE_INDENT:
            self.open_feature(line)
        elif indent >= QUALIFIER_INDENT and self.feature is not None:
            if text.startswith("/"):
                self.add_qualifier(text)
            else:
                self.continue_feature(text)


def parse_genbank(data: str | bytes) -> ParseResult:
    """Parse GenBank text into sequences and annotations keyed by LOCUS name.

    Args:
        data: GenBank content as text or UTF-8 bytes; may hold several records.

    Returns:
        ParseResult with ``sequences`` and ``annotations``. Lines that appear
        before any ``LOCUS`` line are ignored; features whose location has
        no position are counted as skipped.

    Examples:
        >>> parse_genbank("FEATURES\\n     gene  1..5\\n").annotations
        {}
    """
    reader = _GenBankReader()
    for line in as_text(data).splitlines():
        line = line.rstrip("\r")
        if line.startswith("LOCUS"):
            reader.start_record(line)
            continue
        if reader.record is None:
            continue
        if line.startswith("//"):
            reader.end_record()
        elif reader.in_origin:
            reader.seq_buf.append(re.sub(r"[\d\s]+", "", line).upper())
        elif line.startswith("ORIGIN"):
            reader.close_feature()
            reader.in_features = False
            reader.in_origin = True
        elif line.startswith("FEATURES"):
            reader.in_features = True
        elif line[:1] not in ("", " "):
            # Any other top-level keyword ends the feature table
            reader.close_feature()
            reader.in_features = False
        elif reader.in_features:
            reader.feature_line(line)
    reader.end_record()
    n_features = sum(len(v) for v in reader.annotations.values())
    logger.info(
        "Parsed GenBank: %d record(s), %d feature(s), %d skipped",
        len(reader.sequences),
        n_features,
        reader.skipped,
    )
    return ParseResult(
        "genbank",
        sequences=reader.sequences,
        annotations=reader.annotations,
        skipped=reader.skipped,
    )


def read_genbank(path: str | Path) -> ParseResult:
    """Parse a GenBank file from disk."""
    return parse_genbank(Path(path).read_bytes())
