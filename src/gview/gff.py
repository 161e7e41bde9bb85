"""GFF3/GTF parsing.

Coordinates in GFF are already 1-based inclusive and are kept as-is.
Attributes are read in either GFF3 (``key=value``) or GTF (``key "value"``)
form.

Examples:
    >>> line = "chr1\\tRefSeq\\tgene\\t10\\t90\\t.\\t-\\t.\\tID=g1;gene=abc"
    >>> f = parse_gff(line).annotations["chr1"][0]
    >>> f.type, f.start, f.end, f.strand, f.score, f.qualifiers
    ('gene', 10, 90, -1, None, {'ID': 'g1', 'gene': 'abc'})
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path

from gview.lines import as_text, data_lines
from gview.models import Feature, ParseResult

logger = logging.getLogger(__name__)

MIN_COLUMNS = 9


def parse_attributes(column: str) -> dict[str, str]:
    """Parse the ninth GFF/GTF column into a qualifier mapping.

    Quotes are stripped from values; pieces without a value are dropped.

    Examples:
        >>> parse_attributes("ID=cds1;Parent=g1;product=DNA polymerase")
        {'ID': 'cds1', 'Parent': 'g1', 'product': 'DNA polymerase'}
        >>> parse_attributes('gene_id "b0001"; gene_name "thrL";')
        {'gene_id': 'b0001', 'gene_name': 'thrL'}
        >>> parse_attributes(".")
        {}
    """
    qualifiers: dict[str, str] = {}
    for piece in column.split(";"):
        piece = piece.strip()
        if "=" in piece:
            key, _, value = piece.partition("=")
        else:
            key, _, value = piece.partition(" ")
        key = key.strip()
        value = value.strip().replace('"', "")
        if key and value:
            qualifiers[key] = value
    return qualifiers


def parse_gff(data: str | bytes) -> ParseResult:
    """Parse GFF/GTF text into annotations keyed by sequence name.

    Args:
        data: GFF content as text or UTF-8 bytes.

    Returns:
        ParseResult with ``annotations``. Lines with fewer than nine
        columns, non-numeric coordinates or score, or ``start > end`` are
        counted as skipped.

    Examples:
        >>> r = parse_gff("##gff-version 3\\nchr1\\tsrc\\tCDS\\tx\\t9\\t.\\t+\\t0\\t.\\nshort\\tline")
        >>> r.annotations, r.skipped
        ({}, 2)
    """
    annotations: dict[str, list[Feature]] = defaultdict(list)
    skipped = 0
    for number, line in data_lines(as_text(data)):
        fields = line.split("\t")
        if len(fields) < MIN_COLUMNS:
            skipped += 1
            logger.debug("GFF line %d: %d columns, need %d", number, len(fields), MIN_COLUMNS)
            continue
        seqname, source, feature_type, start, end, score, strand, _frame, attributes = fields[:9]
        try:
            start_pos, end_pos = int(start), int(end)
            score_value = None if score == "." else float(score)
        except ValueError:
            skipped += 1
            logger.debug("GFF line %d: non-numeric coordinate or score", number)
            continue
        if start_pos > end_pos:
            skipped += 1
            logger.debug("GFF line %d: start %d > end %d", number, start_pos, end_pos)
            continue
        annotations[seqname].append(
            Feature(
                type=feature_type,
                start=start_pos,
                end=end_pos,
                strand=-1 if strand == "-" else 1,
                qualifiers=parse_attributes(attributes),
                score=score_value,
                source=source,
            )
        )
    logger.info("Parsed GFF: %d sequence(s), %d line(s) skipped", len(annotations), skipped)
    return ParseResult("gff", annotations=dict(annotations), skipped=skipped)


def read_gff(path: str | Path) -> ParseResult:
    """Parse a GFF/GTF file from disk."""
    return parse_gff(Path(path).read_bytes())
