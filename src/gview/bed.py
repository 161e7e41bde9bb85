"""BED parsing.

BED intervals are 0-based half-open on disk; features are stored 1-based
inclusive, so ``start`` gains one and ``end`` is kept.

Examples:
    >>> f = parse_bed("chr1\\t10\\t20\\tfeatureA\\t500\\t+").annotations["chr1"][0]
    >>> f.start, f.end, f.strand, f.score, f.qualifiers["name"]
    (11, 20, 1, 500.0, 'featureA')
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path

from gview.lines import as_text, data_lines
from gview.models import Feature, ParseResult

logger = logging.getLogger(__name__)

MIN_COLUMNS = 3
BED_FEATURE = "BED_feature"


def parse_bed(data: str | bytes) -> ParseResult:
    """Parse BED text into annotations keyed by chromosome.

    Every record becomes a ``BED_feature``. The name column lands in the
    ``name`` qualifier (default ``"BED_feature"``) and an optional score in
    both ``score`` and the ``score`` qualifier.

    Args:
        data: BED content as text or UTF-8 bytes.

    Returns:
        ParseResult with ``annotations``. ``track``/``browser`` lines and
        comments are ignored; short or non-numeric lines are skipped.

    Examples:
        >>> r = parse_bed("track name=x\\nchr2\\t0\\t5\\nchr2\\tA\\t5\\n")
        >>> f = r.annotations["chr2"][0]
        >>> f.start, f.end, f.strand, f.score, f.qualifiers, r.skipped
        (1, 5, 1, None, {'name': 'BED_feature'}, 1)
    """
    annotations: dict[str, list[Feature]] = defaultdict(list)
    skipped = 0
    for number, line in data_lines(as_text(data), ("#", "track", "browser")):
        fields = line.split("\t")
        if len(fields) < MIN_COLUMNS:
            skipped += 1
            logger.debug("BED line %d: %d columns, need %d", number, len(fields), MIN_COLUMNS)
            continue
        chrom = fields[0]
        name = fields[3] if len(fields) > 3 and fields[3] else BED_FEATURE
        try:
            start, end = int(fields[1]) + 1, int(fields[2])
            score = float(fields[4]) if len(fields) > 4 and fields[4] else None
        except ValueError:
            skipped += 1
            logger.debug("BED line %d: non-numeric coordinate or score", number)
            continue
        if start > end:
            skipped += 1
            logger.debug("BED line %d: empty interval", number)
            continue
        qualifiers = {"name": name}
        if score is not None:
            qualifiers["score"] = fields[4]
        strand = -1 if len(fields) > 5 and fields[5] == "-" else 1
        annotations[chrom].append(Feature(BED_FEATURE, start, end, strand, qualifiers, score))
    logger.info("Parsed BED: %d chromosome(s), %d line(s) skipped", len(annotations), skipped)
    return ParseResult("bed", annotations=dict(annotations), skipped=skipped)


def read_bed(path: str | Path) -> ParseResult:
    """Parse a BED file from disk."""
    return parse_bed(Path(path).read_bytes())
