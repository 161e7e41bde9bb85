"""VCF parsing.

``POS`` is 1-based in VCF; variants are stored 0-based half-open over the
reference allele.

Examples:
    >>> v = parse_vcf("chr1\\t100\\trs1\\tA\\tG\\t50\\tPASS\\tinfo").variants["chr1"][0]
    >>> v.start, v.end, v.id, v.ref, v.alt, v.quality
    (99, 100, 'rs1', 'A', 'G', 50.0)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path

from gview.lines import as_text, data_lines
from gview.models import ParseResult, Variant

logger = logging.getLogger(__name__)

MIN_COLUMNS = 8


def parse_vcf(data: str | bytes) -> ParseResult:
    """Parse VCF text into variants keyed by chromosome.

    Args:
        data: VCF content as text or UTF-8 bytes.

    Returns:
        ParseResult with ``variants``. ``ID`` and ``QUAL`` of ``.`` become
        ``None``; lines with fewer than eight columns or a non-numeric
        ``POS``/``QUAL`` are skipped.

    Examples:
        >>> r = parse_vcf("##fileformat=VCFv4.2\\n#CHROM\\tPOS\\nchr2\\t5\\t.\\tAT\\tA\\t.\\t.\\tDP=3")
        >>> v = r.variants["chr2"][0]
        >>> v.start, v.end, v.id, v.quality, v.info_fields()
        (4, 6, None, None, {'DP': '3'})
    """
    variants: dict[str, list[Variant]] = defaultdict(list)
    skipped = 0
    for number, line in data_lines(as_text(data)):
        fields = line.split("\t")
        if len(fields) < MIN_COLUMNS:
            skipped += 1
            logger.debug("VCF line %d: %d columns, need %d", number, len(fields), MIN_COLUMNS)
            continue
        chrom, pos, vid, ref, alt, qual, filt, info = fields[:8]
        try:
            start = int(pos) - 1
            quality = None if qual == "." else float(qual)
        except ValueError:
            skipped += 1
            logger.debug("VCF line %d: non-numeric POS or QUAL", number)
            continue
        if start < 0:
            skipped += 1
            logger.debug("VCF line %d: POS must be >= 1", number)
            continue
        variants[chrom].append(
            Variant(
                chromosome=chrom,
                start=start,
                end=start + len(ref),
                id=None if vid == "." else vid,
                ref=ref,
                alt=alt,
                quality=quality,
                filter=filt,
                info=info,
            )
        )
    logger.info("Parsed VCF: %d chromosome(s), %d line(s) skipped", len(variants), skipped)
    return ParseResult("vcf", variants=dict(variants), skipped=skipped)


def read_vcf(path: str | Path) -> ParseResult:
    """Parse a VCF file from disk."""
    return parse_vcf(Path(path).read_bytes())
