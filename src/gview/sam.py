"""SAM parsing and CIGAR walking.

Reads are stored 0-based with ``end = start + len(SEQ)``. That end ignores
indels and spliced gaps; ``Read.reference_end`` gives the true span
when needed.

Examples:
    >>> line = "r1\\t16\\tchr1\\t100\\t60\\t4M\\t*\\t0\\t0\\tACGT\\tIIII"
    >>> read = parse_sam(line).reads["chr1"][0]
    >>> read.start, read.end, read.strand
    (99, 103, '-')
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path

from gview.cigar import (
    CIGAR_DEL,
    CIGAR_INS,
    CIGAR_MATCH,
    CIGAR_REF_SKIP,
    CIGAR_SEQ_MATCH,
    CIGAR_SEQ_MISMATCH,
    CIGAR_SOFT_CLIP,
    parse_cigar,
)
from gview.lines import as_text, data_lines
from gview.models import ParseResult, Read

logger = logging.getLogger(__name__)

MIN_COLUMNS = 11
FLAG_REVERSE = 16


def aligned_bases(
    read: Read,
    ref_start: int,
    ref_end: int,
) -> tuple[dict[int, str], dict[int, list[str]]]:
    """Place the read's bases on reference positions by walking its CIGAR.

    Args:
        read: A parsed SAM read.
        ref_start: 0-based start of the reference window (inclusive).
        ref_end: 0-based end of the reference window (exclusive).

    Returns:
        A tuple of (aligned, inserts) where aligned maps reference positions
        to bases (``-`` for deletions) and inserts maps the reference position
        preceding an insertion to the inserted bases.

    Examples:
        >>> r = Read("q", "chr1", 0, 6, "+", 60, "2M2I1D2M", "ACTTGT", "*")
        >>> aligned, inserts = aligned_bases(r, 0, 10)
        >>> aligned
        {0: 'A', 1: 'C', 2: '-', 3: 'G', 4: 'T'}
        >>> dict(inserts)
        {1: ['T', 'T']}
    """
    aligned: dict[int, str] = {}
    inserts: dict[int, list[str]] = defaultdict(list)
    qpos, rpos = 0, read.start
    seq = read.sequence
    for op, length in parse_cigar(read.cigar):
        if op in (CIGAR_MATCH, CIGAR_SEQ_MATCH, CIGAR_SEQ_MISMATCH):
            for _ in range(length):
                if ref_start <= rpos < ref_end and qpos < len(seq):
                    aligned[rpos] = seq[qpos].upper()
                qpos += 1
                rpos += 1
        elif op == CIGAR_INS:
            anchor = rpos - 1
            if ref_start <= anchor < ref_end:
                inserts[anchor].extend(b.upper() for b in seq[qpos : qpos + length])
            qpos += length
        elif op == CIGAR_DEL:
            for _ in range(length):
                if ref_start <= rpos < ref_end:
                    aligned[rpos] = "-"
                rpos += 1
        elif op == CIGAR_REF_SKIP:
            rpos += length
        elif op == CIGAR_SOFT_CLIP:
            qpos += length
    return aligned, inserts


def parse_sam(data: str | bytes) -> ParseResult:
    """Parse SAM text into mapped reads keyed by reference name.

    Args:
        data: SAM content as text or UTF-8 bytes.

    Returns:
        ParseResult with ``reads``. Header (``@``) lines are ignored and
        unmapped records (``RNAME`` of ``*`` or ``POS`` of ``0``) are dropped.
        Lines with fewer than eleven columns or non-numeric ``FLAG``/``POS``/
        ``MAPQ`` are counted as skipped.

    Examples:
        >>> sam = "@HD\\tVN:1.6\\nr1\\t4\\t*\\t0\\t0\\t*\\t*\\t0\\t0\\tACGT\\tIIII\\n"
        >>> r = parse_sam(sam)
        >>> r.reads, r.skipped
        ({}, 0)
    """
    reads: dict[str, list[Read]] = defaultdict(list)
    skipped = 0
    unmapped = 0
    for number, line in data_lines(as_text(data), ("@",)):
        fields = line.split("\t")
        if len(fields) < MIN_COLUMNS:
            skipped += 1
            logger.debug("SAM line %d: %d columns, need %d", number, len(fields), MIN_COLUMNS)
            continue
        qname, flag, rname, pos, mapq, cigar, _rnext, _pnext, _tlen, seq, qual = fields[:11]
        if rname == "*" or pos == "0":
            unmapped += 1
            continue
        try:
            start = int(pos) - 1
            flag_bits = int(flag)
            mapping_quality = int(mapq)
        except ValueError:
            skipped += 1
            logger.debug("SAM line %d: non-numeric FLAG, POS or MAPQ", number)
            continue
        reads[rname].append(
            Read(
                id=qname,
                chromosome=rname,
                start=start,
                end=start + len(seq),
                strand="-" if flag_bits & FLAG_REVERSE else "+",
                mapping_quality=mapping_quality,
                cigar=cigar,
                sequence=seq,
                quality=qual,
            )
        )
    logger.info(
        "Parsed SAM: %d reference(s), %d unmapped dropped, %d line(s) skipped",
        len(reads),
        unmapped,
        skipped,
    )
    return ParseResult("sam", reads=dict(reads), skipped=skipped)


def read_sam(path: str | Path) -> ParseResult:
    """Parse a SAM file from disk."""
    return parse_sam(Path(path).read_bytes())
