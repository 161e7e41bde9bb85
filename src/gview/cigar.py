"""CIGAR operation codes and span helpers.

Examples:
    >>> CIGAR_MATCH, CIGAR_INS, CIGAR_DEL
    (0, 1, 2)
"""

from __future__ import annotations

import re

# -- CIGAR operations --------------------------------------------------
CIGAR_MATCH = 0  # M
CIGAR_INS = 1  # I
CIGAR_DEL = 2  # D
CIGAR_REF_SKIP = 3  # N
CIGAR_SOFT_CLIP = 4  # S
CIGAR_HARD_CLIP = 5  # H
CIGAR_PAD = 6  # P
CIGAR_SEQ_MATCH = 7  # =
CIGAR_SEQ_MISMATCH = 8  # X

CIGAR_CODES = {"M": 0, "I": 1, "D": 2, "N": 3, "S": 4, "H": 5, "P": 6, "=": 7, "X": 8}
REFERENCE_CONSUMING = frozenset(
    {CIGAR_MATCH, CIGAR_DEL, CIGAR_REF_SKIP, CIGAR_SEQ_MATCH, CIGAR_SEQ_MISMATCH}
)

_CIGAR_RE = re.compile(r"(\d+)([MIDNSHP=X])")


def parse_cigar(cigar: str) -> list[tuple[int, int]]:
    """Split a CIGAR string into ``(operation, length)`` tuples.

    ``*`` (no alignment) yields an empty list.

    Examples:
        >>> parse_cigar("3S10M2I5M")
        [(4, 3), (0, 10), (1, 2), (0, 5)]
        >>> parse_cigar("*")
        []
    """
    return [(CIGAR_CODES[op], int(length)) for length, op in _CIGAR_RE.findall(cigar)]


def cigar_reference_length(cigar: str) -> int:
    """Number of reference bases an alignment spans according to its CIGAR.

    Examples:
        >>> cigar_reference_length("10M5D10M")
        25
        >>> cigar_reference_length("5S10M3I2M100N8M")
        120
        >>> cigar_reference_length("*")
        0
    """
    return sum(length for op, length in parse_cigar(cigar) if op in REFERENCE_CONSUMING)
