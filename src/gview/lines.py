"""Line iteration shared by the flat-file parsers."""

from __future__ import annotations

from collections.abc import Iterator


def as_text(data: str | bytes) -> str:
    """Decode *data* as UTF-8 when it arrives as bytes.

    Examples:
        >>> as_text(b"ACGT\\xff")
        'ACGT\\ufffd'
        >>> as_text(">chr1")
        '>chr1'
    """
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def data_lines(text: str, comment_prefixes: tuple[str, ...] = ("#",)) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, stripped_line)`` for non-blank, non-comment lines.

    Line numbers are 1-based. Stripping removes the trailing newline and any
    ``\\r`` left by Windows line endings.

    Examples:
        >>> list(data_lines("#h\\n\\nchr1\\t1\\t2\\r\\n  \\n"))
        [(3, 'chr1\\t1\\t2')]
        >>> list(data_lines("@SQ\\nr1", comment_prefixes=("@",)))
        [(2, 'r1')]
    """
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(comment_prefixes):
            continue
        yield number, stripped
