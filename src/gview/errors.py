"""Exception types raised by gview.

Only programmer errors raise. Missing data (unknown chromosome, empty
window, malformed input lines) degrades to empty results instead.

Examples:
    >>> issubclass(InvalidArgumentError, ValueError)
    True
"""

from __future__ import annotations


class GviewError(Exception):
    """Base class for gview errors."""


class InvalidArgumentError(GviewError, ValueError):
    """An argument is invalid at the API boundary (negative position, bad strand, ...)."""


def require_non_negative(**positions: int) -> None:
    """Raise ``InvalidArgumentError`` if any named position is negative.

    Examples:
        >>> require_non_negative(start=0, end=5)
        >>> require_non_negative(start=-1)
        Traceback (most recent call last):
            ...
        gview.errors.InvalidArgumentError: start must be >= 0, got -1
    """
    for name, value in positions.items():
        if value < 0:
            raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
