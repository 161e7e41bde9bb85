"""Row packing for the genes track.

Features are assigned greedily, in ascending start order, to the first row
where they do not collide with anything already placed. Two features
collide when they overlap after padding each end with a fixed buffer, which
keeps neighbours from touching visually.

Examples:
    >>> a, b, c = Feature("gene", 1, 100), Feature("gene", 50, 150), Feature("gene", 200, 300)
    >>> [[f.start for f in row] for row in pack_rows([c, b, a])]
    [[1, 200], [50]]
"""

from __future__ import annotations

from collections.abc import Iterable

from gview.config import ROW_BUFFER
from gview.index import features_in_view, type_filter
from gview.models import Feature, GenomeModel, ViewRange


def features_collide(a: Feature, b: Feature, buffer: int = ROW_BUFFER) -> bool:
    """True when *a* and *b* overlap once each end is padded by *buffer* bases.

    Examples:
        >>> features_collide(Feature("gene", 1, 100), Feature("gene", 105, 200))
        True
        >>> features_collide(Feature("gene", 1, 100), Feature("gene", 111, 200))
        False
        >>> features_collide(Feature("gene", 1, 100), Feature("gene", 105, 200), buffer=0)
        False
    """
    return a.start < b.end + buffer and a.end + buffer > b.start


def pack_rows(
    features: Iterable[Feature],
    view_start: int | None = None,
    view_end: int | None = None,
    buffer: int | None = None,
) -> list[list[Feature]]:
    """Assign features to non-colliding rows.

    Greedy first-fit over features sorted by start (stable, so input order
    breaks ties). Row count is minimal only in the greedy sense.

    Args:
        features: Features to lay out, typically the result of a range query.
        view_start: Start of the displayed window. Accepted for callers that
            pass the view along; it does not change the assignment.
        view_end: End of the displayed window; see *view_start*.
        buffer: Padding in bases; defaults to the configured row buffer.

    Returns:
        Rows top to bottom, each in placement order.

    Examples:
        >>> pack_rows([])
        []
        >>> rows = pack_rows([Feature("gene", 1, 10), Feature("gene", 15, 20)], buffer=0)
        >>> len(rows)
        1
    """
    pad = ROW_BUFFER if buffer is None else buffer
    rows: list[list[Feature]] = []
    for feature in sorted(features, key=lambda f: f.start):
        for row in rows:
            if not any(features_collide(feature, placed, pad) for placed in row):
                row.append(feature)
                break
        else:
            rows.append([feature])
    return rows


def row_index(rows: list[list[Feature]]) -> dict[int, int]:
    """Map ``id(feature)`` to its row number for quick lookups while drawing.

    Examples:
        >>> f = Feature("gene", 1, 5)
        >>> row_index([[Feature("gene", 1, 2)], [f]])[id(f)]
        1
    """
    return {id(feature): i for i, row in enumerate(rows) for feature in row}


def gene_rows(
    model: GenomeModel,
    chromosome: str,
    view: ViewRange,
    categories: Iterable[str] | None = None,
) -> list[list[Feature]]:
    """Packed rows for the genes track of *chromosome* within *view*.

    Args:
        model: Loaded genome model.
        chromosome: Chromosome to lay out.
        view: 0-based half-open window.
        categories: Enabled filter categories (see ``gview.index``); ``None``
            shows every gene-track type.

    Returns:
        Rows of features, as produced by ``pack_rows``.

    Examples:
        >>> model = GenomeModel(annotations={"chr1": [
        ...     Feature("gene", 1, 100), Feature("CDS", 1, 100), Feature("source", 1, 500)]})
        >>> [[f.type for f in row] for row in gene_rows(model, "chr1", ViewRange(0, 500))]
        [['gene'], ['CDS']]
    """
    visible = features_in_view(model, chromosome, view, type_filter(categories))
    return pack_rows(visible, view.start, view.end)
