"""Range queries over the genome model, plus user-defined feature bookkeeping.

Feature queries use inclusive 1-based bounds: a feature overlaps
``[start, end]`` when ``f.start <= end and f.end >= start``, so features
touching either boundary are returned. Variant and read queries use the
0-based half-open bounds of a ``ViewRange``.

Examples:
    >>> annotations = {"chr1": [Feature("gene", 1, 10), Feature("gene", 20, 30)]}
    >>> [f.start for f in features_overlapping(annotations, "chr1", 10, 20)]
    [1, 20]
    >>> features_overlapping(annotations, "chrX", 1, 100)
    []
"""

from __future__ import annotations

import uuid
from bisect import bisect_right, insort
from collections.abc import Callable, Iterable
from typing import TypeVar

from gview.errors import InvalidArgumentError, require_non_negative
from gview.models import Feature, GenomeModel, Read, Variant, ViewRange, feature_start

FeaturePredicate = Callable[[Feature], bool]

GENE_TRACK_TYPES = frozenset(
    {
        "gene",
        "CDS",
        "mRNA",
        "tRNA",
        "rRNA",
        "misc_feature",
        "regulatory",
        "promoter",
        "terminator",
        "repeat_region",
    }
)

# Feature type -> filter category toggled by the browser's feature filters
FILTER_CATEGORIES: dict[str, str] = {
    "gene": "genes",
    "CDS": "CDS",
    "mRNA": "mRNA",
    "tRNA": "tRNA",
    "rRNA": "rRNA",
    "promoter": "promoter",
    "terminator": "terminator",
    "regulatory": "regulatory",
    "misc_feature": "other",
    "repeat_region": "other",
}

ALL_CATEGORIES = frozenset(FILTER_CATEGORIES.values())

_Spanned = TypeVar("_Spanned", Variant, Read)


def is_gene_track_type(feature_type: str) -> bool:
    """True for the feature types drawn on the genes track.

    Examples:
        >>> is_gene_track_type("CDS"), is_gene_track_type("ncRNA"), is_gene_track_type("source")
        (True, True, False)
    """
    return feature_type in GENE_TRACK_TYPES or "RNA" in feature_type


def filter_category(feature_type: str) -> str:
    """Filter category for *feature_type*; unlisted types fall under ``other``.

    Examples:
        >>> filter_category("gene"), filter_category("ncRNA")
        ('genes', 'other')
    """
    return FILTER_CATEGORIES.get(feature_type, "other")


def type_filter(categories: Iterable[str] | None = None) -> FeaturePredicate:
    """Predicate accepting gene-track features whose category is enabled.

    Args:
        categories: Enabled filter categories; ``None`` enables all of them.

    Examples:
        >>> keep = type_filter({"CDS", "genes"})
        >>> keep(Feature("CDS", 1, 2)), keep(Feature("tRNA", 1, 2)), keep(Feature("source", 1, 2))
        (True, False, False)
    """
    enabled = ALL_CATEGORIES if categories is None else frozenset(categories)

    def predicate(feature: Feature) -> bool:
        return is_gene_track_type(feature.type) and filter_category(feature.type) in enabled

    return predicate


def features_overlapping(
    annotations: dict[str, list[Feature]],
    chromosome: str,
    start: int,
    end: int,
    predicate: FeaturePredicate | None = None,
) -> list[Feature]:
    """Features on *chromosome* that overlap the inclusive range ``[start, end]``.

    Each chromosome's list must be sorted by start, as ``GenomeModel``
    keeps it; the scan stops at the first feature that begins after
    *end*. The lists are never reordered here.

    Args:
        annotations: Chromosome -> feature list, as held by ``GenomeModel``.
        chromosome: Chromosome name, matched exactly.
        start: 1-based inclusive range start.
        end: 1-based inclusive range end.
        predicate: Optional filter applied to overlapping features.

    Returns:
        Overlapping features in ascending start order. An unknown chromosome
        or ``start > end`` gives an empty list.

    Raises:
        InvalidArgumentError: If *start* or *end* is negative.

    Examples:
        >>> annotations = {"chr1": [Feature("gene", 5, 9), Feature("CDS", 50, 60)]}
        >>> [f.type for f in features_overlapping(annotations, "chr1", 9, 50)]
        ['gene', 'CDS']
        >>> features_overlapping(annotations, "chr1", 20, 10)
        []
    """
    require_non_negative(start=start, end=end)
    features = annotations.get(chromosome)
    if not features or start > end:
        return []
    stop = bisect_right(features, end, key=feature_start)
    return [
        f
        for f in features[:stop]
        if f.end >= start and (predicate is None or predicate(f))
    ]


def _spanned_overlapping(
    store: dict[str, list[_Spanned]],
    chromosome: str,
    view: ViewRange,
) -> list[_Spanned]:
    require_non_negative(start=view.start, end=view.end)
    items = store.get(chromosome, [])
    return [item for item in items if item.start < view.end and item.end > view.start]


def variants_overlapping(model: GenomeModel, chromosome: str, view: ViewRange) -> list[Variant]:
    """Variants whose reference allele overlaps the half-open *view*."""
    return _spanned_overlapping(model.variants, chromosome, view)


def reads_overlapping(model: GenomeModel, chromosome: str, view: ViewRange) -> list[Read]:
    """Reads whose approximate span overlaps the half-open *view*."""
    return _spanned_overlapping(model.reads, chromosome, view)


def features_in_view(
    model: GenomeModel,
    chromosome: str,
    view: ViewRange,
    predicate: FeaturePredicate | None = None,
) -> list[Feature]:
    """``features_overlapping`` for a 0-based half-open view range."""
    start, end = view.feature_bounds()
    return features_overlapping(model.annotations, chromosome, start, end, predicate)


# -- User-defined features -------------------------------------------------


def add_user_feature(
    model: GenomeModel,
    chromosome: str,
    feature_type: str,
    name: str,
    start: int,
    end: int,
    strand: int = 1,
    description: str = "",
) -> Feature:
    """Create a user-defined feature and add it to the model.

    The feature goes into both the persistent ``user_features`` store and
    the active annotations. Loading another annotation file replaces the
    active annotations; ``restore_user_features`` puts the user features
    back.

    Args:
        model: Model to update.
        chromosome: Target chromosome.
        feature_type: Feature type, e.g. ``gene`` or ``promoter``.
        name: Feature name, stored as the ``gene`` qualifier.
        start: 1-based inclusive start.
        end: 1-based inclusive end.
        strand: ``1`` or ``-1``.
        description: Optional free text for ``product`` and ``note``.

    Returns:
        The new feature.

    Raises:
        InvalidArgumentError: On an empty name or chromosome, a position
            below 1, ``start > end``, an end past the loaded sequence, or
            a strand other than 1/-1.

    Examples:
        >>> model = GenomeModel(sequences={"chr1": "A" * 100})
        >>> f = add_user_feature(model, "chr1", "gene", "myGene", 10, 20)
        >>> f.user_defined, f.id.startswith("user_"), f.qualifiers["product"]
        (True, True, 'myGene')
        >>> model.annotations["chr1"] == model.user_features["chr1"] == [f]
        True
        >>> add_user_feature(model, "chr1", "gene", "big", 10, 200)
        Traceback (most recent call last):
            ...
        gview.errors.InvalidArgumentError: end position (200) exceeds sequence length (100)
    """
    name = name.strip()
    description = description.strip()
    if not name:
        raise InvalidArgumentError("feature name must not be empty")
    if not chromosome:
        raise InvalidArgumentError("chromosome must not be empty")
    if start < 1 or end < 1:
        raise InvalidArgumentError(f"positions must be >= 1, got {start}-{end}")
    if start > end:
        raise InvalidArgumentError(f"start ({start}) must not exceed end ({end})")
    if strand not in (1, -1):
        raise InvalidArgumentError(f"strand must be 1 or -1, got {strand}")
    seq = model.sequences.get(chromosome)
    if seq is not None and end > len(seq):
        raise InvalidArgumentError(f"end position ({end}) exceeds sequence length ({len(seq)})")

    feature = Feature(
        type=feature_type,
        start=start,
        end=end,
        strand=strand,
        qualifiers={
            "gene": name,
            "product": description or name,
            "note": description,
            "user_defined": "true",
        },
        user_defined=True,
        id=f"user_{uuid.uuid4().hex}",
    )
    model.user_features.setdefault(chromosome, []).append(feature)
    insort(model.annotations.setdefault(chromosome, []), feature, key=feature_start)
    return feature


def restore_user_features(model: GenomeModel, chromosome: str | None = None) -> int:
    """Merge stored user-defined features back into the active annotations.

    Args:
        model: Model to update.
        chromosome: Restore only this chromosome; ``None`` restores all.

    Returns:
        Number of features added. Features already present (same id) are
        not added twice.

    Examples:
        >>> model = GenomeModel(sequences={"chr1": "A" * 50})
        >>> _ = add_user_feature(model, "chr1", "gene", "g", 1, 5)
        >>> model.annotations = {}
        >>> restore_user_features(model), restore_user_features(model)
        (1, 0)
    """
    chromosomes = [chromosome] if chromosome is not None else list(model.user_features)
    added = 0
    for chrom in chromosomes:
        stored = model.user_features.get(chrom)
        if not stored:
            continue
        active = model.annotations.setdefault(chrom, [])
        present = {f.id for f in active if f.user_defined}
        for feature in stored:
            if feature.id not in present:
                insort(active, feature, key=feature_start)
                added += 1
    return added
