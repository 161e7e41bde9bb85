"""Data structures for the gview genome model.

Coordinate conventions are fixed per type and converted once, at parse time:

* ``Feature.start`` / ``Feature.end`` are 1-based inclusive (GenBank/GFF
  native; BED is shifted on the way in).
* ``Variant`` and ``Read`` ``start`` / ``end`` are 0-based half-open
  (VCF/SAM ``POS`` is shifted on the way in).
* ``ViewRange`` is 0-based half-open, like a Python slice of the sequence.

Examples:
    >>> f = Feature("gene", 11, 20, qualifiers={"gene": "lacZ"})
    >>> f.name, f.length
    ('lacZ', 10)
    >>> ViewRange(10, 20).feature_bounds()
    (11, 20)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gview.cigar import cigar_reference_length


@dataclass
class Feature:
    """An annotated genomic region.

    Attributes:
        type: Feature key, e.g. ``gene``, ``CDS``, ``BED_feature``.
        start: 1-based inclusive start.
        end: 1-based inclusive end, never less than ``start``.
        strand: ``1`` or ``-1``.
        qualifiers: Free-form string attributes (``gene``, ``locus_tag``, ...).
        score: Optional numeric score (BED/GFF).
        source: GFF source column, when known.
        user_defined: True for features added by hand rather than parsed.
        id: Identifier, assigned to user-defined features only.

    Examples:
        >>> Feature("CDS", 5, 7, strand=-1).qualifiers
        {}
    """

    type: str
    start: int
    end: int
    strand: int = 1
    qualifiers: dict[str, str] = field(default_factory=dict)
    score: float | None = None
    source: str | None = None
    user_defined: bool = False
    id: str | None = None

    @property
    def name(self) -> str:
        """Display name: ``gene``, then ``locus_tag``, then the type."""
        return self.qualifiers.get("gene") or self.qualifiers.get("locus_tag") or self.type

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass
class Variant:
    """One VCF record, 0-based half-open over the reference allele."""

    chromosome: str
    start: int
    end: int
    id: str | None
    ref: str
    alt: str
    quality: float | None = None
    filter: str = "."
    info: str = ""

    def info_fields(self) -> dict[str, str]:
        """Split the raw INFO column into a mapping.

        Examples:
            >>> v = Variant("chr1", 0, 1, None, "A", "G", info="DP=10;DB;AF=0.5")
            >>> v.info_fields()
            {'DP': '10', 'DB': '', 'AF': '0.5'}
            >>> Variant("chr1", 0, 1, None, "A", "G", info=".").info_fields()
            {}
        """
        fields: dict[str, str] = {}
        if self.info in ("", "."):
            return fields
        for part in self.info.split(";"):
            if not part:
                continue
            key, _, value = part.partition("=")
            fields[key] = value
        return fields


@dataclass
class Read:
    """One mapped SAM alignment.

    ``end`` is approximated as ``start + len(sequence)``; use
    ``reference_end`` for the span implied by the CIGAR string.

    Examples:
        >>> r = Read("q1", "chr1", 99, 104, "+", 60, "2M3D3M", "ACGTA", "IIIII")
        >>> r.end, r.reference_end
        (104, 107)
    """

    id: str
    chromosome: str
    start: int
    end: int
    strand: str
    mapping_quality: int
    cigar: str
    sequence: str
    quality: str

    @property
    def is_reverse(self) -> bool:
        return self.strand == "-"

    @property
    def reference_end(self) -> int:
        span = cigar_reference_length(self.cigar)
        if span == 0:
            return self.end
        return self.start + span


@dataclass
class Operon:
    """A run of adjacent same-strand genes with its display color."""

    members: list[Feature]
    strand: int
    color: str
    name: str

    @property
    def start(self) -> int:
        return min(f.start for f in self.members)

    @property
    def end(self) -> int:
        return max(f.end for f in self.members)


@dataclass(frozen=True)
class ViewRange:
    """The inspected window, 0-based half-open ``[start, end)``."""

    start: int
    end: int

    def feature_bounds(self) -> tuple[int, int]:
        """Return the window as a 1-based inclusive ``(start, end)`` pair."""
        return self.start + 1, self.end

    def __len__(self) -> int:
        return max(0, self.end - self.start)


@dataclass
class SearchResult:
    """One search hit, 0-based half-open ``[position, end)``.

    Attributes:
        type: ``"gene"`` for annotation text hits, ``"sequence"`` for motif hits.
        position: 0-based start.
        end: Exclusive end.
        name: Short label.
        details: Human-readable description.
        strand: ``1`` for forward hits, ``-1`` for reverse-complement hits.
        feature: The matched feature, for text hits.
    """

    type: str
    position: int
    end: int
    name: str
    details: str
    strand: int = 1
    feature: Feature | None = None


@dataclass
class ParseResult:
    """Output of a single parser run.

    Stores a format does not produce stay ``None`` so applying the result
    leaves the corresponding model stores untouched.
    """

    format: str
    sequences: dict[str, str] | None = None
    annotations: dict[str, list[Feature]] | None = None
    variants: dict[str, list[Variant]] | None = None
    reads: dict[str, list[Read]] | None = None
    skipped: int = 0

    @property
    def chromosomes(self) -> list[str]:
        """Chromosome names in first-seen order across all populated stores."""
        names: dict[str, None] = {}
        for store in (self.sequences, self.annotations, self.variants, self.reads):
            if store:
                names.update(dict.fromkeys(store))
        return list(names)


def feature_start(feature: Feature) -> int:
    return feature.start


def sorted_annotations(annotations: dict[str, list[Feature]]) -> dict[str, list[Feature]]:
    """Copy of *annotations* with each chromosome's features sorted by start.

    The sort is stable, so features with equal starts keep their file order.

    Examples:
        >>> store = {"chr1": [Feature("gene", 50, 60), Feature("gene", 1, 5)]}
        >>> [f.start for f in sorted_annotations(store)["chr1"]], [f.start for f in store["chr1"]]
        ([1, 50], [50, 1])
    """
    return {chrom: sorted(features, key=feature_start) for chrom, features in annotations.items()}


@dataclass
class GenomeModel:
    """Everything loaded for one browsing session, keyed by chromosome name.

    The caller owns the model and passes it to every query. Names are
    matched exactly (case-sensitive), so cross-referencing a FASTA with a
    GFF only works when both use the same chromosome names.

    Each chromosome's annotations are kept sorted by start (file order
    among equal starts); range queries rely on that order.

    Examples:
        >>> model = GenomeModel()
        >>> model.apply(ParseResult("fasta", sequences={"chr1": "ACGT"}))
        >>> model.apply(ParseResult("bed", annotations={"chr1": [Feature("BED_feature", 1, 2)]}))
        >>> model.sequences["chr1"], len(model.annotations["chr1"])
        ('ACGT', 1)
    """

    sequences: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, list[Feature]] = field(default_factory=dict)
    variants: dict[str, list[Variant]] = field(default_factory=dict)
    reads: dict[str, list[Read]] = field(default_factory=dict)
    user_features: dict[str, list[Feature]] = field(default_factory=dict)
    skipped: int = 0

    def __post_init__(self) -> None:
        self.annotations = sorted_annotations(self.annotations)

    def apply(self, result: ParseResult) -> None:
        """Replace each store the parse result populates.

        User-defined features drop out of the active annotations when an
        annotation file is applied; they stay in ``user_features``.
        """
        if result.sequences is not None:
            self.sequences = result.sequences
        if result.annotations is not None:
            self.annotations = sorted_annotations(result.annotations)
        if result.variants is not None:
            self.variants = result.variants
        if result.reads is not None:
            self.reads = result.reads
        self.skipped += result.skipped

    @property
    def chromosomes(self) -> list[str]:
        """Chromosome names, sequences first, then annotation-only names."""
        names: dict[str, None] = dict.fromkeys(self.sequences)
        for store in (self.annotations, self.variants, self.reads):
            names.update(dict.fromkeys(store))
        return list(names)

    def sequence(self, chromosome: str) -> str:
        """Sequence for *chromosome*, or an empty string when not loaded."""
        return self.sequences.get(chromosome, "")
