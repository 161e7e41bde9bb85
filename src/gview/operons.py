"""Operon detection and coloring.

Putative operons are runs of gene-like features on the same strand whose
intergenic gaps are at most ``max_gap`` bases. A GenBank file usually holds
a ``gene`` and a ``CDS`` for the same locus, and a GFF file a gene with its
mRNA and CDS segments. Overlapping features on one strand that share a
name or an ID/Parent link, or nest inside each other, count as one gene.
Colors are taken from the configured palette in detection order, so the
same annotation set always gets the same colors.

Examples:
    >>> genes = [Feature("gene", 1, 900, qualifiers={"gene": "lacZ"}),
    ...          Feature("gene", 950, 1500, qualifiers={"gene": "lacY"}),
    ...          Feature("gene", 1520, 2100, qualifiers={"gene": "lacA"}),
    ...          Feature("gene", 5000, 6000, strand=-1)]
    >>> [(o.name, o.start, o.end) for o in detect_operons(genes)]
    [('lacZ-lacY-lacA', 1, 2100)]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from gview.config import OPERON_COLORS, OPERON_MAX_GAP, OPERON_MIN_GENES, feature_type_color
from gview.models import Feature, Operon

logger = logging.getLogger(__name__)

NON_GENE_TYPES = frozenset({"promoter", "terminator"})


def is_gene_like(feature: Feature) -> bool:
    """True for features that can belong to an operon.

    Examples:
        >>> is_gene_like(Feature("CDS", 1, 9)), is_gene_like(Feature("tRNA", 1, 9))
        (True, True)
        >>> is_gene_like(Feature("promoter", 1, 9)), is_gene_like(Feature("repeat_region", 1, 9))
        (False, False)
    """
    if feature.type in NON_GENE_TYPES:
        return False
    return feature.type in ("gene", "CDS") or "RNA" in feature.type


def _locus_key(feature: Feature) -> tuple[int, int, int]:
    return feature.start, feature.end, feature.strand


def _identifiers(feature: Feature) -> set[str]:
    """Names that tie a feature to its gene: gene, locus_tag, ID and Parent ids."""
    quals = feature.qualifiers
    names = {quals[key] for key in ("gene", "locus_tag", "ID") if quals.get(key)}
    names.update(p for p in quals.get("Parent", "").split(",") if p)
    return names


@dataclass
class _GeneUnit:
    """Overlapping same-strand features that describe one gene."""

    members: list[Feature]
    start: int
    end: int
    strand: int
    names: set[str]

    @classmethod
    def of(cls, feature: Feature) -> _GeneUnit:
        return cls([feature], feature.start, feature.end, feature.strand, _identifiers(feature))

    def accepts(self, feature: Feature) -> bool:
        if feature.strand != self.strand or feature.start > self.end or feature.end < self.start:
            return False
        if self.names & _identifiers(feature):
            return True
        inside = self.start <= feature.start and feature.end <= self.end
        return inside or (feature.start <= self.start and self.end <= feature.end)

    def add(self, feature: Feature) -> None:
        self.members.append(feature)
        self.start = min(self.start, feature.start)
        self.end = max(self.end, feature.end)
        self.names |= _identifiers(feature)

    @property
    def name(self) -> str:
        for feature in self.members:
            if feature.qualifiers.get("gene") or feature.qualifiers.get("locus_tag"):
                return feature.name
        return f"{self.members[0].type}@{self.start}"


def _gene_units(features: Iterable[Feature]) -> list[_GeneUnit]:
    """Gene-like features merged into genes, in ascending start order.

    A feature joins an overlapping unit on its strand when they share a
    gene name, locus tag or ID/Parent link, or when one span contains the
    other. A gene with its mRNA and CDS segments is therefore one unit.
    """
    units: list[_GeneUnit] = []
    open_units: list[_GeneUnit] = []
    for feature in sorted(filter(is_gene_like, features), key=lambda f: (f.start, -f.end)):
        open_units = [u for u in open_units if u.end >= feature.start]
        for unit in open_units:
            if unit.accepts(feature):
                unit.add(feature)
                break
        else:
            unit = _GeneUnit.of(feature)
            units.append(unit)
            open_units.append(unit)
    return units


def detect_operons(
    features: Iterable[Feature],
    max_gap: int = OPERON_MAX_GAP,
    min_genes: int = OPERON_MIN_GENES,
    colors: list[str] | None = None,
) -> list[Operon]:
    """Group adjacent same-strand genes into putative operons.

    Args:
        features: Annotations of one chromosome, in any order.
        max_gap: Largest intergenic gap, in bases, allowed inside an operon.
            Overlapping genes always qualify.
        min_genes: Minimum number of genes for a group to count.
        colors: Palette to cycle through; defaults to the configured one.

    Returns:
        Operons in ascending start order. ``members`` holds every gene-like
        feature of the grouped genes, so the gene, its mRNA and its CDS
        all map to the operon.

    Examples:
        >>> fwd = [Feature("gene", 1, 100), Feature("CDS", 1, 100), Feature("gene", 150, 300)]
        >>> ops = detect_operons(fwd, max_gap=100)
        >>> len(ops), len(ops[0].members), ops[0].strand
        (1, 3, 1)
        >>> detect_operons(fwd, max_gap=10)
        []
    """
    palette = colors or OPERON_COLORS
    groups: list[list[_GeneUnit]] = []
    group_end = 0
    for unit in _gene_units(features):
        if groups:
            gap = unit.start - group_end - 1
            if unit.strand == groups[-1][0].strand and gap <= max_gap:
                groups[-1].append(unit)
                group_end = max(group_end, unit.end)
                continue
        groups.append([unit])
        group_end = unit.end

    operons: list[Operon] = []
    for group in groups:
        if len(group) < min_genes:
            continue
        members = [f for unit in group for f in unit.members]
        name = "-".join(unit.name for unit in group)
        color = palette[len(operons) % len(palette)]
        operons.append(Operon(members, group[0].strand, color, name))
    logger.debug("Detected %d operon(s) from %d group(s)", len(operons), len(groups))
    return operons


def operon_for_feature(feature: Feature, operons: Iterable[Operon]) -> Operon | None:
    """The operon that *feature* belongs to, if any.

    Membership is by locus (coordinates and strand), so a feature object
    from a different parse of the same file still resolves. Promoters and
    terminators never belong to an operon.

    Examples:
        >>> ops = detect_operons([Feature("gene", 1, 100), Feature("gene", 120, 200)])
        >>> operon_for_feature(Feature("CDS", 120, 200), ops) is ops[0]
        True
        >>> operon_for_feature(Feature("promoter", 1, 100), ops) is None
        True
    """
    if not is_gene_like(feature):
        return None
    key = _locus_key(feature)
    for operon in operons:
        if any(_locus_key(member) == key for member in operon.members):
            return operon
    return None


def feature_color(feature: Feature, operons: Iterable[Operon]) -> str:
    """Operon color for *feature*, or its feature-type color otherwise.

    Examples:
        >>> feature_color(Feature("tRNA", 1, 80), [])
        '#27ae60'
    """
    operon = operon_for_feature(feature, operons)
    if operon is not None:
        return operon.color
    return feature_type_color(feature.type)
