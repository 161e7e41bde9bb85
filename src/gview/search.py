"""Text and motif search over one chromosome.

Three passes are merged and sorted by position:

1. annotation text (``gene``, ``locus_tag``, ``product``, ``note``);
2. exact sequence matches, for queries made only of ``ACGTN``;
3. reverse-complement matches, on request, for queries made only of ``ACGT``.

Sequence matches may overlap each other. All positions are 0-based
half-open; annotation hits report ``feature.start - 1`` .. ``feature.end``.

Examples:
    >>> hits = search("GGA", "AAGGATCCAA", [], include_reverse_complement=True)
    >>> [(h.position, h.end, h.name) for h in hits]
    [(2, 5, 'Sequence match'), (5, 8, 'Reverse complement match')]
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from gview.models import Feature, GenomeModel, SearchResult
from gview.seqs import reverse_complement

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("gene", "locus_tag", "product", "note")

_DNA_QUERY_RE = re.compile(r"^[ATGCN]+$", re.IGNORECASE)
_STRICT_DNA_QUERY_RE = re.compile(r"^[ATGC]+$", re.IGNORECASE)


def find_all(haystack: str, needle: str) -> Iterator[int]:
    """Yield every start of *needle* in *haystack*, overlaps included.

    Examples:
        >>> list(find_all("AAAA", "AA"))
        [0, 1, 2]
        >>> list(find_all("ACGT", "TT"))
        []
    """
    index = haystack.find(needle)
    while index != -1:
        yield index
        index = haystack.find(needle, index + 1)


def _text_matches(term: str, annotations: Iterable[Feature], case_sensitive: bool) -> list[SearchResult]:
    results: list[SearchResult] = []
    for feature in annotations:
        text = " ".join(feature.qualifiers.get(key, "") for key in TEXT_FIELDS)
        if not case_sensitive:
            text = text.upper()
        if term in text:
            product = feature.qualifiers.get("product") or "No description"
            results.append(
                SearchResult(
                    type="gene",
                    position=feature.start - 1,
                    end=feature.end,
                    name=feature.name,
                    details=f"{feature.type}: {product}",
                    strand=feature.strand,
                    feature=feature,
                )
            )
    return results


def search(
    query: str,
    sequence: str,
    annotations: Iterable[Feature],
    case_sensitive: bool = False,
    include_reverse_complement: bool = False,
) -> list[SearchResult]:
    """Search one chromosome's annotations and sequence for *query*.

    Args:
        query: Text or nucleotide motif; surrounding whitespace is ignored.
        sequence: The chromosome sequence.
        annotations: The chromosome's features.
        case_sensitive: Match case exactly; otherwise both sides are upper-cased.
        include_reverse_complement: Also report matches of the query's
            reverse complement (pure ``ACGT`` queries only).

    Returns:
        Results sorted by position; ties keep pass order (annotation, forward,
        reverse complement). A blank query gives an empty list.

    Examples:
        >>> genes = [Feature("gene", 3, 8, qualifiers={"gene": "dnaA", "product": "initiator"})]
        >>> hits = search("dnaa", "ACGTACGTAC", genes)
        >>> [(h.type, h.position, h.end, h.name, h.details) for h in hits]
        [('gene', 2, 8, 'dnaA', 'gene: initiator')]
        >>> [h.position for h in search("acg", "ACGTACGTAC", [])]
        [0, 4]
        >>> search("acg", "ACGTACGTAC", [], case_sensitive=True)
        []
    """
    query = query.strip()
    if not query:
        return []
    term = query if case_sensitive else query.upper()
    haystack = sequence if case_sensitive else sequence.upper()

    results = _text_matches(term, annotations, case_sensitive)

    if _DNA_QUERY_RE.match(term):
        for index in find_all(haystack, term):
            results.append(
                SearchResult(
                    type="sequence",
                    position=index,
                    end=index + len(term),
                    name="Sequence match",
                    details=f'Found "{query}" at position {index + 1}',
                )
            )
        if include_reverse_complement and _STRICT_DNA_QUERY_RE.match(term):
            rc = reverse_complement(term)
            for index in find_all(haystack, rc):
                results.append(
                    SearchResult(
                        type="sequence",
                        position=index,
                        end=index + len(rc),
                        name="Reverse complement match",
                        details=f'Found reverse complement "{rc}" at position {index + 1}',
                        strand=-1,
                    )
                )

    results.sort(key=lambda r: r.position)
    logger.debug("Search %r: %d result(s)", query, len(results))
    return results


def search_model(
    model: GenomeModel,
    chromosome: str,
    query: str,
    case_sensitive: bool = False,
    include_reverse_complement: bool = False,
) -> list[SearchResult]:
    """``search`` over one chromosome of *model*; unknown chromosomes give ``[]``.

    Examples:
        >>> search_model(GenomeModel(), "chr1", "ACGT")
        []
    """
    if chromosome not in model.sequences and chromosome not in model.annotations:
        return []
    return search(
        query,
        model.sequence(chromosome),
        model.annotations.get(chromosome, []),
        case_sensitive=case_sensitive,
        include_reverse_complement=include_reverse_complement,
    )
