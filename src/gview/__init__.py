"""Genome browser core: flat-file parsers, range queries, layout and search.

Examples:
    >>> import gview
    >>> hasattr(gview, '__version__')
    True
    >>> model = gview.GenomeModel()
    >>> model.apply(gview.parse(">chr1\\nATGAAATAG\\n", "fasta"))
    >>> gview.translate(model.sequences["chr1"])
    'MK*'
"""

from importlib.metadata import PackageNotFoundError, version

from gview.config import BASE_COLORS, FEATURE_COLORS, OPERON_COLORS
from gview.errors import GviewError, InvalidArgumentError
from gview.index import (
    add_user_feature,
    features_in_view,
    features_overlapping,
    reads_overlapping,
    restore_user_features,
    type_filter,
    variants_overlapping,
)
from gview.layout import features_collide, gene_rows, pack_rows
from gview.models import (
    Feature,
    GenomeModel,
    Operon,
    ParseResult,
    Read,
    SearchResult,
    Variant,
    ViewRange,
)
from gview.operons import detect_operons, feature_color, operon_for_feature
from gview.parsers import detect_format, load_file, load_model, parse
from gview.search import search, search_model
from gview.seqs import (
    feature_protein,
    feature_sequence,
    format_fasta,
    gc_content,
    gc_windows,
    parse_region,
    reverse_complement,
    translate,
)

try:
    __version__ = version("gview")
except PackageNotFoundError:
    __version__ = "0.0.0"
__all__ = [
    "Feature",
    "GenomeModel",
    "Operon",
    "ParseResult",
    "Read",
    "SearchResult",
    "Variant",
    "ViewRange",
    "GviewError",
    "InvalidArgumentError",
    "parse",
    "load_file",
    "load_model",
    "detect_format",
    "features_overlapping",
    "features_in_view",
    "variants_overlapping",
    "reads_overlapping",
    "type_filter",
    "add_user_feature",
    "restore_user_features",
    "pack_rows",
    "features_collide",
    "gene_rows",
    "detect_operons",
    "operon_for_feature",
    "feature_color",
    "search",
    "search_model",
    "reverse_complement",
    "translate",
    "gc_content",
    "gc_windows",
    "feature_sequence",
    "feature_protein",
    "format_fasta",
    "parse_region",
    "BASE_COLORS",
    "FEATURE_COLORS",
    "OPERON_COLORS",
]
