"""Format dispatch: pick a parser from a format name, extension or file name.

Unknown formats are parsed as FASTA.

Examples:
    >>> detect_format("genome.GBK")
    'genbank'
    >>> detect_format(".gtf"), detect_format("vcf"), detect_format("notes.txt")
    ('gff', 'vcf', 'fasta')
    >>> parse(">chr1\\nacgt", "reads.unknown").sequences
    {'chr1': 'ACGT'}
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path, PurePath

from gview.bed import parse_bed
from gview.fasta import parse_fasta
from gview.genbank import parse_genbank
from gview.gff import parse_gff
from gview.models import GenomeModel, ParseResult
from gview.sam import parse_sam
from gview.vcf import parse_vcf

logger = logging.getLogger(__name__)

PARSERS: dict[str, Callable[[str | bytes], ParseResult]] = {
    "fasta": parse_fasta,
    "genbank": parse_genbank,
    "gff": parse_gff,
    "bed": parse_bed,
    "vcf": parse_vcf,
    "sam": parse_sam,
}

EXTENSIONS: dict[str, str] = {
    ".fasta": "fasta",
    ".fa": "fasta",
    ".fna": "fasta",
    ".gb": "genbank",
    ".gbk": "genbank",
    ".genbank": "genbank",
    ".gff": "gff",
    ".gff3": "gff",
    ".gtf": "gff",
    ".bed": "bed",
    ".vcf": "vcf",
    ".sam": "sam",
}

DEFAULT_FORMAT = "fasta"


def detect_format(hint: str | Path) -> str:
    """Resolve a format name, extension or file name to a parser key.

    Args:
        hint: ``"genbank"``, ``".gbk"``, ``"data/ecoli.gbk"`` and so on.

    Returns:
        A key of ``PARSERS``; ``"fasta"`` when nothing matches.

    Examples:
        >>> detect_format("GFF"), detect_format("x.bed"), detect_format("")
        ('gff', 'bed', 'fasta')
    """
    text = str(hint).strip().lower()
    if text in PARSERS:
        return text
    if text in EXTENSIONS:
        return EXTENSIONS[text]
    suffix = PurePath(text).suffix
    if suffix in EXTENSIONS:
        return EXTENSIONS[suffix]
    logger.info("Unrecognised format %r, parsing as %s", str(hint), DEFAULT_FORMAT)
    return DEFAULT_FORMAT


def parse(data: str | bytes, format_hint: str | Path = DEFAULT_FORMAT) -> ParseResult:
    """Parse raw file content with the parser selected by *format_hint*.

    Args:
        data: File content as text or UTF-8 bytes.
        format_hint: Format name, extension or file name.

    Returns:
        The parser's ParseResult.
    """
    return PARSERS[detect_format(format_hint)](data)


def load_file(path: str | Path) -> ParseResult:
    """Read *path* and parse it according to its extension.

    Examples:
        >>> import tempfile; from pathlib import Path
        >>> d = Path(tempfile.mkdtemp())
        >>> bed = d / "peaks.bed"
        >>> _ = bed.write_text("chr1\\t0\\t10\\tpeak1\\n")
        >>> load_file(bed).annotations["chr1"][0].qualifiers["name"]
        'peak1'
    """
    path = Path(path)
    return parse(path.read_bytes(), path.name)


def load_model(paths: list[str | Path], model: GenomeModel | None = None) -> GenomeModel:
    """Load several files into one model, applying them in order.

    A FASTA followed by a GFF and a VCF gives a model with sequences,
    annotations and variants. A later file replaces the stores an earlier
    file of the same kind populated.
    """
    model = model if model is not None else GenomeModel()
    for path in paths:
        model.apply(load_file(path))
    return model
