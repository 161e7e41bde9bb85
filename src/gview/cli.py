"""Click CLI for gview."""

from __future__ import annotations

import logging
import sys

import click

from gview.errors import InvalidArgumentError
from gview.index import ALL_CATEGORIES, reads_overlapping, variants_overlapping
from gview.layout import gene_rows
from gview.models import GenomeModel, ViewRange
from gview.operons import detect_operons
from gview.parsers import load_model
from gview.search import search_model
from gview.seqs import (
    format_fasta,
    gc_content,
    parse_region,
    region_header,
    reverse_complement,
    translate,
)


def _expand_stdin(paths: list[str]) -> list[str]:
    """If paths is ['-'], read file paths from stdin (one per line).

    Args:
        paths: List of file paths or ['-'] to read from stdin.

    Returns:
        Expanded list of file paths.

    Examples:
        >>> _expand_stdin(['genome.fa', 'genes.gff'])
        ['genome.fa', 'genes.gff']
        >>> _expand_stdin([])
        []
    """
    if paths and len(paths) == 1 and paths[0] == "-":
        return [line.strip() for line in sys.stdin if line.strip()]
    return list(paths)


def _load(files: tuple[str, ...]) -> GenomeModel:
    paths = _expand_stdin(list(files))
    if not paths:
        raise click.UsageError("Provide at least one input file")
    return load_model(paths)


def _resolve_region(model: GenomeModel, region: str, chromosome: str | None) -> tuple[str, ViewRange]:
    """Turn a region option into (chromosome, view), defaulting to the first chromosome."""
    names = model.chromosomes
    if not names:
        raise click.UsageError("No chromosomes loaded")
    chrom_hint = region.split(":", 1)[0] if ":" in region else chromosome
    chrom = chrom_hint or names[0]
    if chrom not in names:
        raise click.BadParameter(f"unknown chromosome {chrom!r}", param_hint="--region")
    length = len(model.sequence(chrom)) or _annotated_length(model, chrom)
    try:
        _, view = parse_region(region, length)
    except InvalidArgumentError as exc:
        raise click.BadParameter(str(exc), param_hint="--region") from exc
    return chrom, view


def _annotated_length(model: GenomeModel, chromosome: str) -> int:
    """Furthest annotated position, for chromosomes loaded without sequence."""
    ends = [f.end for f in model.annotations.get(chromosome, [])]
    ends += [v.end for v in model.variants.get(chromosome, [])]
    ends += [r.end for r in model.reads.get(chromosome, [])]
    return max(ends, default=0)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", count=True, help="Log parser diagnostics (-v info, -vv debug).")
def main(verbose):
    """Genome browser core: parse FASTA/GenBank/GFF/BED/VCF/SAM and query regions.

    Every command accepts several input files; they are applied in order to
    one genome model (e.g. a FASTA, then a GFF, then a VCF). Use '-' to read
    file paths from stdin.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("files", nargs=-1, required=True)
def info(files):
    """Summarise each chromosome: length, GC%, feature/variant/read counts."""
    model = _load(files)
    for chrom in model.chromosomes:
        seq = model.sequence(chrom)
        click.echo(
            f"{chrom}\tlength={len(seq)}\tgc={gc_content(seq):.2f}%"
            f"\tfeatures={len(model.annotations.get(chrom, []))}"
            f"\tvariants={len(model.variants.get(chrom, []))}"
            f"\treads={len(model.reads.get(chrom, []))}"
        )
    if model.skipped:
        click.echo(f"skipped {model.skipped} malformed line(s)", err=True)


@main.command()
@click.argument("files", nargs=-1, required=True)
@click.option("-r", "--region", required=True, help="Window, e.g. chr1:1000-2000 (1-based).")
@click.option("-c", "--chromosome", help="Chromosome when --region has no 'chr:' prefix.")
@click.option(
    "--types",
    "categories",
    multiple=True,
    type=click.Choice(sorted(ALL_CATEGORIES)),
    help="Feature categories to show (repeatable). Default: all.",
)
def region(files, region, chromosome, categories):
    """Lay out the features in a window as non-overlapping rows."""
    model = _load(files)
    chrom, view = _resolve_region(model, region, chromosome)
    rows = gene_rows(model, chrom, view, categories or None)
    click.echo(f"{region_header(chrom, view)}\t{len(rows)} row(s)")
    for i, row in enumerate(rows):
        cells = [
            f"{f.name}:{f.start}-{f.end}({'-' if f.strand == -1 else '+'})" for f in row
        ]
        click.echo(f"row {i}\t" + " ".join(cells))
    click.echo(
        f"variants={len(variants_overlapping(model, chrom, view))}"
        f"\treads={len(reads_overlapping(model, chrom, view))}"
    )


@main.command("search")
@click.argument("files", nargs=-1, required=True)
@click.option("-q", "--query", required=True, help="Gene name, product text or DNA motif.")
@click.option("-c", "--chromosome", help="Chromosome to search. Default: the first one.")
@click.option("--case-sensitive", is_flag=True, default=False, help="Match case exactly.")
@click.option(
    "--reverse-complement",
    is_flag=True,
    default=False,
    help="Also report reverse-complement matches of DNA queries.",
)
def search_cmd(files, query, chromosome, case_sensitive, reverse_complement):
    """Search annotations and sequence for a query."""
    model = _load(files)
    chrom = chromosome or next(iter(model.chromosomes), None)
    if chrom is None:
        raise click.UsageError("No chromosomes loaded")
    results = search_model(
        model,
        chrom,
        query,
        case_sensitive=case_sensitive,
        include_reverse_complement=reverse_complement,
    )
    if not results:
        click.echo(f'No matches found for "{query}"')
        return
    click.echo(f'Found {len(results)} match{"es" if len(results) > 1 else ""} for "{query}"')
    for result in results:
        click.echo(
            f"{result.type}\t{result.position + 1}-{result.end}\t{result.name}\t{result.details}"
        )


@main.command()
@click.argument("files", nargs=-1, required=True)
@click.option("-r", "--region", required=True, help="Window, e.g. chr1:1000-2000 (1-based).")
@click.option("-c", "--chromosome", help="Chromosome when --region has no 'chr:' prefix.")
@click.option("--strand", type=click.Choice(["+", "-"]), default="+", show_default=True)
@click.option("--protein", is_flag=True, default=False, help="Export the translation.")
@click.option("--width", type=int, default=None, help="Wrap sequence lines at this width.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file. Default: stdout.")
def export(files, region, chromosome, strand, protein, width, output):
    """Export a window (or its translation) as FASTA."""
    model = _load(files)
    chrom, view = _resolve_region(model, region, chromosome)
    seq = model.sequence(chrom)[view.start : view.end]
    if not seq:
        raise click.UsageError(f"No sequence loaded for {chrom}")
    strand_value = -1 if strand == "-" else 1
    header = region_header(chrom, view)
    if protein:
        seq = translate(seq, strand_value)
        header += f" translation({strand})"
    elif strand_value == -1:
        seq = reverse_complement(seq)
        header += " reverse_complement"
    text = format_fasta(header, seq, width) + "\n"
    if output:
        with open(output, "w") as fh:
            fh.write(text)
    else:
        click.echo(text, nl=False)


@main.command()
@click.argument("files", nargs=-1, required=True)
@click.option("-c", "--chromosome", help="Restrict to one chromosome.")
def operons(files, chromosome):
    """List putative operons with their display colors."""
    model = _load(files)
    names = [chromosome] if chromosome else list(model.annotations)
    for chrom in names:
        for operon in detect_operons(model.annotations.get(chrom, [])):
            strand = "-" if operon.strand == -1 else "+"
            click.echo(
                f"{chrom}\t{operon.start}-{operon.end}\t{strand}\t{operon.color}\t{operon.name}"
            )
