"""Publication normalization for raw BibTeX entries.

This module orchestrates field cleaning, author parsing, year and month
resolution, classification and citation reconstruction. All functions are
pure apart from optional audit logging, and never raise on malformed field
content.
"""

from collections.abc import Callable, Iterable, Sequence

from bibfolio.audit.logger import AuditLogger
from bibfolio.export.bibtex_writer import INTERNAL_FIELDS, reconstruct_bibtex
from bibfolio.models import Publication, RawEntry, make_fallback_id_factory

from ._fields import (
    extract_other_fields,
    extract_title,
    parse_authors,
    parse_year,
    resolve_month,
    split_keywords,
)
from ._helpers import optional_text
from ._result_types import NormalizationBatch
from .classify import publication_type, research_area
from .flags import generate_flags


def normalize_entry(
    entry: RawEntry,
    *,
    highlight_name: str | None = None,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
    fallback_id: str | None = None,
) -> Publication:
    """Normalize a single raw entry into a publication.

    Parameters
    ----------
    entry : RawEntry
        Entry produced by the BibTeX scanner.
    highlight_name : str | None, optional
        Site owner's name for author highlighting.
    exclude_fields : Iterable[str], optional
        Fields left out of the reconstructed citation.
    fallback_id : str | None, optional
        Id used when the entry has neither a citation key nor an ``id``
        field. Required for such entries.

    Returns
    -------
    Publication
        Normalized publication.

    Raises
    ------
    ValueError
        If the entry has no usable id and no fallback_id was given.
    """
    fields = entry.fields

    pub_id = optional_text(entry.citation_key) or optional_text(fields.get("id")) or fallback_id
    if pub_id is None:
        raise ValueError(f"Entry at line {entry.line_start} has no citation key and no fallback id")

    title = extract_title(fields)
    keywords = split_keywords(fields.get("keywords"))
    year = parse_year(fields)
    other = extract_other_fields(fields)

    return Publication(
        id=pub_id,
        title=title,
        authors=tuple(parse_authors(fields.get("author"), highlight_name)),
        year=year.year,
        year_label=year.year_label,
        month=resolve_month(fields.get("month")),
        type=publication_type(entry.entry_type),
        keywords=tuple(keywords),
        research_area=research_area(title, keywords),
        journal=other.journal,
        conference=other.conference,
        volume=other.volume,
        issue=other.issue,
        pages=other.pages,
        doi=other.doi,
        url=other.url,
        code=other.code,
        abstract=other.abstract,
        description=other.description,
        preview=other.preview,
        selected=other.selected,
        bibtex=reconstruct_bibtex(entry, exclude_fields),
    )


def normalize_entries(
    entries: Sequence[RawEntry],
    *,
    highlight_name: str | None = None,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
    logger: AuditLogger | None = None,
    id_factory: Callable[[int], str] | None = None,
) -> list[Publication]:
    """Normalize entries into publications, preserving source order.

    No sorting is applied; the i-th publication comes from the i-th entry.

    Parameters
    ----------
    entries : Sequence[RawEntry]
        Entries in source order.
    highlight_name : str | None, optional
        Site owner's name for author highlighting.
    exclude_fields : Iterable[str], optional
        Fields left out of reconstructed citations.
    logger : AuditLogger | None, optional
        Audit logger receiving one ``entry_flagged`` event per entry that
        fell back to a default. If None, no logging.
    id_factory : Callable[[int], str] | None, optional
        Fallback id generator; a fresh per-call factory by default.

    Returns
    -------
    list[Publication]
        One publication per entry.
    """
    return normalize_batch(
        entries,
        highlight_name=highlight_name,
        exclude_fields=exclude_fields,
        logger=logger,
        id_factory=id_factory,
    ).publications


def normalize_batch(
    entries: Sequence[RawEntry],
    *,
    highlight_name: str | None = None,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
    logger: AuditLogger | None = None,
    id_factory: Callable[[int], str] | None = None,
) -> NormalizationBatch:
    """Normalize entries and count the ones that fell back to a default.

    Takes the same arguments as ``normalize_entries``. Flags are computed
    once per entry and logged when a logger is given.
    """
    excluded = tuple(exclude_fields)
    fallback_id = id_factory or make_fallback_id_factory()

    publications: list[Publication] = []
    flagged = 0
    for index, entry in enumerate(entries):
        publication = normalize_entry(
            entry,
            highlight_name=highlight_name,
            exclude_fields=excluded,
            fallback_id=fallback_id(index),
        )
        publications.append(publication)

        flags = generate_flags(entry, publication)
        if not flags:
            continue
        flagged += 1
        if logger:
            logger.entry_flagged(key=publication.id, flags=list(flags), line=entry.line_start)

    return NormalizationBatch(publications=publications, flagged_entries=flagged)
