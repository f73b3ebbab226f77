"""Normalization flags.

Flags name the places where normalization fell back to a default. They do
not change the publication; the build runner records them in the audit log
so a site owner can fix the bibliography.
"""

from bibfolio.models import Publication, RawEntry

from ._fields.month import month_number
from ._helpers import clean_bibtex_string
from .classify import is_known_entry_type

FLAG_UNKNOWN_ENTRY_TYPE = "unknown_entry_type"
FLAG_MISSING_TITLE = "missing_title"
FLAG_YEAR_LABEL_FALLBACK = "year_label_fallback"
FLAG_MONTH_UNRESOLVED = "month_unresolved"
FLAG_FALLBACK_ID = "fallback_id"
FLAG_NO_AUTHORS = "no_authors"


def generate_flags(entry: RawEntry, publication: Publication) -> tuple[str, ...]:
    """Generate normalization flags for one entry.

    Parameters
    ----------
    entry : RawEntry
        Source entry.
    publication : Publication
        Publication normalized from the entry.

    Returns
    -------
    tuple[str, ...]
        Flag names in a fixed order; empty when nothing fell back.
    """
    flags: list[str] = []

    if not is_known_entry_type(entry.entry_type):
        flags.append(FLAG_UNKNOWN_ENTRY_TYPE)

    if not clean_bibtex_string(entry.get("title")):
        flags.append(FLAG_MISSING_TITLE)

    if publication.year == 0:
        flags.append(FLAG_YEAR_LABEL_FALLBACK)

    raw_month = entry.get("month")
    if raw_month and raw_month.strip() and month_number(raw_month) is None:
        flags.append(FLAG_MONTH_UNRESOLVED)

    if not entry.citation_key and not (entry.get("id") or "").strip():
        flags.append(FLAG_FALLBACK_ID)

    if not publication.authors:
        flags.append(FLAG_NO_AUTHORS)

    return tuple(flags)
