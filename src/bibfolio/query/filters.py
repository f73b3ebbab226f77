"""Search, filter and facet helpers for publication lists.

These mirror the controls of the website's publication page: a free-text
search box, a year filter (numeric years plus status labels) and a type
filter. Every function keeps the input order.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from bibfolio.models import Publication
from bibfolio.normalize._helpers import LEADING_INT_RE

IN_REVIEW_LABEL = "in review"


@dataclass(frozen=True)
class Facets:
    """Filter options available for a publication list.

    Attributes
    ----------
    numeric_years : tuple[int, ...]
        Distinct positive years, newest first.
    year_labels : tuple[str, ...]
        Distinct non-numeric year labels, alphabetical with "In review" last.
    types : tuple[str, ...]
        Distinct publication types, alphabetical.
    """

    numeric_years: tuple[int, ...]
    year_labels: tuple[str, ...]
    types: tuple[str, ...]


def collect_facets(publications: Iterable[Publication]) -> Facets:
    """Collect year and type facets from publications."""
    years: set[int] = set()
    labels: set[str] = set()
    types: set[str] = set()

    for pub in publications:
        types.add(pub.type)
        if pub.year > 0:
            years.add(pub.year)
        label = pub.year_label.strip()
        if label and not LEADING_INT_RE.match(label):
            labels.add(label)

    return Facets(
        numeric_years=tuple(sorted(years, reverse=True)),
        year_labels=tuple(sorted(labels, key=_label_sort_key)),
        types=tuple(sorted(types)),
    )


def _label_sort_key(label: str) -> tuple[bool, str]:
    return (label.lower() == IN_REVIEW_LABEL, label)


def matches_query(pub: Publication, query: str) -> bool:
    """Return True if query occurs in title, author names or venue.

    Matching is a case-insensitive substring test; an empty query matches
    everything.
    """
    needle = query.strip().lower()
    if not needle:
        return True

    haystacks = [pub.title, *(author.name for author in pub.authors)]
    if pub.journal:
        haystacks.append(pub.journal)
    if pub.conference:
        haystacks.append(pub.conference)

    return any(needle in text.lower() for text in haystacks)


def matches_year(pub: Publication, year: int | str | None) -> bool:
    """Return True if the publication matches a year filter.

    An int compares with ``year``; a string compares case-insensitively with
    ``year_label``; None matches everything.
    """
    if year is None:
        return True
    if isinstance(year, int):
        return pub.year == year
    return pub.year_label.lower() == year.lower()


def filter_publications(
    publications: Sequence[Publication],
    query: str = "",
    year: int | str | None = None,
    pub_type: str | None = None,
) -> list[Publication]:
    """Filter publications by search text, year and type.

    Parameters
    ----------
    publications : Sequence[Publication]
        Publications in display order.
    query : str, optional
        Free-text search over title, authors, journal and conference.
    year : int | str | None, optional
        Numeric year or year label; None for all years.
    pub_type : str | None, optional
        Publication type; None for all types.

    Returns
    -------
    list[Publication]
        Matching publications, input order kept.
    """
    return [
        pub
        for pub in publications
        if matches_query(pub, query)
        and matches_year(pub, year)
        and (pub_type is None or pub.type == pub_type)
    ]


def selected_publications(publications: Iterable[Publication]) -> list[Publication]:
    """Return publications flagged as selected, input order kept."""
    return [pub for pub in publications if pub.selected]
