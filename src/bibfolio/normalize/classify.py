"""Publication type and research-area classification."""

from collections.abc import Iterable

from .tag_mappings import (
    DEFAULT_PUBLICATION_TYPE,
    DEFAULT_RESEARCH_AREA,
    RESEARCH_AREA_RULES,
    TYPE_MAPPING,
)


def publication_type(entry_type: str) -> str:
    """Map a BibTeX entry type to a publication type.

    Unknown entry types fall back to "journal".
    """
    return TYPE_MAPPING.get(entry_type.lower(), DEFAULT_PUBLICATION_TYPE)


def is_known_entry_type(entry_type: str) -> bool:
    """Return True if the entry type has an explicit mapping."""
    return entry_type.lower() in TYPE_MAPPING


def research_area(title: str | None, keywords: Iterable[str] = ()) -> str:
    """Infer the research area from title and keyword text.

    Rules in RESEARCH_AREA_RULES are tested in order against the lower-cased
    text and the first rule with a matching substring wins.

    Parameters
    ----------
    title : str | None
        Publication title.
    keywords : Iterable[str], optional
        Publication keywords.

    Returns
    -------
    str
        Research area tag, "machine-learning" when no rule matches.
    """
    text = f"{title or ''} {' '.join(keywords)}".lower()

    for needles, area in RESEARCH_AREA_RULES:
        if any(needle in text for needle in needles):
            return area
    return DEFAULT_RESEARCH_AREA
