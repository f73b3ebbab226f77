"""Publication data models for bibfolio.

This module defines the raw entry produced by the BibTeX scanner and the
normalized publication record consumed by the website. All downstream
modules consume publications in this format.
"""

from dataclasses import dataclass, field
from typing import Any

# Closed set of publication types
PUBLICATION_TYPES = (
    "journal",
    "conference",
    "book-chapter",
    "book",
    "thesis",
    "technical-report",
    "preprint",
)

# Closed set of research areas
RESEARCH_AREAS = (
    "ai-healthcare",
    "signal-processing",
    "reliability-engineering",
    "quantum-computing",
    "neural-networks",
    "transformer-architectures",
    "machine-learning",
)


@dataclass(frozen=True)
class RawEntry:
    """Raw BibTeX entry as extracted from source text.

    Attributes
    ----------
    entry_type : str
        Entry type as written in the source (e.g., 'article', 'InProceedings').
    citation_key : str
        Citation key following the entry type. May be empty.
    fields : dict[str, str]
        Lower-cased field name to raw field text, in source order.
    line_start : int
        0-based line number where the entry starts.
    """

    entry_type: str
    citation_key: str
    fields: dict[str, str] = field(default_factory=dict)
    line_start: int = 0

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the raw value of a field by case-insensitive name."""
        return self.fields.get(name.lower(), default)


@dataclass(frozen=True)
class Author:
    """Author of a publication.

    Attributes
    ----------
    name : str
        Cleaned display name in "First Last" order.
    is_highlighted : bool
        True if the name matches the site owner's name.
    is_corresponding : bool
        True if the raw token carried a ``*`` marker.
    is_coauthor : bool
        True if the raw token carried a ``#`` marker.
    """

    name: str
    is_highlighted: bool = False
    is_corresponding: bool = False
    is_coauthor: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert author to its website representation."""
        return {
            "name": self.name,
            "isHighlighted": self.is_highlighted,
            "isCorresponding": self.is_corresponding,
            "isCoAuthor": self.is_coauthor,
        }


# Attribute name -> serialized key, in output order
_PUBLICATION_KEYS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("title", "title"),
    ("authors", "authors"),
    ("year", "year"),
    ("year_label", "yearLabel"),
    ("month", "month"),
    ("type", "type"),
    ("status", "status"),
    ("tags", "tags"),
    ("keywords", "keywords"),
    ("research_area", "researchArea"),
    ("journal", "journal"),
    ("conference", "conference"),
    ("volume", "volume"),
    ("issue", "issue"),
    ("pages", "pages"),
    ("doi", "doi"),
    ("url", "url"),
    ("code", "code"),
    ("abstract", "abstract"),
    ("description", "description"),
    ("selected", "selected"),
    ("preview", "preview"),
    ("bibtex", "bibtex"),
)


@dataclass(frozen=True)
class Publication:
    """Normalized publication record.

    Optional attributes hold None when the source has no value. The
    serialized form produced by ``to_dict`` omits those keys entirely.

    Attributes
    ----------
    id : str
        Citation key, ``id`` field, or a generated fallback.
    title : str
        Cleaned title, "Untitled" if missing.
    authors : tuple[Author, ...]
        Authors in field order.
    year : int
        Numeric year, 0 when the year field holds a status label.
    year_label : str
        Display form of the year ("2024", "In review", ...).
    type : str
        One of PUBLICATION_TYPES.
    research_area : str
        One of RESEARCH_AREAS.
    keywords : tuple[str, ...]
        Trimmed keywords in field order.
    month : str | None
        Month number as text, or the raw month value if unresolved.
    status : str
        Always "published".
    selected : bool
        True if the entry is flagged for the selected-publications list.
    bibtex : str | None
        Reconstructed citation without internal-only fields.
    """

    id: str
    title: str
    authors: tuple[Author, ...]
    year: int
    year_label: str
    type: str
    research_area: str
    keywords: tuple[str, ...] = ()
    month: str | None = None
    status: str = "published"
    journal: str | None = None
    conference: str | None = None
    volume: str | None = None
    issue: str | None = None
    pages: str | None = None
    doi: str | None = None
    url: str | None = None
    code: str | None = None
    abstract: str | None = None
    description: str | None = None
    preview: str | None = None
    selected: bool = False
    bibtex: str | None = None

    @property
    def tags(self) -> tuple[str, ...]:
        """Tags shown on the website; identical to keywords."""
        return self.keywords

    def to_dict(self) -> dict[str, Any]:
        """Convert publication to dictionary for JSON serialization.

        Keys whose value is None are omitted.

        Returns
        -------
        dict[str, Any]
            Website representation with camelCase keys.
        """
        data: dict[str, Any] = {}
        for attr, key in _PUBLICATION_KEYS:
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == "authors":
                value = [author.to_dict() for author in value]
            elif attr in ("tags", "keywords"):
                value = list(value)
            data[key] = value
        return data
