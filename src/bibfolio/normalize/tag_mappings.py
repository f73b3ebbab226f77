"""Fixed lookup tables for BibTeX normalization.

All tables are read-only. Adding an entry type or research area requires
only a new row here.
"""

from types import MappingProxyType

# BibTeX entry type (lower-cased) -> publication type
TYPE_MAPPING: MappingProxyType[str, str] = MappingProxyType(
    {
        "article": "journal",
        "inproceedings": "conference",
        "conference": "conference",
        "incollection": "book-chapter",
        "book": "book",
        "phdthesis": "thesis",
        "mastersthesis": "thesis",
        "techreport": "technical-report",
        "unpublished": "preprint",
        "misc": "preprint",
    }
)

DEFAULT_PUBLICATION_TYPE = "journal"

# Month name or abbreviation (lower-cased) -> month number
MONTH_MAPPING: MappingProxyType[str, int] = MappingProxyType(
    {
        "jan": 1,
        "january": 1,
        "feb": 2,
        "february": 2,
        "mar": 3,
        "march": 3,
        "apr": 4,
        "april": 4,
        "may": 5,
        "jun": 6,
        "june": 6,
        "jul": 7,
        "july": 7,
        "aug": 8,
        "august": 8,
        "sep": 9,
        "sept": 9,
        "september": 9,
        "oct": 10,
        "october": 10,
        "nov": 11,
        "november": 11,
        "dec": 12,
        "december": 12,
    }
)

# Research-area rules, first match wins
RESEARCH_AREA_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("healthcare", "medical", "health"), "ai-healthcare"),
    (("signal", "processing"), "signal-processing"),
    (("reliability", "fault", "diagnosis"), "reliability-engineering"),
    (("quantum",), "quantum-computing"),
    (("neural", "spiking"), "neural-networks"),
    (("transformer", "attention"), "transformer-architectures"),
)

DEFAULT_RESEARCH_AREA = "machine-learning"

# Values of the `selected` field that mark a publication as selected
SELECTED_TRUE_VALUES = frozenset({"true", "yes"})

DEFAULT_TITLE = "Untitled"
DEFAULT_YEAR_LABEL = "In review"
