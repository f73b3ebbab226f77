"""Field normalization functions.

Individual field normalizers that turn raw BibTeX field text into
publication attributes. Each function is pure and never raises on
malformed field content.
"""

from .authors import matches_highlight, parse_authors
from .month import month_number, resolve_month
from .other import extract_other_fields, extract_title, split_keywords
from .year import classify_year, parse_year

__all__ = [
    "classify_year",
    "extract_other_fields",
    "extract_title",
    "matches_highlight",
    "month_number",
    "parse_authors",
    "parse_year",
    "resolve_month",
    "split_keywords",
]
