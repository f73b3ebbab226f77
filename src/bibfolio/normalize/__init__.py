"""BibTeX field normalization.

Main entry points:
- normalize_entries: Turn raw entries into publications in source order
- normalize_batch: Same, also counting entries that raised flags
- normalize_entry: Normalize a single entry
- clean_bibtex_string: Strip braces and LaTeX markup from field text
"""

from bibfolio.normalize._fields import (
    classify_year,
    parse_authors,
    parse_year,
    resolve_month,
)
from bibfolio.normalize._helpers import clean_bibtex_string
from bibfolio.normalize._result_types import (
    NormalizationBatch,
    NumericYear,
    YearLabel,
    YearResult,
)
from bibfolio.normalize.classify import publication_type, research_area
from bibfolio.normalize.flags import generate_flags
from bibfolio.normalize.normalizer import normalize_batch, normalize_entries, normalize_entry

__all__ = [
    "NormalizationBatch",
    "NumericYear",
    "YearLabel",
    "YearResult",
    "classify_year",
    "clean_bibtex_string",
    "generate_flags",
    "normalize_batch",
    "normalize_entries",
    "normalize_entry",
    "parse_authors",
    "parse_year",
    "publication_type",
    "research_area",
    "resolve_month",
]
