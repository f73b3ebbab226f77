"""Bibliography normalization for personal academic websites.

This package provides:
- Data models (bibfolio.models): raw entries and publications
- Parsing (bibfolio.parse): BibTeX scanning and file ingestion
- Normalization (bibfolio.normalize): field cleaning, authors, years, classification
- Export (bibfolio.export): publication JSON and cleaned citations
- Queries (bibfolio.query): search, filters and facets for publication lists
- Engine (bibfolio.engine): site configuration and the build runner
- Audit (bibfolio.audit): JSONL event log and run manifest
- CLI (bibfolio.cli): command-line interface
- Public API (bibfolio.api): high-level convenience functions
"""

__version__ = "0.4.0"
__license__ = "MIT"

from bibfolio.api import (
    cite,
    parse_file,
    parse_text,
    read_entries,
    write_json,
    write_jsonl,
)
from bibfolio.errors import BibfolioError, ConfigError, ParseError
from bibfolio.models import Author, Publication, RawEntry
from bibfolio.normalize import clean_bibtex_string

__all__ = [
    "__version__",
    "__license__",
    "Author",
    "Publication",
    "RawEntry",
    "parse_text",
    "parse_file",
    "read_entries",
    "cite",
    "write_json",
    "write_jsonl",
    "clean_bibtex_string",
    "BibfolioError",
    "ConfigError",
    "ParseError",
]
