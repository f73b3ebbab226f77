"""BibTeX bibliography parsing.

Main entry points:
- parse_bibtex: Scan BibTeX text into raw entries
- ingest_file: Read, decode and scan a single .bib file
"""

from bibfolio.parse.base import ParseResult
from bibfolio.parse.bibtex import parse_bibtex
from bibfolio.parse.ingestion import FileIngestionResult, ingest_file

__all__ = [
    "FileIngestionResult",
    "ParseResult",
    "ingest_file",
    "parse_bibtex",
]
