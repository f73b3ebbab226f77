"""Public API for turning BibTeX bibliographies into publications.

This module provides the main public API for bibfolio, enabling:
- Parsing BibTeX text or files into Publication objects
- Exporting publications to JSON/JSONL
- Reconstructing cleaned citations
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from bibfolio.errors import ParseError
from bibfolio.export import (
    INTERNAL_FIELDS,
    reconstruct_bibtex,
    write_publications_json,
    write_publications_jsonl,
)
from bibfolio.models import Publication, RawEntry
from bibfolio.normalize import normalize_entries
from bibfolio.parse import ingest_file, parse_bibtex

__all__ = [
    "parse_text",
    "parse_file",
    "read_entries",
    "cite",
    "write_json",
    "write_jsonl",
    "ParseError",
]


def read_entries(path: str | Path, *, strict: bool = True) -> list[RawEntry]:
    """Read raw entries from a BibTeX file.

    Parameters
    ----------
    path : str | Path
        Path to the .bib file.
    strict : bool, optional
        If True, raise on structural errors, by default True.

    Returns
    -------
    list[RawEntry]
        Entries in file order.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ParseError
        If the file has structural errors and strict=True.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    entries, result = ingest_file(file_path)

    if result.errors and strict:
        raise ParseError(
            f"Failed to parse {file_path.name}: {'; '.join(result.errors)}",
            file=str(file_path),
        )

    return entries


def parse_text(
    text: str,
    *,
    highlight_name: str | None = None,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
    strict: bool = False,
) -> list[Publication]:
    """Parse BibTeX source text into publications.

    Parameters
    ----------
    text : str
        BibTeX source.
    highlight_name : str | None, optional
        Site owner's name for author highlighting.
    exclude_fields : Iterable[str], optional
        Fields left out of each publication's reconstructed citation.
    strict : bool, optional
        If True, raise on structural errors. If False, return the entries
        that could be parsed, by default False.

    Returns
    -------
    list[Publication]
        One publication per entry, in source order.

    Raises
    ------
    ParseError
        If the text has structural errors and strict=True.

    Examples
    --------
        >>> from bibfolio import parse_text
        >>> pubs = parse_text("@article{k, title={{Deep Learning}}, year={2024}}")
        >>> pubs[0].title, pubs[0].year_label
        ('Deep Learning', '2024')
    """
    entries, _, errors = parse_bibtex(text.replace("\r\n", "\n").replace("\r", "\n"))

    if errors and strict:
        raise ParseError(f"Failed to parse BibTeX text: {'; '.join(errors)}")

    return normalize_entries(entries, highlight_name=highlight_name, exclude_fields=exclude_fields)


def parse_file(
    path: str | Path,
    *,
    highlight_name: str | None = None,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
    strict: bool = True,
) -> list[Publication]:
    """Parse a BibTeX file into publications.

    Parameters
    ----------
    path : str | Path
        Path to the .bib file.
    highlight_name : str | None, optional
        Site owner's name for author highlighting.
    exclude_fields : Iterable[str], optional
        Fields left out of each publication's reconstructed citation.
    strict : bool, optional
        If True, raise exception on structural errors, by default True.

    Returns
    -------
    list[Publication]
        One publication per entry, in file order.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ParseError
        If parsing fails and strict=True.
    """
    entries = read_entries(path, strict=strict)
    return normalize_entries(entries, highlight_name=highlight_name, exclude_fields=exclude_fields)


def cite(
    path: str | Path,
    key: str,
    *,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
) -> str:
    """Return the cleaned citation of one entry in a BibTeX file.

    Raises
    ------
    KeyError
        If no entry has the citation key.
    """
    for entry in read_entries(path, strict=False):
        if entry.citation_key == key:
            return reconstruct_bibtex(entry, exclude_fields)
    raise KeyError(key)


def write_json(publications: list[Publication], path: str | Path) -> int:
    """Write publications as a JSON array; absent attributes are omitted.

    Examples
    --------
        >>> from bibfolio import parse_file, write_json
        >>> write_json(parse_file("publications.bib"), "publications.json")
        12
    """
    return write_publications_json(publications, Path(path))


def write_jsonl(publications: list[Publication], path: str | Path) -> int:
    """Write publications to JSONL (one JSON object per line)."""
    return write_publications_jsonl(publications, Path(path))
