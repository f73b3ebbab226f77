"""Base types and utilities for the BibTeX scanner."""

import re
from typing import NamedTuple

from bibfolio.models import RawEntry

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".bib", ".bibtex", ".txt"})

_ENTRY_SNIFF_RE = re.compile(r"^\s*@\s*\w+\s*[{(]", re.MULTILINE)


class ParseResult(NamedTuple):
    """Result of scanning BibTeX text.

    Supports tuple unpacking: ``entries, warnings, errors = parse_bibtex(...)``.

    Attributes
    ----------
    entries : list[RawEntry]
        Extracted entries in source order.
    warnings : list[str]
        Warning messages (skipped blocks, duplicate fields).
    errors : list[str]
        Structural errors (unclosed entries).
    """

    entries: list[RawEntry]
    warnings: list[str]
    errors: list[str]


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes.

    A UTF-8 BOM wins, then strict UTF-8, then latin-1 which never fails.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Encoding name usable with ``bytes.decode``.
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return content.replace("\r\n", "\n").replace("\r", "\n")


def decode_bibtex_bytes(file_bytes: bytes) -> tuple[str, str]:
    """Decode raw file bytes into LF-normalized text.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    tuple[str, str]
        (text, encoding_used)
    """
    encoding = detect_encoding(file_bytes)
    return normalize_line_endings(file_bytes.decode(encoding)), encoding


def looks_like_bibtex(text: str) -> bool:
    """Return True if the text contains at least one ``@type{`` header.

    Empty text counts as BibTeX with zero entries.
    """
    if not text.strip():
        return True
    return _ENTRY_SNIFF_RE.search(text) is not None
