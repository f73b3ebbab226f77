"""Bibliography file ingestion."""

from dataclasses import dataclass
from pathlib import Path

from bibfolio.models import RawEntry
from bibfolio.parse.base import decode_bibtex_bytes, looks_like_bibtex
from bibfolio.parse.bibtex import PARSER_VERSION, parse_bibtex
from bibfolio.utils import calculate_file_digest, get_file_mtime


@dataclass(frozen=True)
class FileIngestionResult:
    """Immutable result of ingesting a bibliography file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    file_size : int
        Size of file in bytes.
    file_mtime : str
        ISO8601 timestamp of file modification time.
    encoding_used : str
        Encoding used to decode file.
    entries_parsed : int
        Number of entries extracted.
    fields_parsed : int
        Total number of fields across entries.
    parser_version : str
        Version of the BibTeX scanner.
    warnings : tuple[str, ...]
        Warning messages.
    errors : tuple[str, ...]
        Error messages.
    file_digest : str
        SHA-256 digest of file bytes.
    """

    filename: str
    filepath: str
    file_size: int
    file_mtime: str
    encoding_used: str
    entries_parsed: int
    fields_parsed: int
    parser_version: str = PARSER_VERSION
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    file_digest: str = ""


def ingest_file(file_path: Path) -> tuple[list[RawEntry], FileIngestionResult]:
    """Read and scan a single BibTeX file.

    Read failures and non-BibTeX content are reported in the result's
    errors rather than raised.

    Parameters
    ----------
    file_path : Path
        Path to file to ingest.

    Returns
    -------
    tuple[list[RawEntry], FileIngestionResult]
        - Extracted raw entries in file order
        - File ingestion result with metadata and stats
    """
    try:
        file_bytes = file_path.read_bytes()
    except OSError as e:
        result = FileIngestionResult(
            filename=file_path.name,
            filepath=str(file_path),
            file_size=0,
            file_mtime="",
            encoding_used="",
            entries_parsed=0,
            fields_parsed=0,
            errors=(f"Failed to read file: {e}",),
        )
        return [], result

    text, encoding = decode_bibtex_bytes(file_bytes)
    file_mtime = get_file_mtime(file_path)
    file_digest = calculate_file_digest(file_bytes)

    if not looks_like_bibtex(text):
        result = FileIngestionResult(
            filename=file_path.name,
            filepath=str(file_path),
            file_size=len(file_bytes),
            file_mtime=file_mtime,
            encoding_used=encoding,
            entries_parsed=0,
            fields_parsed=0,
            errors=("No BibTeX entries found",),
            file_digest=file_digest,
        )
        return [], result

    entries, warnings, errors = parse_bibtex(text)

    result = FileIngestionResult(
        filename=file_path.name,
        filepath=str(file_path),
        file_size=len(file_bytes),
        file_mtime=file_mtime,
        encoding_used=encoding,
        entries_parsed=len(entries),
        fields_parsed=sum(len(entry.fields) for entry in entries),
        warnings=tuple(warnings),
        errors=tuple(errors),
        file_digest=file_digest,
    )

    return entries, result
