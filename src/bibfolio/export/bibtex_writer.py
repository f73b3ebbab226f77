"""BibTeX writer for cleaned citations."""

import re
from collections.abc import Iterable
from pathlib import Path

from bibfolio.models import RawEntry

# Fields used by the website only, never shown in a copied citation
INTERNAL_FIELDS: tuple[str, ...] = ("selected", "preview", "description", "keywords", "code")

AUTHOR_MARKER_RE = re.compile(r"[*#]")


def reconstruct_bibtex(
    entry: RawEntry,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
) -> str:
    """Format a raw entry as a single BibTeX block for copy/paste.

    Fields are emitted in source order with braced values. Excluded fields
    are matched case-insensitively. Corresponding/co-author markers are
    removed from the author field.

    Parameters
    ----------
    entry : RawEntry
        Entry to format.
    exclude_fields : Iterable[str], optional
        Field names to leave out, by default the website-only fields.

    Returns
    -------
    str
        BibTeX entry text without a trailing newline.
    """
    excluded = {name.lower() for name in exclude_fields}

    field_lines: list[str] = []
    for name, value in entry.fields.items():
        if name.lower() in excluded:
            continue
        if name.lower() == "author":
            value = AUTHOR_MARKER_RE.sub("", value)
        field_lines.append(f"  {name} = {{{value}}}")

    lines = [f"@{entry.entry_type}{{{entry.citation_key},"]
    if field_lines:
        lines.append(",\n".join(field_lines))
    lines.append("}")
    return "\n".join(lines)


def write_bib_file(
    entries: Iterable[RawEntry],
    output_path: Path,
    exclude_fields: Iterable[str] = INTERNAL_FIELDS,
) -> int:
    """Write reconstructed entries to a .bib file.

    Parameters
    ----------
    entries : Iterable[RawEntry]
        Entries to write, in output order.
    output_path : Path
        Output file path.
    exclude_fields : Iterable[str], optional
        Field names to leave out.

    Returns
    -------
    int
        Number of entries written.
    """
    excluded = tuple(exclude_fields)
    blocks = [reconstruct_bibtex(entry, excluded) for entry in entries]

    with output_path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n\n".join(blocks))
        if blocks:
            f.write("\n")

    return len(blocks)
