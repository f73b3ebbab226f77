"""Title, keyword and optional bibliographic field extraction."""

from collections.abc import Mapping

from .._helpers import STRAY_BRACE_RE, clean_bibtex_string, optional_text
from .._result_types import OptionalFields
from ..tag_mappings import DEFAULT_TITLE, SELECTED_TRUE_VALUES


def extract_title(fields: Mapping[str, str]) -> str:
    """Return the cleaned title, or "Untitled" if nothing is left."""
    return clean_bibtex_string(fields.get("title")) or DEFAULT_TITLE


def split_keywords(value: str | None) -> list[str]:
    """Split a comma-separated keyword field into trimmed items.

    Empty items between commas are kept; a missing or blank field yields [].
    """
    if not value or not value.strip():
        return []
    return [keyword.strip() for keyword in value.split(",")]


def extract_other_fields(fields: Mapping[str, str]) -> OptionalFields:
    """Extract optional fields shown on the publication card.

    Free-text fields are cleaned; identifiers (volume, pages, DOI, ...) are
    kept verbatim apart from trimming.

    Parameters
    ----------
    fields : Mapping[str, str]
        Raw entry fields with lower-cased names.

    Returns
    -------
    OptionalFields
        Extracted values, None where absent.
    """
    preview = fields.get("preview")
    if preview is not None:
        preview = STRAY_BRACE_RE.sub("", preview)

    selected = (fields.get("selected") or "").strip().lower() in SELECTED_TRUE_VALUES

    return OptionalFields(
        journal=optional_text(clean_bibtex_string(fields.get("journal"))),
        conference=optional_text(clean_bibtex_string(fields.get("booktitle"))),
        volume=optional_text(fields.get("volume")),
        issue=optional_text(fields.get("number")),
        pages=optional_text(fields.get("pages")),
        doi=optional_text(fields.get("doi")),
        url=optional_text(fields.get("url")),
        code=optional_text(fields.get("code")),
        abstract=optional_text(clean_bibtex_string(fields.get("abstract"))),
        description=optional_text(
            clean_bibtex_string(fields.get("description") or fields.get("note"))
        ),
        preview=optional_text(preview),
        selected=selected,
    )
