"""Author list parsing."""

from bibfolio.models import Author

from .._helpers import clean_bibtex_string, collapse_whitespace, strip_author_markers

AUTHOR_DELIMITER = " and "


def parse_authors(value: str | None, highlight_name: str | None = None) -> list[Author]:
    """Split a BibTeX author field into structured authors.

    Tokens are separated by the literal ``" and "``. A ``*`` anywhere in a
    token marks the corresponding author and a ``#`` marks a co-author; both
    are removed before the name is cleaned. "Last, First" tokens are
    reordered using only their first two comma parts. Authors whose cleaned
    name is empty are dropped.

    Parameters
    ----------
    value : str | None
        Raw author field. Line breaks are treated as spaces.
    highlight_name : str | None, optional
        Site owner's name, matched case-insensitively.

    Returns
    -------
    list[Author]
        Authors in field order.
    """
    if not value:
        return []

    authors: list[Author] = []
    for token in collapse_whitespace(value).split(AUTHOR_DELIMITER):
        name = token.strip()
        is_corresponding = "*" in name
        is_coauthor = "#" in name
        name = strip_author_markers(name)

        if "," in name:
            parts = [part.strip() for part in name.split(",")]
            name = f"{parts[1]} {parts[0]}"

        name = clean_bibtex_string(name)
        if not name:
            continue

        authors.append(
            Author(
                name=name,
                is_highlighted=matches_highlight(name, highlight_name),
                is_corresponding=is_corresponding,
                is_coauthor=is_coauthor,
            )
        )

    return authors


def matches_highlight(name: str, highlight_name: str | None) -> bool:
    """Return True if name contains the highlight name.

    A two-part highlight name ("John Smith") also matches in swapped order
    ("Smith John").
    """
    if not highlight_name or not highlight_name.strip():
        return False

    lower_name = name.lower()
    lower_highlight = highlight_name.strip().lower()
    if lower_highlight in lower_name:
        return True

    parts = lower_highlight.split(" ")
    if len(parts) == 2:
        return f"{parts[1]} {parts[0]}" in lower_name
    return False
