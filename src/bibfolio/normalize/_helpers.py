"""Helper functions and compiled regex patterns for normalization.

``clean_bibtex_string`` turns raw BibTeX field text into display text by
removing delimiters, brace groups and the LaTeX markup used in personal
bibliographies.
"""

import re

# Pre-compiled regex patterns
OUTER_QUOTE_RE = re.compile(r"\A[\"']|[\"']\Z")
# Brace groups that are not the argument of a handled command
_NOT_COMMAND_ARG = r"(?<!\\textbf)(?<!\\emph)(?<!\\cite)"
DOUBLE_BRACE_RE = re.compile(_NOT_COMMAND_ARG + r"\{\{([^{}]*)\}\}")
INNERMOST_BRACE_RE = re.compile(_NOT_COMMAND_ARG + r"\{([^{}]*)\}")
FORMAT_COMMAND_RE = re.compile(r"\\(?:textbf|emph)\{([^{}]*)\}")
CITE_COMMAND_RE = re.compile(r"\\cite\{[^{}]*\}")
STRAY_BRACE_RE = re.compile(r"[{}]")
WHITESPACE_RE = re.compile(r"\s+")
AUTHOR_MARKER_RE = re.compile(r"[*#]")
LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def clean_bibtex_string(value: str | None) -> str:
    """Strip BibTeX delimiters, braces and LaTeX markup from field text.

    The cleaning pass is repeated until the text stops changing, which makes
    the function idempotent.

    Parameters
    ----------
    value : str | None
        Raw field text.

    Returns
    -------
    str
        Display text; "" for empty or None input.

    Examples
    --------
        >>> clean_bibtex_string("{{Deep Learning}}")
        'Deep Learning'
        >>> clean_bibtex_string("\\\\textbf{Bold} text")
        'Bold text'
    """
    if not value:
        return ""

    cleaned = value
    for _ in range(len(value) + 1):
        next_value = _clean_once(cleaned)
        if next_value == cleaned:
            break
        cleaned = next_value
    return cleaned


def _clean_once(value: str) -> str:
    cleaned = OUTER_QUOTE_RE.sub("", value)
    cleaned = DOUBLE_BRACE_RE.sub(r"\1", cleaned)
    cleaned = _strip_brace_groups(cleaned)
    cleaned = STRAY_BRACE_RE.sub("", cleaned)
    cleaned = cleaned.replace("~", " ")
    cleaned = cleaned.replace("\\", "")
    return WHITESPACE_RE.sub(" ", cleaned).strip()


def _strip_brace_groups(value: str) -> str:
    """Unwrap command arguments and innermost brace groups.

    Each productive pass removes at least two characters, so the pass count
    is capped by the input length. Unbalanced input stops once a pass makes
    no progress.
    """
    for _ in range(len(value) // 2 + 1):
        if "{" not in value or "}" not in value:
            break
        reduced = CITE_COMMAND_RE.sub("", value)
        reduced = FORMAT_COMMAND_RE.sub(r"\1", reduced)
        reduced = INNERMOST_BRACE_RE.sub(r"\1", reduced)
        if len(reduced) == len(value):
            break
        value = reduced
    return value


def strip_author_markers(value: str) -> str:
    """Remove corresponding (``*``) and co-author (``#``) markers."""
    return AUTHOR_MARKER_RE.sub("", value)


def collapse_whitespace(value: str) -> str:
    """Collapse whitespace runs (including line breaks) to single spaces."""
    return WHITESPACE_RE.sub(" ", value).strip()


def optional_text(value: str | None) -> str | None:
    """Return the trimmed value, or None if it is missing or blank."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def leading_int(value: str) -> int | None:
    """Parse the signed integer at the start of value.

    Returns None when value does not start with digits or the digit run is
    too long to convert.
    """
    match = LEADING_INT_RE.match(value)
    if match is None:
        return None
    try:
        return int(match.group(0))
    except ValueError:
        return None
