"""BibTeX entry scanner.

Entries: @<entrytype>{citekey, field = {value}, ...} or @<entrytype>(...)
Text outside entries is treated as comment. @COMMENT and @PREAMBLE blocks
are skipped, @STRING macros are expanded in bare field values.
Reference: http://www.bibtex.org/Format/
"""

import re

from bibfolio.models import RawEntry
from bibfolio.parse.base import ParseResult

PARSER_NAME = "bibtex_scanner"
PARSER_VERSION = "2.0.0"

ENTRY_HEADER_PATTERN = re.compile(r"@\s*([A-Za-z]\w*)\s*([{(])")
FIELD_NAME_PATTERN = re.compile(r"([A-Za-z0-9_:.+\-]+)\s*=\s*")
BARE_VALUE_PATTERN = re.compile(r"[^\s,#{}()\"]+")

_SKIPPED_TYPES = frozenset({"comment", "preamble"})


def parse_bibtex(text: str) -> ParseResult:
    """Scan BibTeX text and return raw entries in source order.

    Parameters
    ----------
    text : str
        Complete BibTeX source, LF line endings.

    Returns
    -------
    ParseResult
        Entries, warnings, and errors.
    """
    warnings: list[str] = []
    errors: list[str] = []
    entries: list[RawEntry] = []
    macros: dict[str, str] = {}

    i = 0
    while True:
        at = text.find("@", i)
        if at == -1:
            break

        match = ENTRY_HEADER_PATTERN.match(text, at)
        if not match:
            # Stray '@' in comment text, e.g. an e-mail address
            i = at + 1
            continue

        entry_type, opener = match.groups()
        kind = entry_type.lower()
        line = text.count("\n", 0, at)

        body_start = match.end()
        body_end = _find_closing_delimiter(text, body_start, opener)
        if body_end == -1:
            errors.append(f"Line {line}: Unclosed entry @{entry_type}")
            i = body_start
            continue

        body = text[body_start:body_end]
        i = body_end + 1

        if kind in _SKIPPED_TYPES:
            warnings.append(f"Line {line}: Skipping @{kind.upper()} block")
            continue

        if kind == "string":
            for name, value in _parse_fields(body, macros, warnings, line):
                macros[name] = value
            continue

        citekey, fields_text = _split_citekey(body)
        fields: dict[str, str] = {}
        for name, value in _parse_fields(fields_text, macros, warnings, line):
            if name in fields:
                warnings.append(
                    f"Line {line}: Duplicate field '{name}' in @{entry_type}{{{citekey}}}, "
                    "keeping first value"
                )
                continue
            fields[name] = value

        entries.append(
            RawEntry(
                entry_type=entry_type,
                citation_key=citekey,
                fields=fields,
                line_start=line,
            )
        )

    return ParseResult(entries, warnings, errors)


def _find_closing_delimiter(text: str, start: int, opener: str) -> int:
    """Return index of the delimiter closing an entry body, or -1."""
    brace_depth = 0
    in_quotes = False
    escape_next = False

    for i in range(start, len(text)):
        char = text[i]
        if escape_next:
            escape_next = False
            continue

        if char == "\\":
            escape_next = True
            continue

        if char == "{":
            brace_depth += 1
        elif char == "}":
            if brace_depth == 0 and opener == "{":
                return i
            brace_depth -= 1
        elif opener == "(" and brace_depth == 0:
            if char == '"':
                in_quotes = not in_quotes
            elif char == ")" and not in_quotes:
                return i

    return -1


def _split_citekey(body: str) -> tuple[str, str]:
    comma = body.find(",")
    if comma == -1:
        return body.strip(), ""
    return body[:comma].strip(), body[comma + 1 :]


def _parse_fields(
    content: str,
    macros: dict[str, str],
    warnings: list[str],
    line: int,
) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []

    i = 0
    while i < len(content):
        # Skip whitespace and separators
        while i < len(content) and (content[i].isspace() or content[i] == ","):
            i += 1
        if i >= len(content):
            break

        field_match = FIELD_NAME_PATTERN.match(content, i)
        if not field_match:
            warnings.append(f"Line {line}: Unexpected text in entry: {content[i:i + 30]!r}")
            i = _skip_to_next_comma(content, i)
            continue

        field_name = field_match.group(1).lower()
        value, i = _parse_value(content, field_match.end(), macros)
        fields.append((field_name, value.strip()))

    return fields


def _parse_value(content: str, start: int, macros: dict[str, str]) -> tuple[str, int]:
    """Parse a possibly '#'-concatenated value starting at start."""
    pieces: list[str] = []
    i = start

    while True:
        while i < len(content) and content[i].isspace():
            i += 1
        if i >= len(content):
            break

        char = content[i]
        if char == "{":
            piece, i = _parse_braced_value(content, i)
        elif char == '"':
            piece, i = _parse_quoted_value(content, i)
        else:
            piece, i = _parse_bare_value(content, i, macros)
            if not piece:
                break
        pieces.append(piece)

        while i < len(content) and content[i].isspace():
            i += 1
        if i < len(content) and content[i] == "#":
            i += 1
            continue
        break

    return "".join(pieces), i


def _parse_braced_value(content: str, start: int) -> tuple[str, int]:
    brace_depth = 0
    value_chars: list[str] = []
    escape_next = False
    i = start

    while i < len(content):
        char = content[i]
        if escape_next:
            value_chars.append(char)
            escape_next = False
        elif char == "\\":
            value_chars.append(char)
            escape_next = True
        elif char == "{":
            brace_depth += 1
            if brace_depth > 1:
                value_chars.append(char)
        elif char == "}":
            brace_depth -= 1
            if brace_depth == 0:
                return "".join(value_chars), i + 1
            value_chars.append(char)
        else:
            value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_quoted_value(content: str, start: int) -> tuple[str, int]:
    i = start + 1  # skip opening quote
    value_chars: list[str] = []
    brace_depth = 0
    escape_next = False

    while i < len(content):
        char = content[i]
        if escape_next:
            value_chars.append(char)
            escape_next = False
        elif char == "\\":
            value_chars.append(char)
            escape_next = True
        elif char == '"' and brace_depth == 0:
            return "".join(value_chars), i + 1
        else:
            if char == "{":
                brace_depth += 1
            elif char == "}":
                brace_depth -= 1
            value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_bare_value(content: str, start: int, macros: dict[str, str]) -> tuple[str, int]:
    match = BARE_VALUE_PATTERN.match(content, start)
    if not match:
        return "", start

    token = match.group(0)
    if token.isdigit():
        return token, match.end()
    return macros.get(token.lower(), token), match.end()


def _skip_to_next_comma(content: str, start: int) -> int:
    brace_depth = 0
    for i in range(start, len(content)):
        char = content[i]
        if char == "{":
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
        elif char == "," and brace_depth <= 0:
            return i + 1
    return len(content)
