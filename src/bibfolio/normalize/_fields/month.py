"""Month resolution."""

from ..tag_mappings import MONTH_MAPPING


def month_number(raw: str | None) -> int | None:
    """Resolve a month name, abbreviation or number to 1..12.

    Returns None when the value cannot be resolved.
    """
    if not raw:
        return None

    value = raw.strip().lower()
    number = MONTH_MAPPING.get(value)
    if number is not None:
        return number

    if not value.isdecimal():
        return None
    digits = value.lstrip("0")
    if len(digits) <= 2 and 1 <= int(digits or "0") <= 12:
        return int(digits)
    return None


def resolve_month(raw: str | None) -> str | None:
    """Resolve the month attribute of a publication.

    Parameters
    ----------
    raw : str | None
        Raw ``month`` field text.

    Returns
    -------
    str | None
        Month number as text ("1".."12") when resolvable, the trimmed raw
        value otherwise, None when the field is missing or blank.
    """
    if raw is None or not raw.strip():
        return None

    number = month_number(raw)
    if number is None:
        return raw.strip()
    return str(number)
