"""Year and publication-status extraction."""

from collections.abc import Mapping

from .._helpers import clean_bibtex_string, leading_int
from .._result_types import NumericYear, YearLabel, YearResult, YearValue
from ..tag_mappings import DEFAULT_YEAR_LABEL


def classify_year(raw: str | None) -> YearValue:
    """Classify a raw year field as a numeric year or a status label.

    Parameters
    ----------
    raw : str | None
        Raw ``year`` field text.

    Returns
    -------
    YearValue
        NumericYear for a positive leading integer, otherwise a YearLabel
        with sentence casing ("in review" -> "In review").
    """
    value = clean_bibtex_string(raw).strip()

    number = leading_int(value)
    if number is not None and number > 0:
        return NumericYear(number)

    if not value:
        return YearLabel(DEFAULT_YEAR_LABEL)
    return YearLabel(value[0].upper() + value[1:].lower())


def parse_year(fields: Mapping[str, str]) -> YearResult:
    """Extract the flattened (year, year_label) pair from entry fields.

    Never raises; a missing year yields ``(0, "In review")``.
    """
    return YearResult.from_value(classify_year(fields.get("year")))
