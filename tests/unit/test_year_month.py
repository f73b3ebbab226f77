"""Tests for year/status and month normalization."""

import pytest

from bibfolio.normalize import NumericYear, YearLabel, YearResult, classify_year, parse_year
from bibfolio.normalize import resolve_month
from bibfolio.normalize._fields import month_number


@pytest.mark.unit
@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"year": "2026"}, (2026, "2026")),
        ({"year": "in review"}, (0, "In review")),
        ({}, (0, "In review")),
        ({"year": "{2025}"}, (2025, "2025")),
        ({"year": " 2021 "}, (2021, "2021")),
        ({"year": "2024a"}, (2024, "2024")),
        ({"year": "FORTHCOMING"}, (0, "Forthcoming")),
        ({"year": "under Review"}, (0, "Under review")),
        ({"year": "   "}, (0, "In review")),
        ({"year": "{}"}, (0, "In review")),
        ({"year": "-5"}, (0, "-5")),
        ({"year": "9" * 5000}, (0, "9" * 5000)),
    ],
)
def test_parse_year(fields: dict[str, str], expected: tuple[int, str]) -> None:
    """Test numeric years, status labels and the missing-year default."""
    assert parse_year(fields) == expected


@pytest.mark.unit
def test_parse_year_returns_named_pair() -> None:
    """Test the flattened result exposes named attributes."""
    result = parse_year({"year": "2024"})

    assert isinstance(result, YearResult)
    assert result.year == 2024
    assert result.year_label == "2024"


@pytest.mark.unit
def test_classify_year_variants() -> None:
    """Test the tagged year value distinguishes years from labels."""
    assert classify_year("2023") == NumericYear(2023)
    assert classify_year("in press") == YearLabel("In press")
    assert classify_year(None) == YearLabel("In review")
    assert classify_year("2023").label == "2023"


@pytest.mark.unit
def test_year_result_from_value() -> None:
    """Test flattening of both variants."""
    assert YearResult.from_value(NumericYear(1999)) == (1999, "1999")
    assert YearResult.from_value(YearLabel("Accepted")) == (0, "Accepted")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("jan", "1"),
        ("January", "1"),
        ("FEB", "2"),
        ("sept", "9"),
        ("Sep", "9"),
        (" mar ", "3"),
        ("december", "12"),
        ("7", "7"),
        ("12", "12"),
        ("13", "13"),
        ("0", "0"),
        ("Spring", "Spring"),
        ("\u00b2", "\u00b2"),
        ("03", "3"),
        ("9" * 5000, "9" * 5000),
        ("0" * 5000 + "4", "4"),
        (" Summer ", "Summer"),
        (None, None),
        ("", None),
        ("   ", None),
    ],
)
def test_resolve_month(raw: str | None, expected: str | None) -> None:
    """Test month names, numbers, pass-through and absent months."""
    assert resolve_month(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("oct", 10),
        ("11", 11),
        ("13", None),
        ("-1", None),
        ("Spring", None),
        ("\u00b2", None),
        ("\u0663", 3),
        ("007", 7),
        ("0", None),
        ("1" * 5000, None),
        (None, None),
    ],
)
def test_month_number(raw: str | None, expected: int | None) -> None:
    """Test resolution to 1..12 or None."""
    assert month_number(raw) == expected
