"""Tests for author list parsing and highlighting."""

import pytest

from bibfolio.models import Author
from bibfolio.normalize import parse_authors
from bibfolio.normalize._fields import matches_highlight


@pytest.mark.unit
def test_parse_authors_markers_and_highlight() -> None:
    """Test reordering, marker flags and highlighting together."""
    authors = parse_authors("Smith, John* and Doe, Jane#", "John Smith")

    assert authors == [
        Author(name="John Smith", is_highlighted=True, is_corresponding=True, is_coauthor=False),
        Author(name="Jane Doe", is_highlighted=False, is_corresponding=False, is_coauthor=True),
    ]


@pytest.mark.unit
def test_parse_authors_without_highlight_name() -> None:
    """Test nobody is highlighted when no name is configured."""
    authors = parse_authors("Jane Doe and John Smith")

    assert [a.name for a in authors] == ["Jane Doe", "John Smith"]
    assert not any(a.is_highlighted for a in authors)


@pytest.mark.unit
def test_parse_authors_markers_anywhere_in_token() -> None:
    """Test markers are detected and removed wherever they appear."""
    authors = parse_authors("*Doe, Jane and Sm#ith, John*#")

    assert authors[0] == Author(name="Jane Doe", is_corresponding=True)
    assert authors[1] == Author(name="John Smith", is_corresponding=True, is_coauthor=True)


@pytest.mark.unit
def test_parse_authors_uses_first_two_comma_parts() -> None:
    """Test "Last, First, Suffix" keeps only first and last names."""
    authors = parse_authors("Doe, Jane, Jr.")

    assert [a.name for a in authors] == ["Jane Doe"]


@pytest.mark.unit
def test_parse_authors_cleans_latex() -> None:
    """Test names are cleaned of braces and LaTeX markup."""
    authors = parse_authors(r"{Doe}, {Jane} and \textbf{Brown}, Bob and van~Dyke, Ann")

    assert [a.name for a in authors] == ["Jane Doe", "Bob Brown", "Ann van Dyke"]


@pytest.mark.unit
def test_parse_authors_multiline_field() -> None:
    """Test line breaks around the separator are treated as spaces."""
    authors = parse_authors("Doe, Jane and\n    Smith, John and\n    Lee, Ann")

    assert [a.name for a in authors] == ["Jane Doe", "John Smith", "Ann Lee"]


@pytest.mark.unit
def test_parse_authors_drops_empty_names() -> None:
    """Test tokens that clean to nothing are dropped and order is kept."""
    authors = parse_authors("Doe, Jane and {} and Smith")

    assert [a.name for a in authors] == ["Jane Doe", "Smith"]


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, "", "   "])
def test_parse_authors_empty_field(value: str | None) -> None:
    """Test missing or blank author fields give no authors."""
    assert parse_authors(value, "Jane Doe") == []


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "highlight", "expected"),
    [
        ("Jane Doe", "Jane Doe", True),
        ("JANE DOE", "jane doe", True),
        ("Jane A. Doe", "Doe", True),
        ("Doe Jane", "Jane Doe", True),
        ("Jane Doe", "  Jane Doe  ", True),
        ("John Smith", "Jane Doe", False),
        ("Jane Q Doe", "Jane Q Doe Jr", False),
        ("Jane Doe", None, False),
        ("Jane Doe", "", False),
        ("Jane Doe", "   ", False),
    ],
)
def test_matches_highlight(name: str, highlight: str | None, expected: bool) -> None:
    """Test case-insensitive substring and swapped two-part matching."""
    assert matches_highlight(name, highlight) is expected


@pytest.mark.unit
def test_author_to_dict() -> None:
    """Test website representation of an author."""
    author = Author(name="Jane Doe", is_highlighted=True, is_coauthor=True)

    assert author.to_dict() == {
        "name": "Jane Doe",
        "isHighlighted": True,
        "isCorresponding": False,
        "isCoAuthor": True,
    }
