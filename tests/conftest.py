"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibfolio.models import Author, Publication, RawEntry  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_bib() -> Path:
    """Path to the four-entry sample bibliography."""
    return FIXTURES_DIR / "sample.bib"


@pytest.fixture
def make_entry() -> Callable[..., RawEntry]:
    """Factory for raw entries; keyword arguments become fields."""

    def _factory(
        entry_type: str = "article",
        key: str = "key2024",
        *,
        line_start: int = 0,
        **fields: str,
    ) -> RawEntry:
        return RawEntry(
            entry_type=entry_type,
            citation_key=key,
            fields={name.lower(): value for name, value in fields.items()},
            line_start=line_start,
        )

    return _factory


@pytest.fixture
def make_publication() -> Callable[..., Publication]:
    """Factory for publications with minimal boilerplate."""

    def _factory(
        pid: str = "pub1",
        *,
        title: str = "A Study",
        authors: tuple[str, ...] = ("Jane Doe",),
        year: int = 2024,
        year_label: str | None = None,
        pub_type: str = "journal",
        research_area: str = "machine-learning",
        journal: str | None = None,
        conference: str | None = None,
        selected: bool = False,
    ) -> Publication:
        return Publication(
            id=pid,
            title=title,
            authors=tuple(Author(name=name) for name in authors),
            year=year,
            year_label=year_label if year_label is not None else str(year),
            type=pub_type,
            research_area=research_area,
            journal=journal,
            conference=conference,
            selected=selected,
        )

    return _factory
