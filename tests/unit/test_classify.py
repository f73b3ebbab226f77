"""Tests for publication type and research-area classification."""

import pytest

from bibfolio.models import PUBLICATION_TYPES, RESEARCH_AREAS
from bibfolio.normalize import publication_type, research_area
from bibfolio.normalize.classify import is_known_entry_type
from bibfolio.normalize.tag_mappings import RESEARCH_AREA_RULES, TYPE_MAPPING


@pytest.mark.unit
@pytest.mark.parametrize(
    ("entry_type", "expected"),
    [
        ("article", "journal"),
        ("inproceedings", "conference"),
        ("InProceedings", "conference"),
        ("conference", "conference"),
        ("incollection", "book-chapter"),
        ("book", "book"),
        ("phdthesis", "thesis"),
        ("mastersthesis", "thesis"),
        ("techreport", "technical-report"),
        ("unpublished", "preprint"),
        ("MISC", "preprint"),
        ("foobar", "journal"),
        ("", "journal"),
    ],
)
def test_publication_type(entry_type: str, expected: str) -> None:
    """Test the entry type table and its journal default."""
    assert publication_type(entry_type) == expected


@pytest.mark.unit
def test_type_table_targets_known_types() -> None:
    """Test every mapped type is a declared publication type."""
    assert set(TYPE_MAPPING.values()) <= set(PUBLICATION_TYPES)
    assert is_known_entry_type("Article")
    assert not is_known_entry_type("foobar")


@pytest.mark.unit
def test_tables_are_read_only() -> None:
    """Test lookup tables cannot be modified."""
    with pytest.raises(TypeError):
        TYPE_MAPPING["thesis"] = "thesis"  # type: ignore[index]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("title", "keywords", "expected"),
    [
        ("A Quantum Neural Network", [], "quantum-computing"),
        ("Deep Learning for Medical Imaging", [], "ai-healthcare"),
        ("Sparse Signal Recovery", [], "signal-processing"),
        ("Fault Diagnosis of Rolling Bearings", [], "reliability-engineering"),
        ("Spiking Networks at Scale", [], "neural-networks"),
        ("Attention Is All You Need", [], "transformer-architectures"),
        ("Gradient Boosting Revisited", [], "machine-learning"),
        ("Transformers for Text", ["healthcare"], "ai-healthcare"),
        ("Untitled", ["Quantum"], "quantum-computing"),
        (None, [], "machine-learning"),
    ],
)
def test_research_area(title: str | None, keywords: list[str], expected: str) -> None:
    """Test first-match-wins rules over title and keywords."""
    assert research_area(title, keywords) == expected


@pytest.mark.unit
def test_research_area_rules_target_known_areas() -> None:
    """Test rule targets are declared research areas."""
    assert {area for _, area in RESEARCH_AREA_RULES} <= set(RESEARCH_AREAS)
