"""Shared data types for bibfolio.

This package contains the raw entry and publication dataclasses and the
identifier helpers consumed across the pipeline.
"""

from bibfolio.models.identifiers import (
    FALLBACK_ID_PREFIX,
    is_fallback_id,
    make_fallback_id_factory,
)
from bibfolio.models.records import (
    PUBLICATION_TYPES,
    RESEARCH_AREAS,
    Author,
    Publication,
    RawEntry,
)

__all__ = [
    # Record models
    "RawEntry",
    "Author",
    "Publication",
    "PUBLICATION_TYPES",
    "RESEARCH_AREAS",
    # Identifiers
    "FALLBACK_ID_PREFIX",
    "make_fallback_id_factory",
    "is_fallback_id",
]
