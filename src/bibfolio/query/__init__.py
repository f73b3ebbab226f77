"""Publication list queries used by the website's publication page."""

from bibfolio.query.filters import (
    Facets,
    collect_facets,
    filter_publications,
    matches_query,
    matches_year,
    selected_publications,
)

__all__ = [
    "Facets",
    "collect_facets",
    "filter_publications",
    "matches_query",
    "matches_year",
    "selected_publications",
]
