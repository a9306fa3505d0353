"""Aggregation passes run over the full set of processed notes."""

from postnotes.indexing.content_map_builder import ContentMapBuilder
from postnotes.indexing.navigation_builder import NavigationBuilder

__all__ = [
    "ContentMapBuilder",
    "NavigationBuilder",
]
