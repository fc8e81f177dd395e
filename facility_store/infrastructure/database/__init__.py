"""Query helpers over the document store."""

from .prefix_query import LOWEST_KEY, IDRangeQuery, PrefixQueryEngine

__all__ = ["IDRangeQuery", "LOWEST_KEY", "PrefixQueryEngine"]
