"""Deduplication and ranked fuzzy search over browsing records."""

from dia_search.search.dedupe import dedupe
from dia_search.search.matcher import Pattern
from dia_search.search.ranker import RankedRecord, Ranker, SOURCE_WEIGHTS

__all__ = [
    "dedupe",
    "Pattern",
    "Ranker",
    "RankedRecord",
    "SOURCE_WEIGHTS",
]
