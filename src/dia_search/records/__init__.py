"""Browsing records and their canonical forms."""

from dia_search.records.canonical import canonical_url, merge_key, normalize
from dia_search.records.models import SOURCE_PRECEDENCE, Record, Source

__all__ = [
    "Record",
    "Source",
    "SOURCE_PRECEDENCE",
    "canonical_url",
    "merge_key",
    "normalize",
]
