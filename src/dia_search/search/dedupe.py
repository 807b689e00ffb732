"""Collapse records from all sources that point at the same page."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dia_search.records.models import Record

logger = logging.getLogger(__name__)

# Visit counts saturate at the width of the browser's counter column.
MAX_VISIT_COUNT = (1 << 32) - 1


def dedupe(records: Iterable[Record]) -> list[Record]:
    """Fold ``records`` into one record per merge key.

    The first record seen for a key is retained and keeps its url,
    folder and tab_id. Later records only refine its title, visit_count
    and last_visit (see ``merge_into``). Output order is unspecified.
    """
    retained: dict[int, Record] = {}
    total = 0
    for record in records:
        total += 1
        existing = retained.get(record.merge_key)
        if existing is None:
            retained[record.merge_key] = record
        else:
            merge_into(existing, record)

    logger.debug("Deduplicated %d records into %d", total, len(retained))
    return list(retained.values())


def merge_into(existing: Record, incoming: Record) -> None:
    """Merge ``incoming`` into ``existing`` in place."""
    if incoming.source.precedence > existing.source.precedence and incoming.title:
        existing.set_title(incoming.title)

    if existing.visit_count is not None or incoming.visit_count is not None:
        existing.visit_count = min(
            (existing.visit_count or 0) + (incoming.visit_count or 0),
            MAX_VISIT_COUNT,
        )

    if existing.last_visit is None:
        existing.last_visit = incoming.last_visit
    elif incoming.last_visit is not None:
        existing.last_visit = max(existing.last_visit, incoming.last_visit)
