"""JSON rendering of records for stdout."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Sequence

from dia_search.records.models import Record


def dumps_records(records: Iterable[Record]) -> str:
    """A single JSON array."""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def iter_ndjson(records: Iterable[Record]) -> Iterator[str]:
    """One JSON object per record."""
    for record in records:
        yield json.dumps(record.to_dict(), ensure_ascii=False)


def dumps_search_result(records: Sequence[Record]) -> str:
    """``{"results": [...], "count": N}``."""
    return json.dumps(
        {"results": [r.to_dict() for r in records], "count": len(records)},
        ensure_ascii=False,
    )
