"""Relevance ranking of records against a free-text query."""

from __future__ import annotations

import heapq
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from dia_search.records.models import Record, Source
from dia_search.search.matcher import Pattern, prepare

logger = logging.getLogger(__name__)

# Open tabs reflect what the user is doing right now, so they rank highest.
# Independent of SOURCE_PRECEDENCE even though the orderings agree.
SOURCE_WEIGHTS: dict[Source, float] = {
    Source.HISTORY: 1.0,
    Source.BOOKMARK: 1.1,
    Source.TAB: 1.3,
}

FREQUENCY_FACTOR = 0.1


@dataclass
class RankedRecord:
    """A record paired with its final relevance score."""

    record: Record
    score: float


def frequency_boost(visit_count: int | None) -> float:
    return 1.0 + math.log1p(visit_count or 0) * FREQUENCY_FACTOR


class Ranker:
    """Scores and orders records for a query.

    Holds a scratch buffer reused across every scoring call. A Ranker may
    serve many searches but must not be shared by concurrent callers.
    """

    def __init__(self) -> None:
        self._buf: list[str] = []

    def search(self, records: Sequence[Record], query: str, limit: int) -> list[Record]:
        """Top ``limit`` records for ``query``, best first.

        An empty query returns the first ``limit`` records unscored.
        Order among equal scores is unspecified.
        """
        return [ranked.record for ranked in self.search_scored(records, query, limit)]

    def search_scored(
        self,
        records: Sequence[Record],
        query: str,
        limit: int,
    ) -> list[RankedRecord]:
        """Like ``search`` but keeps each record's score.

        An empty query scores every record 0.0.
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        if not query:
            return [RankedRecord(record, 0.0) for record in records[:limit]]

        pattern = Pattern.parse(query)
        scored: list[RankedRecord] = []
        for record in records:
            score = self.score(record, pattern)
            if score is not None:
                scored.append(RankedRecord(record, score))

        if len(scored) > limit:
            logger.debug("Selecting top %d of %d matches", limit, len(scored))
            # nlargest hands back its selection already best-first.
            return heapq.nlargest(limit, scored, key=_by_score)

        scored.sort(key=_by_score, reverse=True)
        return scored

    def score(self, record: Record, pattern: Pattern) -> float | None:
        """Final score for ``record``, or None when neither field matches."""
        title_score = pattern.score(prepare(record.title_norm, self._buf, pattern.normalize))
        url_score = pattern.score(prepare(record.url_norm, self._buf, pattern.normalize))

        if title_score is None and url_score is None:
            return None
        base = max(s for s in (title_score, url_score) if s is not None)
        return base * frequency_boost(record.visit_count) * SOURCE_WEIGHTS[record.source]


def _by_score(ranked: RankedRecord) -> float:
    return ranked.score
