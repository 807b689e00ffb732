"""Read-only access to the Chromium-format History database."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from dia_search.exceptions import HistoryReadError
from dia_search.records.models import Record

logger = logging.getLogger(__name__)

# Microseconds from 1601-01-01 to 1970-01-01 (Chromium epoch).
CHROMIUM_EPOCH_OFFSET_US = 11_644_473_600_000_000


class HistoryReader:
    """Read visited pages from a profile's History SQLite database."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    def fetch_records(self, limit: int = 100) -> list[Record]:
        """Most recently visited pages first, hidden entries excluded."""
        if not self.db_path.exists():
            raise HistoryReadError(f"History database not found at {self.db_path}")

        conn = self._connect(self.db_path)
        try:
            rows = conn.execute(
                """
                SELECT url, title, visit_count, last_visit_time
                FROM urls
                WHERE hidden = 0
                ORDER BY last_visit_time DESC
                LIMIT ?
                """,
                (max(0, limit),),
            ).fetchall()
        except sqlite3.Error as e:
            raise HistoryReadError(f"Failed querying history: {e}") from e
        finally:
            conn.close()

        records: list[Record] = []
        for row in rows:
            url = row["url"]
            if not isinstance(url, str):
                logger.debug("Skipping history row without a text url: %r", url)
                continue
            try:
                records.append(
                    Record.history(
                        url=url,
                        title=row["title"] or "",
                        visit_count=int(row["visit_count"] or 0),
                        last_visit=self._chromium_to_unix_ms(int(row["last_visit_time"] or 0)),
                    )
                )
            except (TypeError, ValueError) as e:
                logger.debug("Skipping unreadable history row: %s", e)

        logger.debug("Loaded %d history records from %s", len(records), self.db_path)
        return records

    @staticmethod
    def _connect(path: Path) -> sqlite3.Connection:
        # immutable=1 lets us read while the browser holds its lock.
        try:
            conn = sqlite3.connect(f"{path.resolve().as_uri()}?immutable=1", uri=True)
        except sqlite3.Error as e:
            raise HistoryReadError(f"Cannot open History database at {path}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _chromium_to_unix_ms(chromium_time: int) -> int:
        return (chromium_time - CHROMIUM_EPOCH_OFFSET_US) // 1000
