"""Load bookmarks from a profile's Bookmarks JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dia_search.bookmarks.parser import MAX_BOOKMARKS, flatten_bookmarks
from dia_search.exceptions import BookmarksReadError
from dia_search.records.models import Record

logger = logging.getLogger(__name__)


class BookmarksReader:
    """Read bookmarks from a Chromium-format Bookmarks file."""

    def __init__(self, path: Path):
        self.path = path

    def fetch_records(self, limit: int = MAX_BOOKMARKS) -> list[Record]:
        """All bookmarks, or an empty list if the profile has none."""
        if not self.path.exists():
            logger.info("Bookmarks file not found at %s", self.path)
            return []

        try:
            with self.path.open("r", encoding="utf-8") as f:
                tree = json.load(f)
        except OSError as e:
            raise BookmarksReadError(f"Failed to open bookmarks at {self.path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BookmarksReadError(f"Failed to parse bookmarks JSON at {self.path}: {e}") from e

        if not isinstance(tree, dict):
            raise BookmarksReadError(f"Unexpected bookmarks layout in {self.path}")

        records = flatten_bookmarks(tree, limit=limit)
        logger.debug("Loaded %d bookmarks from %s", len(records), self.path)
        return records
