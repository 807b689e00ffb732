"""Data models for browsing records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from dia_search.records.canonical import merge_key, normalize


class Source(str, Enum):
    """Where a record came from."""

    HISTORY = "history"
    BOOKMARK = "bookmark"
    TAB = "tab"

    @property
    def precedence(self) -> int:
        return SOURCE_PRECEDENCE[self]


# Merge precedence: a higher-precedence source may override the title of a
# retained record. Ranking weights are kept separately in search.ranker.
SOURCE_PRECEDENCE: dict[Source, int] = {
    Source.HISTORY: 0,
    Source.BOOKMARK: 1,
    Source.TAB: 2,
}


@dataclass
class Record:
    """A history visit, bookmark, or open tab.

    ``url_norm``, ``title_norm`` and ``merge_key`` are derived at
    construction and excluded from the external representation.
    """

    url: str
    title: str
    source: Source
    visit_count: int | None = None
    last_visit: int | None = None  # epoch milliseconds
    folder: str | None = None
    tab_id: int | None = None
    url_norm: str = field(init=False, repr=False, compare=False)
    title_norm: str = field(init=False, repr=False, compare=False)
    merge_key: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.url_norm = normalize(self.url)
        self.title_norm = normalize(self.title)
        self.merge_key = merge_key(self.url)

    @classmethod
    def history(cls, url: str, title: str, visit_count: int, last_visit: int) -> Record:
        return cls(
            url=url,
            title=title,
            source=Source.HISTORY,
            visit_count=visit_count,
            last_visit=last_visit,
        )

    @classmethod
    def bookmark(cls, url: str, title: str, folder: str | None = None) -> Record:
        return cls(url=url, title=title, source=Source.BOOKMARK, folder=folder)

    @classmethod
    def tab(cls, url: str, title: str, tab_id: int) -> Record:
        return cls(url=url, title=title, source=Source.TAB, tab_id=tab_id)

    def set_title(self, title: str) -> None:
        """Replace the title, keeping ``title_norm`` in step."""
        self.title = title
        self.title_norm = normalize(title)

    def to_dict(self) -> dict:
        """External representation; optional fields only when present."""
        data: dict = {
            "url": self.url,
            "title": self.title,
            "source": self.source.value,
        }
        for key in ("visit_count", "last_visit", "folder", "tab_id"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data
