"""Bookmark data access."""

from dia_search.bookmarks.parser import flatten_bookmarks
from dia_search.bookmarks.reader import BookmarksReader

__all__ = ["BookmarksReader", "flatten_bookmarks"]
