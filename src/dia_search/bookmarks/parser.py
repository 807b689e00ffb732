"""Flatten a Chromium bookmark tree into bookmark records."""

from __future__ import annotations

import logging

from dia_search.exceptions import BookmarksReadError
from dia_search.records.models import Record

logger = logging.getLogger(__name__)

ROOT_KEYS = ("bookmark_bar", "other", "synced")
FOLDER_SEPARATOR = " / "
MAX_BOOKMARKS = 10_000


def flatten_bookmarks(tree: dict, limit: int = MAX_BOOKMARKS) -> list[Record]:
    """Walk every root of a decoded Bookmarks file, depth first.

    Each bookmark's folder is the " / "-joined path of its ancestor
    folders, or None at the top level. Stops after ``limit`` bookmarks.
    Nodes missing a url or name are skipped; fields of the wrong type
    raise BookmarksReadError.
    """
    roots = tree.get("roots", {})
    if not isinstance(roots, dict):
        raise BookmarksReadError(f"bookmark roots must be an object, got {type(roots).__name__}")
    records: list[Record] = []
    for key in ROOT_KEYS:
        node = roots.get(key)
        if isinstance(node, dict):
            _flatten_node(node, "", records, limit)

    if len(records) >= limit:
        logger.info("Bookmark cap of %d reached; remaining bookmarks skipped", limit)
    return records


def _flatten_node(node: dict, folder_path: str, records: list[Record], limit: int) -> None:
    if len(records) >= limit:
        return

    node_type = node.get("type") or "unknown"
    name = _optional_str(node, "name")

    if node_type == "url":
        url = _optional_str(node, "url")
        if url is None or name is None:
            return
        records.append(Record.bookmark(url, name, folder_path or None))
    elif node_type == "folder":
        if name is None:
            child_path = folder_path
        elif folder_path:
            child_path = f"{folder_path}{FOLDER_SEPARATOR}{name}"
        else:
            child_path = name
        children = node.get("children") or []
        if not isinstance(children, list):
            raise BookmarksReadError("bookmark folder children must be a list")
        for child in children:
            if isinstance(child, dict):
                _flatten_node(child, child_path, records, limit)


def _optional_str(node: dict, key: str) -> str | None:
    value = node.get(key)
    if value is not None and not isinstance(value, str):
        raise BookmarksReadError(
            f"bookmark field '{key}' must be a string, got {type(value).__name__}"
        )
    return value
