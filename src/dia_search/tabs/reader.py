"""Read currently open tabs from a profile's session snapshots."""

from __future__ import annotations

import logging
from pathlib import Path

from dia_search.exceptions import SessionNotFoundError, SessionParseError
from dia_search.records.models import Record
from dia_search.tabs.snss import TabNavigation, parse_snss

logger = logging.getLogger(__name__)

MAX_TABS = 500
SESSION_PREFIXES = ("Tabs_", "Session_")


def find_session_file(sessions_dir: Path) -> Path:
    """Newest snapshot, preferring Tabs_* files over Session_* files."""
    if not sessions_dir.is_dir():
        raise SessionNotFoundError(f"sessions directory not found: {sessions_dir}")

    candidates = [
        child
        for child in sessions_dir.iterdir()
        if child.is_file() and child.name.startswith(SESSION_PREFIXES)
    ]
    if not candidates:
        raise SessionNotFoundError(f"no session files found in {sessions_dir}")

    def sort_key(path: Path) -> tuple[bool, float]:
        try:
            mtime = path.stat().st_mtime
        except OSError:
            mtime = 0.0
        return (path.name.startswith("Tabs_"), mtime)

    return max(candidates, key=sort_key)


def latest_navigations(navigations: list[TabNavigation]) -> dict[int, TabNavigation]:
    """The highest-index navigation for each tab id, ignoring blank URLs."""
    latest: dict[int, TabNavigation] = {}
    for nav in navigations:
        if not nav.url:
            continue
        current = latest.get(nav.tab_id)
        if current is None or nav.index > current.index:
            latest[nav.tab_id] = nav
    return latest


class TabsReader:
    """Read open tabs from the newest session snapshot in a directory."""

    def __init__(self, sessions_dir: Path):
        self.sessions_dir = sessions_dir

    def fetch_records(self, limit: int = MAX_TABS) -> list[Record]:
        """One record per open tab, at most ``limit``.

        Raises SessionNotFoundError when there is no snapshot to read. A
        snapshot that cannot be decoded is logged and yields no tabs.
        """
        session_file = find_session_file(self.sessions_dir)
        try:
            data = session_file.read_bytes()
        except OSError as e:
            raise SessionNotFoundError(f"failed to read {session_file}: {e}") from e

        try:
            navigations = parse_snss(data)
        except SessionParseError as e:
            logger.warning("Failed to parse session file %s: %s", session_file, e)
            return []

        latest = latest_navigations(navigations)
        records = [
            Record.tab(nav.url, nav.title, tab_id)
            for tab_id, nav in list(latest.items())[:limit]
        ]
        logger.debug("Loaded %d tabs from %s", len(records), session_file)
        return records
