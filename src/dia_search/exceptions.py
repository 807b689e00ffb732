"""Unified exception hierarchy for dia-search."""


class DiaSearchError(Exception):
    """Base exception for all dia-search errors."""


# Config
class ConfigError(DiaSearchError):
    """Base exception for profile and data directory resolution."""


class DataDirNotFoundError(ConfigError):
    """The browser data directory does not exist."""


class ProfileNotFoundError(ConfigError):
    """The requested browser profile does not exist."""

    def __init__(self, profile: str, available: list[str]):
        self.profile = profile
        self.available = available
        listing = ", ".join(available) if available else "none"
        super().__init__(f"profile '{profile}' not found (available: {listing})")


# History
class HistoryError(DiaSearchError):
    """Base exception for history operations."""


class HistoryReadError(HistoryError):
    """Failed to read the History database."""


# Bookmarks
class BookmarksError(DiaSearchError):
    """Base exception for bookmark operations."""


class BookmarksReadError(BookmarksError):
    """Failed to read or decode the Bookmarks file."""


# Tabs
class TabsError(DiaSearchError):
    """Base exception for open-tab operations."""


class SessionNotFoundError(TabsError):
    """No session snapshot file could be located."""


class SessionParseError(TabsError):
    """A session snapshot file is not in the expected format."""
