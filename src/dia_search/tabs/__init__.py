"""Open tab data access."""

from dia_search.tabs.reader import TabsReader, find_session_file
from dia_search.tabs.snss import TabNavigation, parse_snss

__all__ = ["TabsReader", "TabNavigation", "find_session_file", "parse_snss"]
