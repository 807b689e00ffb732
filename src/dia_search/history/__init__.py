"""Browser history data access."""

from dia_search.history.reader import HistoryReader

__all__ = ["HistoryReader"]
