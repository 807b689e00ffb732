"""Command-line interface: list or search history, bookmarks and tabs."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from dia_search import output
from dia_search.bookmarks.reader import BookmarksReader
from dia_search.config import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    HISTORY_SEARCH_LIMIT,
    ProfileConfig,
)
from dia_search.exceptions import DiaSearchError, TabsError
from dia_search.history.reader import HistoryReader
from dia_search.records.models import Record
from dia_search.search.dedupe import dedupe
from dia_search.search.ranker import Ranker
from dia_search.tabs.reader import TabsReader

logger = logging.getLogger(__name__)

SOURCE_NAMES = ("history", "bookmarks", "tabs")


def parse_sources(value: str) -> set[str]:
    """Comma-separated source names; unknown names are ignored."""
    return {part.strip() for part in value.split(",")} & set(SOURCE_NAMES)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dia-search",
        description="Query Dia browser history, bookmarks and open tabs.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging on stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-p", "--profile", default=None, help="Browser profile name")
    common.add_argument(
        "--json",
        action="store_true",
        help="Print a single JSON array instead of the default format",
    )

    history = subparsers.add_parser("history", parents=[common], help="List browsing history")
    history.add_argument(
        "-l",
        "--limit",
        type=int,
        default=DEFAULT_HISTORY_LIMIT,
        help="Maximum number of entries to return",
    )

    subparsers.add_parser("bookmarks", parents=[common], help="List bookmarks")
    subparsers.add_parser("tabs", parents=[common], help="List open tabs")

    search = subparsers.add_parser(
        "search", parents=[common], help="Search history, bookmarks and tabs"
    )
    search.add_argument(
        "query", nargs="?", default=None, help="Search query; an empty string browses"
    )
    search.add_argument(
        "-a", "--all", action="store_true", help="Browse without a query"
    )
    search.add_argument(
        "-s",
        "--sources",
        type=parse_sources,
        default=set(SOURCE_NAMES),
        help="Sources to search (comma-separated: history,bookmarks,tabs)",
    )
    search.add_argument(
        "-l",
        "--limit",
        type=int,
        default=DEFAULT_SEARCH_LIMIT,
        help="Maximum number of results",
    )

    args = parser.parse_args(argv)
    if getattr(args, "limit", 0) < 0:
        parser.error("--limit must be non-negative")
    if args.command == "search" and args.query is None and not args.all:
        parser.error("search requires a QUERY or --all")
    return args


def collect_records(config: ProfileConfig, sources: set[str]) -> list[Record]:
    """Load the requested sources in history, bookmarks, tabs order."""
    records: list[Record] = []
    if "history" in sources:
        records.extend(HistoryReader(config.history_path).fetch_records(HISTORY_SEARCH_LIMIT))
    if "bookmarks" in sources:
        records.extend(BookmarksReader(config.bookmarks_path).fetch_records())
    if "tabs" in sources:
        try:
            records.extend(TabsReader(config.sessions_dir).fetch_records())
        except TabsError as e:
            logger.warning("Skipping open tabs: %s", e)
    return records


def _print_listing(records: list[Record], as_json: bool) -> None:
    if as_json:
        print(output.dumps_records(records))
        return
    for line in output.iter_ndjson(records):
        print(line)


def run(args: argparse.Namespace) -> None:
    config = ProfileConfig.resolve(args.profile)

    if args.command == "history":
        records = HistoryReader(config.history_path).fetch_records(args.limit)
        _print_listing(records, args.json)
    elif args.command == "bookmarks":
        records = BookmarksReader(config.bookmarks_path).fetch_records()
        _print_listing(records, args.json)
    elif args.command == "tabs":
        try:
            records = TabsReader(config.sessions_dir).fetch_records()
        except TabsError as e:
            logger.warning("%s", e)
            records = []
        _print_listing(records, args.json)
    elif args.command == "search":
        records = dedupe(collect_records(config, args.sources))
        results = Ranker().search(records, args.query or "", args.limit)
        if args.json:
            print(output.dumps_records(results))
        else:
            print(output.dumps_search_result(results))


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        run(args)
    except DiaSearchError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
