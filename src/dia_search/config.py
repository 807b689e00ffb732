"""Profile and data directory resolution for the Dia browser."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dia_search.exceptions import DataDirNotFoundError, ProfileNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / "Library" / "Application Support" / "Dia" / "User Data"
DEFAULT_PROFILE = "Default"

# Per-source caps.
HISTORY_SEARCH_LIMIT = 5000
BOOKMARK_LIMIT = 10_000
TAB_LIMIT = 500

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 50


def data_dir_from_env() -> Path:
    """Data directory, honouring DIA_DATA_DIR when set."""
    override = os.environ.get("DIA_DATA_DIR")
    if override:
        return Path(override).expanduser()
    return DEFAULT_DATA_DIR


def profile_from_env() -> str:
    """Profile name, honouring DIA_PROFILE when set."""
    return os.environ.get("DIA_PROFILE") or DEFAULT_PROFILE


def list_profiles(data_dir: Path) -> list[str]:
    """Visible profile directories under the data directory, sorted."""
    return sorted(
        child.name
        for child in data_dir.iterdir()
        if child.is_dir() and not child.name.startswith(".")
    )


@dataclass(frozen=True)
class ProfileConfig:
    """Filesystem locations for one browser profile."""

    profile_path: Path

    @classmethod
    def resolve(
        cls,
        profile: str | None = None,
        data_dir: Path | None = None,
    ) -> ProfileConfig:
        data_dir = data_dir or data_dir_from_env()
        profile = profile or profile_from_env()

        if not data_dir.is_dir():
            raise DataDirNotFoundError(f"dia data directory not found at {data_dir}")

        profile_path = data_dir / profile
        if not profile_path.is_dir():
            raise ProfileNotFoundError(profile, list_profiles(data_dir))

        logger.debug("Using profile %s at %s", profile, profile_path)
        return cls(profile_path=profile_path)

    @property
    def history_path(self) -> Path:
        return self.profile_path / "History"

    @property
    def bookmarks_path(self) -> Path:
        return self.profile_path / "Bookmarks"

    @property
    def sessions_dir(self) -> Path:
        return self.profile_path / "Sessions"
