"""Tests for profile resolution."""

import pytest

from dia_search.config import ProfileConfig, data_dir_from_env, list_profiles, profile_from_env
from dia_search.exceptions import DataDirNotFoundError, ProfileNotFoundError


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "Default").mkdir()
    (tmp_path / "Profile 1").mkdir()
    (tmp_path / ".hidden").mkdir()
    (tmp_path / "Local State").write_text("{}")
    return tmp_path


def test_list_profiles(data_dir):
    assert list_profiles(data_dir) == ["Default", "Profile 1"]


def test_resolve_paths(data_dir):
    config = ProfileConfig.resolve("Profile 1", data_dir=data_dir)
    assert config.profile_path == data_dir / "Profile 1"
    assert config.history_path == data_dir / "Profile 1" / "History"
    assert config.bookmarks_path == data_dir / "Profile 1" / "Bookmarks"
    assert config.sessions_dir == data_dir / "Profile 1" / "Sessions"


def test_missing_data_dir(tmp_path):
    with pytest.raises(DataDirNotFoundError):
        ProfileConfig.resolve("Default", data_dir=tmp_path / "nope")


def test_missing_profile_lists_available(data_dir):
    with pytest.raises(ProfileNotFoundError) as exc_info:
        ProfileConfig.resolve("Work", data_dir=data_dir)
    assert exc_info.value.available == ["Default", "Profile 1"]
    assert "available: Default, Profile 1" in str(exc_info.value)


def test_data_dir_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("DIA_DATA_DIR", str(tmp_path))
    assert data_dir_from_env() == tmp_path


def test_resolve_uses_env_data_dir(monkeypatch, data_dir):
    monkeypatch.setenv("DIA_DATA_DIR", str(data_dir))
    assert ProfileConfig.resolve("Default").profile_path == data_dir / "Default"


def test_profile_env_read_at_resolve_time(monkeypatch, data_dir):
    monkeypatch.delenv("DIA_PROFILE", raising=False)
    assert profile_from_env() == "Default"
    monkeypatch.setenv("DIA_PROFILE", "Profile 1")
    config = ProfileConfig.resolve(data_dir=data_dir)
    assert config.profile_path == data_dir / "Profile 1"


def test_explicit_profile_beats_env(monkeypatch, data_dir):
    monkeypatch.setenv("DIA_PROFILE", "Profile 1")
    assert ProfileConfig.resolve("Default", data_dir=data_dir).profile_path == data_dir / "Default"
