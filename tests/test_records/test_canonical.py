"""Tests for URL canonicalization and merge keys."""

import pytest
from hypothesis import given, strategies as st

from dia_search.records.canonical import canonical_url, merge_key, normalize


def test_normalize_lowercases():
    assert normalize("Rust Language") == "rust language"
    assert normalize("ÉCOLE") == "école"


def test_strips_scheme_www_query_fragment_and_slash():
    assert canonical_url("https://www.example.com/path/?q=1#sec") == "example.com/path"


def test_trailing_slash_is_optional():
    assert canonical_url("example.com/") == canonical_url("example.com") == "example.com"
    assert canonical_url("example.com/path/") == canonical_url("example.com/path")


def test_bare_host_is_unchanged():
    assert canonical_url("example.com") == "example.com"


def test_http_and_https_collapse():
    assert canonical_url("http://example.com/a") == canonical_url("https://example.com/a")


def test_path_case_is_preserved():
    assert canonical_url("https://example.com/Docs") == "example.com/Docs"


@pytest.mark.parametrize("url", ["#frag", "?q=1"])
def test_separator_only_input_falls_back(url):
    assert canonical_url(url) == url


def test_query_without_path():
    assert canonical_url("https://example.com?q=1") == "example.com"


@pytest.mark.parametrize(
    "url",
    [
        "https://www.example.com/path/?q=1#sec",
        "http://example.com",
        "example.com/a/b/",
        "https://docs.python.org/3/library/heapq.html#heapq.nlargest",
        "file:///Users/me/notes.txt",
        "#frag",
        "?q=1",
    ],
)
def test_idempotent_on_common_urls(url):
    once = canonical_url(url)
    assert canonical_url(once) == once


def test_double_trailing_slash_is_not_idempotent():
    # Only one trailing slash is stripped per pass.
    once = canonical_url("example.com//")
    assert once == "example.com/"
    assert canonical_url(once) == "example.com"


@given(
    host=st.from_regex(r"[a-z][a-z0-9-]{0,10}\.(com|org|io)", fullmatch=True).filter(
        lambda h: not h.startswith("www")
    ),
    path=st.from_regex(r"(/[a-z0-9_-]{1,8}){0,3}", fullmatch=True),
    query=st.sampled_from(["", "?q=1", "?a=b&c=d"]),
    fragment=st.sampled_from(["", "#top", "#a/b"]),
    scheme=st.sampled_from(["", "http://", "https://", "https://www."]),
    slash=st.booleans(),
)
def test_idempotent_property(host, path, query, fragment, scheme, slash):
    url = f"{scheme}{host}{path}{'/' if slash else ''}{query}{fragment}"
    once = canonical_url(url)
    assert canonical_url(once) == once


def test_merge_key_stable_within_process():
    assert merge_key("https://a.com/x") == merge_key("https://a.com/x")


def test_merge_key_equal_for_equivalent_urls():
    assert merge_key("https://www.a.com/x/?utm=1") == merge_key("a.com/x")


def test_merge_key_differs_for_different_pages():
    assert merge_key("https://a.com/x") != merge_key("https://a.com/y")


def test_merge_key_fits_64_bits():
    key = merge_key("https://a.com")
    assert 0 <= key < 2**64


def test_repeated_www_is_not_idempotent():
    once = canonical_url("https://www.www.example.com")
    assert once == "www.example.com"
    assert canonical_url(once) == "example.com"
