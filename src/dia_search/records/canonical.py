"""Comparison forms and merge keys derived from a record's URL and title."""

from __future__ import annotations

_SCHEMES = ("https://", "http://")
_MASK_64 = (1 << 64) - 1


def normalize(s: str) -> str:
    """Case-folded form used for matching."""
    return s.lower()


def canonical_url(url: str) -> str:
    """Source-independent rendering of a URL, used only for equality.

    Strips, in order: a leading scheme, a leading ``www.``, any fragment,
    any query, and a single trailing slash. Case is preserved.
    """
    s = url
    for scheme in _SCHEMES:
        s = s.removeprefix(scheme)
    s = s.removeprefix("www.")
    s = _split_head(s, "#")
    s = _split_head(s, "?")
    return s.removesuffix("/")


def _split_head(s: str, sep: str) -> str:
    head = s.split(sep, 1)[0]
    # "#frag" or "?q=1" alone would otherwise collapse to an empty key.
    return head if head else s


def merge_key(url: str) -> int:
    """64-bit key for the canonical form of ``url``.

    Stable within one interpreter process only; str hashing is salted per
    process unless PYTHONHASHSEED is fixed.
    """
    return hash(canonical_url(url)) & _MASK_64
