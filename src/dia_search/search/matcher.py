"""Fuzzy match patterns for free-text queries.

A query is split on whitespace into atoms, each of which must match:

    foo     fuzzy: characters of ``foo`` appear in order
    'foo    substring
    ^foo    prefix
    foo$    suffix
    ^foo$   exact
    !foo    negated substring (the haystack must not contain ``foo``)

Matching ignores case and, unless the query itself carries accents,
diacritics (``cafe`` matches ``café``).
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from rapidfuzz import fuzz
from rapidfuzz.distance import LCSseq

# Bonuses are on the rapidfuzz 0-100 scale.
EXACT_SCORE = 100.0
PREFIX_BONUS = 20.0
BOUNDARY_BONUS = 8.0


class AtomKind(Enum):
    FUZZY = "fuzzy"
    SUBSTRING = "substring"
    PREFIX = "prefix"
    POSTFIX = "postfix"
    EXACT = "exact"


@lru_cache(maxsize=4096)
def fold_char(ch: str) -> str:
    """Strip diacritics from a single character."""
    decomposed = unicodedata.normalize("NFKD", ch)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base or ch


def fold(text: str) -> str:
    if text.isascii():
        return text
    return "".join(fold_char(ch) for ch in text)


def prepare(text: str, buf: list[str], normalize: bool) -> str:
    """Convert ``text`` into the form patterns are scored against.

    ``buf`` is owned by the caller and reused between calls; it is
    cleared on every conversion. ASCII text needs no conversion.
    """
    if not normalize or text.isascii():
        return text
    buf.clear()
    for ch in text:
        buf.append(fold_char(ch))
    return "".join(buf)


@dataclass(frozen=True)
class Atom:
    needle: str
    kind: AtomKind
    negative: bool = False

    @classmethod
    def parse(cls, raw: str) -> Atom | None:
        text = raw
        negative = text.startswith("!")
        if negative:
            text = text[1:]

        kind = AtomKind.SUBSTRING if negative else AtomKind.FUZZY
        if text.startswith("'"):
            text = text[1:]
            kind = AtomKind.SUBSTRING
        elif text.startswith("^"):
            text = text[1:]
            kind = AtomKind.PREFIX
        if text.endswith("$") and len(text) > 1:
            text = text[:-1]
            kind = AtomKind.EXACT if kind is AtomKind.PREFIX else AtomKind.POSTFIX

        if not text or text == "$":
            return None
        return cls(needle=text.lower(), kind=kind, negative=negative)

    def score(self, haystack: str) -> float | None:
        """Score of this atom against ``haystack``, ignoring negation."""
        needle = self.needle
        if len(needle) > len(haystack):
            return None

        if self.kind is AtomKind.FUZZY:
            return _fuzzy_score(needle, haystack)
        if self.kind is AtomKind.SUBSTRING:
            idx = haystack.find(needle)
            if idx < 0:
                return None
            return EXACT_SCORE + _position_bonus(haystack, idx)
        if self.kind is AtomKind.PREFIX:
            return EXACT_SCORE + PREFIX_BONUS if haystack.startswith(needle) else None
        if self.kind is AtomKind.POSTFIX:
            return EXACT_SCORE if haystack.endswith(needle) else None
        return EXACT_SCORE + PREFIX_BONUS if haystack == needle else None


def _fuzzy_score(needle: str, haystack: str) -> float | None:
    # An ordered subsequence has an LCS as long as the needle itself.
    if LCSseq.similarity(needle, haystack) < len(needle):
        return None
    alignment = fuzz.partial_ratio_alignment(needle, haystack)
    if alignment is None:
        return None
    return alignment.score + _position_bonus(haystack, alignment.dest_start)


def _position_bonus(haystack: str, idx: int) -> float:
    if idx == 0:
        return PREFIX_BONUS
    if not haystack[idx - 1].isalnum():
        return BOUNDARY_BONUS
    return 0.0


class Pattern:
    """A parsed query; parse once, score many haystacks."""

    def __init__(self, atoms: list[Atom], normalize: bool = True):
        self.atoms = atoms
        self.normalize = normalize

    @classmethod
    def parse(cls, query: str) -> Pattern:
        atoms = [atom for atom in map(Atom.parse, query.split()) if atom is not None]
        # Accented characters in the query opt out of diacritic folding.
        normalize = all(fold(atom.needle) == atom.needle for atom in atoms)
        return cls(atoms, normalize=normalize)

    def is_empty(self) -> bool:
        return not self.atoms

    def score(self, haystack: str) -> float | None:
        """Sum of atom scores, or None if the haystack does not match."""
        total = 0.0
        for atom in self.atoms:
            atom_score = atom.score(haystack)
            if atom.negative:
                if atom_score is not None:
                    return None
                continue
            if atom_score is None:
                return None
            total += atom_score
        return total
