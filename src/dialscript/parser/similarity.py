"""Near-miss detection for keywords and character names.

A candidate is a near miss of a keyword when their lengths differ by at most
2, they are not equal ignoring case, and the case-insensitive Levenshtein
distance between them is within the :class:`TypoPolicy` threshold for the
longer word's length.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

MAX_LENGTH_DELTA = 2


@dataclass(frozen=True)
class TypoPolicy:
    """Edit-distance thresholds, stepped by the length of the longer word.

    With the defaults, ``Alan`` tolerates one edit and ``Scene`` two, so
    ``Scna`` and ``Scene`` are near misses of each other while ``Dialog`` is not.
    """

    short_distance: int = 1
    long_distance: int = 2
    long_word_length: int = 5

    def max_distance(self, length: int) -> int:
        if length >= self.long_word_length:
            return self.long_distance
        return self.short_distance


DEFAULT_POLICY = TypoPolicy()


def levenshtein(a: str, b: str) -> int:
    """Case-insensitive edit distance (insert, delete, substitute)."""
    a = a.casefold()
    b = b.casefold()
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def is_near_miss(candidate: str, keyword: str, policy: TypoPolicy = DEFAULT_POLICY) -> bool:
    """Return True if *candidate* looks like a misspelling of *keyword*."""
    if not candidate:
        return False
    if abs(len(candidate) - len(keyword)) > MAX_LENGTH_DELTA:
        return False
    if candidate.casefold() == keyword.casefold():
        return False
    longest = max(len(candidate), len(keyword))
    return levenshtein(candidate, keyword) <= policy.max_distance(longest)


def is_case_variant(candidate: str, keyword: str) -> bool:
    """``scene`` vs ``Scene``: equal ignoring case, but not identical."""
    return candidate != keyword and candidate.casefold() == keyword.casefold()


def find_near_miss(
    candidate: str,
    keywords: Iterable[str],
    policy: TypoPolicy = DEFAULT_POLICY,
) -> str | None:
    """Return the first keyword *candidate* is a near miss of, or ``None``."""
    for keyword in keywords:
        if is_near_miss(candidate, keyword, policy):
            return keyword
    return None


def find_unique_near_miss(
    candidate: str,
    names: Iterable[str],
    policy: TypoPolicy = DEFAULT_POLICY,
) -> str | None:
    """Return the one name *candidate* misspells, or ``None`` if zero or several do.

    Case-only variants count as misspellings here.
    """
    matches = {
        name
        for name in names
        if is_near_miss(candidate, name, policy) or is_case_variant(candidate, name)
    }
    if len(matches) != 1:
        return None
    return matches.pop()
