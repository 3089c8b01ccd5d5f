"""Single-line fix heuristics.

Each heuristic takes one line (without its line ending) and returns the
replacement text, or ``None`` when it does not apply.  They are tried in
:data:`HEURISTICS` order and the first one that fires wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection
from dataclasses import dataclass, field

from dialscript.models.corrections import FixRule
from dialscript.parser.classifier import (
    DECL_KEYWORDS,
    HEADER_KEYWORDS,
    find_dialog_colon,
)
from dialscript.parser.similarity import (
    DEFAULT_POLICY,
    TypoPolicy,
    find_near_miss,
    find_unique_near_miss,
    is_case_variant,
)

_HEADER_RE = re.compile(r"^\[([^.\]]*)\.(-?\d+)\]\s*$")

# Common misspellings, matched case-insensitively against the word before ':'
KEYWORD_TYPOS: dict[str, str] = {
    "levl": "Level",
    "lvl": "Level",
    "level": "Level",
    "locaton": "Location",
    "locatin": "Location",
    "location": "Location",
    "chracters": "Characters",
    "characers": "Characters",
    "characters": "Characters",
}


@dataclass(frozen=True)
class FixContext:
    """What a heuristic may know beyond the line itself."""

    known_characters: frozenset[str] = field(default_factory=frozenset)
    policy: TypoPolicy = DEFAULT_POLICY


def is_declaration(line: str) -> bool:
    """True for lines starting with an exact ``Level:``/``Location:``/``Characters:``."""
    return any(line.startswith(f"{keyword}:") for keyword in DECL_KEYWORDS)


def _match_keyword(word: str, keywords: Collection[str], policy: TypoPolicy) -> str | None:
    for keyword in keywords:
        if is_case_variant(word, keyword):
            return keyword
    return find_near_miss(word, keywords, policy)


def fix_header_keyword(line: str, context: FixContext) -> str | None:
    """``[Scna.1]`` → ``[Scene.1]``; the number is kept as written."""
    match = _HEADER_RE.match(line)
    if not match:
        return None
    word, number = match.groups()
    keyword = _match_keyword(word, HEADER_KEYWORDS, context.policy)
    if keyword is None:
        return None
    return f"[{keyword}.{number}]"


def fix_meta_keyword(line: str, context: FixContext) -> str | None:
    """``Levl: 1`` → ``Level: 1``; everything from the colon on is kept."""
    colon = line.find(":")
    if colon < 0:
        return None
    word = line[:colon].strip()
    if word in context.known_characters:
        return None
    if word in DECL_KEYWORDS and line[:colon] == word:
        return None
    keyword = KEYWORD_TYPOS.get(word.casefold())
    if keyword is None:
        # a misspelled character name is left to fix_character_name
        if find_unique_near_miss(word, sorted(context.known_characters), context.policy):
            return None
        keyword = _match_keyword(word, DECL_KEYWORDS, context.policy)
    if keyword is None:
        return None
    return f"{keyword}{line[colon:]}"


def fix_space_after_colon(line: str, context: FixContext) -> str | None:
    """``Alan:Hi`` → ``Alan: Hi``."""
    if is_declaration(line):
        return None
    colon = find_dialog_colon(line)
    if colon is None:
        return None
    following = line[colon + 1 : colon + 2]
    if not following or following == " ":
        return None
    return f"{line[: colon + 1]} {line[colon + 1 :]}"


def fix_metadata_position(line: str, context: FixContext) -> str | None:
    """``Alan: Hi {smiles} there`` → ``Alan: Hi there {smiles}``."""
    if is_declaration(line):
        return None
    brace = line.find("{")
    if brace < 0:
        return None
    closing = line.find("}", brace)
    if closing < 0:
        return None
    after = line[closing + 1 :].strip()
    if not after:
        return None
    parts = (line[:brace].strip(), after, line[brace : closing + 1])
    return " ".join(part for part in parts if part)


def fix_character_name(line: str, context: FixContext) -> str | None:
    """``Alann: Hi`` → ``Alan: Hi`` when exactly one declared character is close."""
    if not context.known_characters or is_declaration(line):
        return None
    colon = find_dialog_colon(line)
    if colon is None:
        return None
    name = line[:colon].strip()
    if not name or name in context.known_characters:
        return None
    correct = find_unique_near_miss(name, sorted(context.known_characters), context.policy)
    if correct is None:
        return None
    return f"{correct}{line[colon:]}"


Heuristic = Callable[[str, FixContext], str | None]

HEURISTICS: tuple[tuple[FixRule, Heuristic], ...] = (
    (FixRule.HEADER_KEYWORD, fix_header_keyword),
    (FixRule.META_KEYWORD, fix_meta_keyword),
    (FixRule.SPACE_AFTER_COLON, fix_space_after_colon),
    (FixRule.METADATA_POSITION, fix_metadata_position),
    (FixRule.CHARACTER_NAME, fix_character_name),
)


def fix_line(line: str, context: FixContext) -> tuple[FixRule, str] | None:
    """Apply the first heuristic that changes *line*.

    Blank lines and comments are never touched.
    """
    if not line.strip() or line.startswith("//"):
        return None
    for rule, heuristic in HEURISTICS:
        fixed = heuristic(line, context)
        if fixed is not None and fixed != line:
            return rule, fixed
    return None
