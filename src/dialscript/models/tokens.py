"""Line tokens: the classification result for a single DialScript line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SyntaxErrorKind(StrEnum):
    EMPTY_NAME = "empty_name"
    EMPTY_TEXT = "empty_text"
    NO_SPACE_AFTER_COLON = "no_space_after_colon"
    META_NOT_AT_END = "meta_not_at_end"
    UNCLOSED_METADATA = "unclosed_metadata"
    UNCLOSED_HEADER_BRACKET = "unclosed_header_bracket"
    TYPO_HEADER_KEYWORD = "typo_header_keyword"
    TYPO_META_KEYWORD = "typo_meta_keyword"


@dataclass(frozen=True)
class Empty:
    """Blank line."""


@dataclass(frozen=True)
class Comment:
    """``// text`` comment line."""

    text: str


@dataclass(frozen=True)
class SceneHeader:
    """``[Scene.N]``. The number is not range-checked here."""

    number: int


@dataclass(frozen=True)
class DialogHeader:
    """``[Dialog.N]``."""

    number: int


@dataclass(frozen=True)
class LevelDecl:
    value: str


@dataclass(frozen=True)
class LocationDecl:
    value: str


@dataclass(frozen=True)
class CharactersDecl:
    raw_list: str

    @property
    def names(self) -> list[str]:
        """Comma-separated names, trimmed, empty entries dropped."""
        return [name.strip() for name in self.raw_list.split(",") if name.strip()]


@dataclass(frozen=True)
class DialogLine:
    """``Name: Text {metadata}``."""

    name: str
    text: str
    metadata: str | None = None


@dataclass(frozen=True)
class Unknown:
    """A line that fits no rule."""


@dataclass(frozen=True)
class SyntaxErrorToken:
    """A malformed line.

    ``word`` is set for the typo kinds only; ``caret`` is the 0-based column
    the problem points at, or ``None`` when no column applies.
    """

    kind: SyntaxErrorKind
    word: str | None = None
    caret: int | None = None


LineToken = (
    Empty
    | Comment
    | SceneHeader
    | DialogHeader
    | LevelDecl
    | LocationDecl
    | CharactersDecl
    | DialogLine
    | Unknown
    | SyntaxErrorToken
)

DeclToken = LevelDecl | LocationDecl | CharactersDecl
