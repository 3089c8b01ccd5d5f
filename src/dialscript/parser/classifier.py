"""Line classifier: one raw DialScript line → one :class:`LineToken`.

Classification is total and pure.  It never raises and never looks at other
lines; context such as the declared characters is applied by the validator.
"""

from __future__ import annotations

import re

from dialscript.models.tokens import (
    CharactersDecl,
    Comment,
    DialogHeader,
    DialogLine,
    Empty,
    LevelDecl,
    LineToken,
    LocationDecl,
    SceneHeader,
    SyntaxErrorKind,
    SyntaxErrorToken,
    Unknown,
)
from dialscript.parser.similarity import (
    DEFAULT_POLICY,
    TypoPolicy,
    find_near_miss,
    is_case_variant,
)

HEADER_KEYWORDS = ("Scene", "Dialog")
DECL_KEYWORDS = ("Level", "Location", "Characters")

_SCENE_RE = re.compile(r"^\[Scene\.(-?\d+)\]\s*$")
_DIALOG_RE = re.compile(r"^\[Dialog\.(-?\d+)\]\s*$")
_HEADER_WORD_RE = re.compile(r"^\[([^.\]]*)")


def strip_line_ending(line: str) -> str:
    """Drop one trailing ``\\n`` (and the ``\\r`` of a CRLF ending)."""
    return line.removesuffix("\n").removesuffix("\r")


def find_dialog_colon(line: str) -> int | None:
    """Index of the first ``:`` that precedes any ``{``, or ``None``.

    A colon inside a metadata block does not separate a name from its text.
    """
    colon = line.find(":")
    if colon < 0:
        return None
    brace = line.find("{")
    if brace >= 0 and colon > brace:
        return None
    return colon


class LineClassifier:
    """Classifies lines by the fixed DialScript rules, in priority order."""

    def __init__(self, policy: TypoPolicy = DEFAULT_POLICY) -> None:
        self._policy = policy

    @property
    def policy(self) -> TypoPolicy:
        return self._policy

    def classify(self, line: str) -> LineToken:
        line = strip_line_ending(line)

        if not line.strip():
            return Empty()
        if line.startswith("//"):
            return Comment(text=line[2:])

        scene = _SCENE_RE.match(line)
        if scene:
            return SceneHeader(number=int(scene.group(1)))
        dialog = _DIALOG_RE.match(line)
        if dialog:
            return DialogHeader(number=int(dialog.group(1)))

        decl = self._classify_declaration(line)
        if decl is not None:
            return decl

        colon = find_dialog_colon(line)
        if colon is not None:
            return self._classify_dialog_line(line, colon)

        if line.startswith("["):
            header_error = self._classify_header_typo(line)
            if header_error is not None:
                return header_error

        meta_error = self._classify_meta_typo(line)
        if meta_error is not None:
            return meta_error

        return Unknown()

    # -- rules ---------------------------------------------------------------

    @staticmethod
    def _classify_declaration(line: str) -> LineToken | None:
        if line.startswith("Level:"):
            return LevelDecl(value=line[len("Level:") :].lstrip())
        if line.startswith("Location:"):
            return LocationDecl(value=line[len("Location:") :].lstrip())
        if line.startswith("Characters:"):
            return CharactersDecl(raw_list=line[len("Characters:") :].lstrip())
        return None

    @staticmethod
    def _classify_dialog_line(line: str, colon: int) -> LineToken:
        after_colon = line[colon + 1 : colon + 2]
        if after_colon and after_colon != " ":
            return SyntaxErrorToken(
                kind=SyntaxErrorKind.NO_SPACE_AFTER_COLON, caret=colon + 1
            )

        name = line[:colon].strip()
        text = line[colon + 1 :].strip()
        metadata: str | None = None

        brace = line.find("{", colon + 1)
        if brace >= 0:
            closing = line.find("}", brace)
            if closing < 0:
                return SyntaxErrorToken(kind=SyntaxErrorKind.UNCLOSED_METADATA, caret=len(line))
            if line[closing + 1 :].strip():
                return SyntaxErrorToken(kind=SyntaxErrorKind.META_NOT_AT_END, caret=brace)
            metadata = line[brace : closing + 1]
            text = line[colon + 1 : brace].strip()

        if not name:
            return SyntaxErrorToken(kind=SyntaxErrorKind.EMPTY_NAME, caret=colon)
        if not text:
            return SyntaxErrorToken(kind=SyntaxErrorKind.EMPTY_TEXT, caret=colon + 1)
        return DialogLine(name=name, text=text, metadata=metadata)

    def _classify_header_typo(self, line: str) -> LineToken | None:
        if "]" not in line:
            return SyntaxErrorToken(
                kind=SyntaxErrorKind.UNCLOSED_HEADER_BRACKET, caret=len(line)
            )
        match = _HEADER_WORD_RE.match(line)
        word = match.group(1) if match else ""
        if find_near_miss(word, HEADER_KEYWORDS, self._policy) is not None or any(
            is_case_variant(word, keyword) for keyword in HEADER_KEYWORDS
        ):
            return SyntaxErrorToken(kind=SyntaxErrorKind.TYPO_HEADER_KEYWORD, word=word, caret=1)
        return None

    def _classify_meta_typo(self, line: str) -> LineToken | None:
        colon = line.find(":")
        if colon < 0:
            return None
        word = line[:colon].rstrip()
        if find_near_miss(word, DECL_KEYWORDS, self._policy) is not None:
            return SyntaxErrorToken(kind=SyntaxErrorKind.TYPO_META_KEYWORD, word=word, caret=0)
        return None


_default_classifier = LineClassifier()


def classify(line: str) -> LineToken:
    """Classify *line* with the default typo policy."""
    return _default_classifier.classify(line)
