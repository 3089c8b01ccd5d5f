"""Structural validation: block nesting, ordering, uniqueness, known characters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from dialscript.models.diagnostics import Diagnostic, DiagnosticCode, ValidationResult
from dialscript.models.tokens import (
    CharactersDecl,
    Comment,
    DeclToken,
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
from dialscript.parser.classifier import (
    DECL_KEYWORDS,
    HEADER_KEYWORDS,
    LineClassifier,
    strip_line_ending,
)
from dialscript.parser.similarity import (
    DEFAULT_POLICY,
    TypoPolicy,
    find_near_miss,
    is_case_variant,
)

SCENE_NUMBER_CARET = 7
DIALOG_NUMBER_CARET = 8

# code -> (title, hint); "{keyword}" is filled in for declaration-specific messages
MESSAGES: dict[DiagnosticCode, tuple[str, str]] = {
    DiagnosticCode.EMPTY_NAME: (
        "Empty name before ':'",
        "add character name, e.g. Alan: Hello",
    ),
    DiagnosticCode.EMPTY_TEXT: ("Empty dialog text", "add text after the colon"),
    DiagnosticCode.NO_SPACE_AFTER_COLON: (
        "Missing space after ':'",
        "add a space after the colon, e.g. 'Name: Text'",
    ),
    DiagnosticCode.META_NOT_AT_END: (
        "Metadata must be at the end of the line",
        "move the {...} block after the dialog text",
    ),
    DiagnosticCode.UNCLOSED_METADATA: ("Missing '}' in metadata", "close metadata with '}'"),
    DiagnosticCode.UNCLOSED_HEADER_BRACKET: ("Missing ']'", "close header with ']'"),
    DiagnosticCode.MISSING_COLON: ("Missing colon in dialog", "use format: Name: Text"),
    DiagnosticCode.UNKNOWN_SYNTAX: (
        "Unknown syntax",
        "check spelling or use: [Scene.N], [Dialog.N], Name: Text",
    ),
    DiagnosticCode.TYPO_HEADER_KEYWORD: ("Did you mean [{keyword}.N]?", "check spelling"),
    DiagnosticCode.TYPO_META_KEYWORD: ("Did you mean '{keyword}:'?", "check spelling"),
    DiagnosticCode.INVALID_SCENE_NUMBER: (
        "Scene number must be > 0",
        "use [Scene.1], [Scene.2], etc.",
    ),
    DiagnosticCode.INVALID_DIALOG_NUMBER: (
        "Dialog number must be > 0",
        "use [Dialog.1], [Dialog.2], etc.",
    ),
    DiagnosticCode.EXTRA_SCENE: (
        "Only one [Scene.X] allowed",
        "remove extra scene declarations",
    ),
    DiagnosticCode.DIALOG_WITHOUT_SCENE: (
        "Dialog without [Scene.X]",
        "add [Scene.1] before this dialog",
    ),
    DiagnosticCode.DECL_OUTSIDE_SCENE: (
        "{keyword} outside scene",
        "move {keyword}: inside [Scene.X] block",
    ),
    DiagnosticCode.DECL_AFTER_DIALOG: (
        "{keyword} after dialog",
        "move {keyword}: before [Dialog.X]",
    ),
    DiagnosticCode.DUPLICATE_DECL: (
        "Duplicate {keyword}",
        "remove extra {keyword} definition",
    ),
    DiagnosticCode.EMPTY_DECL_VALUE: (
        "Empty {keyword} value",
        "add a value after '{keyword}:'",
    ),
    DiagnosticCode.STRAY_DIALOG_LINE: ("Stray dialog line", "add [Dialog.1] before this line"),
    DiagnosticCode.EMPTY_LINE_IN_DIALOG: (
        "Empty line inside dialog block",
        "remove empty lines between dialog lines",
    ),
    DiagnosticCode.MISSING_SCENE: (
        "Missing [Scene.X]",
        "add [Scene.1] at the beginning of file",
    ),
    DiagnosticCode.MISSING_LEVEL: ("Missing Level", "add 'Level: N' after [Scene.X]"),
    DiagnosticCode.MISSING_LOCATION: (
        "Missing Location",
        "add 'Location: name' after [Scene.X]",
    ),
    DiagnosticCode.MISSING_CHARACTERS: (
        "Missing Characters",
        "add 'Characters: Name1, Name2' after [Scene.X]",
    ),
    DiagnosticCode.UNKNOWN_CHARACTER: (
        "Unknown character",
        "add this character to Characters",
    ),
}

_SYNTAX_CODES: dict[SyntaxErrorKind, DiagnosticCode] = {
    SyntaxErrorKind.EMPTY_NAME: DiagnosticCode.EMPTY_NAME,
    SyntaxErrorKind.EMPTY_TEXT: DiagnosticCode.EMPTY_TEXT,
    SyntaxErrorKind.NO_SPACE_AFTER_COLON: DiagnosticCode.NO_SPACE_AFTER_COLON,
    SyntaxErrorKind.META_NOT_AT_END: DiagnosticCode.META_NOT_AT_END,
    SyntaxErrorKind.UNCLOSED_METADATA: DiagnosticCode.UNCLOSED_METADATA,
    SyntaxErrorKind.UNCLOSED_HEADER_BRACKET: DiagnosticCode.UNCLOSED_HEADER_BRACKET,
    SyntaxErrorKind.TYPO_HEADER_KEYWORD: DiagnosticCode.TYPO_HEADER_KEYWORD,
    SyntaxErrorKind.TYPO_META_KEYWORD: DiagnosticCode.TYPO_META_KEYWORD,
}

_DECL_KEYWORD: dict[type, str] = {
    LevelDecl: "Level",
    LocationDecl: "Location",
    CharactersDecl: "Characters",
}


def suggest_keyword(
    word: str, keywords: Sequence[str], policy: TypoPolicy = DEFAULT_POLICY
) -> str:
    """The keyword a typo most likely meant; the first keyword as a fallback."""
    for keyword in keywords:
        if is_case_variant(word, keyword):
            return keyword
    return find_near_miss(word, keywords, policy) or keywords[0]


@dataclass
class _SceneState:
    header_line: int
    header_text: str
    has_level: bool = False
    has_location: bool = False
    has_characters: bool = False
    in_dialog: bool = False
    known_characters: set[str] = field(default_factory=set)


@dataclass
class _ValidationState:
    scene: _SceneState | None = None
    any_scene: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)


class ScriptValidator:
    """Walks classified lines with a small state machine and collects diagnostics.

    Each call to :meth:`validate` owns a fresh state, so one validator can be
    shared freely.  With ``single_scene`` set, a second ``[Scene.N]`` header is
    an error instead of closing the current scene.
    """

    def __init__(
        self,
        classifier: LineClassifier | None = None,
        single_scene: bool = False,
    ) -> None:
        self._classifier = classifier or LineClassifier()
        self._single_scene = single_scene

    @property
    def classifier(self) -> LineClassifier:
        return self._classifier

    def validate(self, lines: Sequence[str]) -> ValidationResult:
        source = [strip_line_ending(line) for line in lines]
        tokens = [self._classifier.classify(line) for line in source]
        state = _ValidationState()

        for index, token in enumerate(tokens):
            self._check_line(state, source, tokens, index, token)

        self._check_end_of_file(state, len(source) + 1)
        return ValidationResult(total_lines=len(source), diagnostics=state.diagnostics)

    # -- per-line dispatch ---------------------------------------------------

    def _check_line(
        self,
        state: _ValidationState,
        source: list[str],
        tokens: list[LineToken],
        index: int,
        token: LineToken,
    ) -> None:
        line_number = index + 1
        text = source[index]
        scene = state.scene

        match token:
            case Empty():
                if scene is not None and scene.in_dialog and _next_breaks_dialog(tokens, index):
                    self._report(state, DiagnosticCode.EMPTY_LINE_IN_DIALOG, line_number, text)
            case Comment():
                pass
            case SceneHeader(number=number):
                self._check_scene_header(state, number, line_number, text)
            case DialogHeader(number=number):
                if scene is None:
                    self._report(state, DiagnosticCode.DIALOG_WITHOUT_SCENE, line_number, text)
                elif number <= 0:
                    self._report(
                        state,
                        DiagnosticCode.INVALID_DIALOG_NUMBER,
                        line_number,
                        text,
                        caret=DIALOG_NUMBER_CARET,
                    )
                else:
                    scene.in_dialog = True
            case LevelDecl() | LocationDecl() | CharactersDecl():
                self._check_declaration(state, token, line_number, text)
            case DialogLine(name=name):
                if scene is None or not scene.in_dialog:
                    self._report(state, DiagnosticCode.STRAY_DIALOG_LINE, line_number, text)
                elif scene.known_characters and name not in scene.known_characters:
                    self._report(
                        state,
                        DiagnosticCode.UNKNOWN_CHARACTER,
                        line_number,
                        text,
                        hint=f"add '{name}' to Characters",
                    )
            case SyntaxErrorToken(kind=kind, word=word, caret=caret):
                keyword = None
                if kind is SyntaxErrorKind.TYPO_HEADER_KEYWORD:
                    keyword = suggest_keyword(word or "", HEADER_KEYWORDS, self._classifier.policy)
                elif kind is SyntaxErrorKind.TYPO_META_KEYWORD:
                    keyword = suggest_keyword(word or "", DECL_KEYWORDS, self._classifier.policy)
                self._report(
                    state, _SYNTAX_CODES[kind], line_number, text, caret=caret, keyword=keyword
                )
            case Unknown():
                if scene is not None and scene.in_dialog:
                    self._report(state, DiagnosticCode.MISSING_COLON, line_number, text)
                else:
                    self._report(state, DiagnosticCode.UNKNOWN_SYNTAX, line_number, text)

    def _check_scene_header(
        self, state: _ValidationState, number: int, line_number: int, text: str
    ) -> None:
        if number <= 0:
            self._report(
                state,
                DiagnosticCode.INVALID_SCENE_NUMBER,
                line_number,
                text,
                caret=SCENE_NUMBER_CARET,
            )
            return
        if self._single_scene and state.any_scene:
            self._report(state, DiagnosticCode.EXTRA_SCENE, line_number, text)
            return
        if state.scene is not None:
            self._check_scene_complete(state, state.scene, state.scene.header_line)
        state.scene = _SceneState(header_line=line_number, header_text=text)
        state.any_scene = True

    def _check_declaration(
        self, state: _ValidationState, token: DeclToken, line_number: int, text: str
    ) -> None:
        keyword = _DECL_KEYWORD[type(token)]
        scene = state.scene
        if scene is None:
            self._report(state, DiagnosticCode.DECL_OUTSIDE_SCENE, line_number, text, keyword=keyword)
            return
        if scene.in_dialog:
            self._report(state, DiagnosticCode.DECL_AFTER_DIALOG, line_number, text, keyword=keyword)
            return

        match token:
            case LevelDecl(value=value):
                declared = scene.has_level
                scene.has_level = True
                empty = not value.strip()
            case LocationDecl(value=value):
                declared = scene.has_location
                scene.has_location = True
                empty = not value.strip()
            case CharactersDecl():
                declared = scene.has_characters
                scene.has_characters = True
                empty = not token.names

        if declared:
            self._report(state, DiagnosticCode.DUPLICATE_DECL, line_number, text, keyword=keyword)
            return
        if isinstance(token, CharactersDecl):
            scene.known_characters = set(token.names)
        if empty:
            self._report(state, DiagnosticCode.EMPTY_DECL_VALUE, line_number, text, keyword=keyword)

    # -- completeness ----------------------------------------------------------

    def _check_scene_complete(
        self, state: _ValidationState, scene: _SceneState, line_number: int, end_of_file: bool = False
    ) -> None:
        source_text = None if end_of_file else scene.header_text
        missing = [
            (scene.has_level, DiagnosticCode.MISSING_LEVEL),
            (scene.has_location, DiagnosticCode.MISSING_LOCATION),
            (scene.has_characters, DiagnosticCode.MISSING_CHARACTERS),
        ]
        for present, code in missing:
            if not present:
                self._report(state, code, line_number, source_text, end_of_file=end_of_file)

    def _check_end_of_file(self, state: _ValidationState, line_number: int) -> None:
        if state.scene is None:
            self._report(state, DiagnosticCode.MISSING_SCENE, line_number, None, end_of_file=True)
            for code in (
                DiagnosticCode.MISSING_LEVEL,
                DiagnosticCode.MISSING_LOCATION,
                DiagnosticCode.MISSING_CHARACTERS,
            ):
                self._report(state, code, line_number, None, end_of_file=True)
            return
        self._check_scene_complete(state, state.scene, line_number, end_of_file=True)

    # -- reporting -------------------------------------------------------------

    @staticmethod
    def _report(
        state: _ValidationState,
        code: DiagnosticCode,
        line_number: int,
        source_text: str | None,
        caret: int | None = None,
        keyword: str | None = None,
        hint: str | None = None,
        end_of_file: bool = False,
    ) -> None:
        title, default_hint = MESSAGES[code]
        if keyword is not None:
            title = title.replace("{keyword}", keyword)
            default_hint = default_hint.replace("{keyword}", keyword)
        state.diagnostics.append(
            Diagnostic(
                code=code,
                line_number=line_number,
                title=title,
                hint=hint or default_hint,
                source_text=source_text,
                caret_offset=caret,
                end_of_file=end_of_file,
            )
        )


def _next_breaks_dialog(tokens: list[LineToken], index: int) -> bool:
    """True if the next non-blank line is neither a comment nor a block header."""
    for token in tokens[index + 1 :]:
        if isinstance(token, Empty):
            continue
        return not isinstance(token, Comment | DialogHeader | SceneHeader)
    return False
