"""Structured diagnostics with caret-accurate source positions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, computed_field


class DiagnosticCode(StrEnum):
    # lexical
    EMPTY_NAME = "EMPTY_NAME"
    EMPTY_TEXT = "EMPTY_TEXT"
    NO_SPACE_AFTER_COLON = "NO_SPACE_AFTER_COLON"
    META_NOT_AT_END = "META_NOT_AT_END"
    UNCLOSED_METADATA = "UNCLOSED_METADATA"
    UNCLOSED_HEADER_BRACKET = "UNCLOSED_HEADER_BRACKET"
    MISSING_COLON = "MISSING_COLON"
    UNKNOWN_SYNTAX = "UNKNOWN_SYNTAX"
    # typo
    TYPO_HEADER_KEYWORD = "TYPO_HEADER_KEYWORD"
    TYPO_META_KEYWORD = "TYPO_META_KEYWORD"
    # structural
    INVALID_SCENE_NUMBER = "INVALID_SCENE_NUMBER"
    INVALID_DIALOG_NUMBER = "INVALID_DIALOG_NUMBER"
    EXTRA_SCENE = "EXTRA_SCENE"
    DIALOG_WITHOUT_SCENE = "DIALOG_WITHOUT_SCENE"
    DECL_OUTSIDE_SCENE = "DECL_OUTSIDE_SCENE"
    DECL_AFTER_DIALOG = "DECL_AFTER_DIALOG"
    DUPLICATE_DECL = "DUPLICATE_DECL"
    EMPTY_DECL_VALUE = "EMPTY_DECL_VALUE"
    STRAY_DIALOG_LINE = "STRAY_DIALOG_LINE"
    EMPTY_LINE_IN_DIALOG = "EMPTY_LINE_IN_DIALOG"
    MISSING_SCENE = "MISSING_SCENE"
    MISSING_LEVEL = "MISSING_LEVEL"
    MISSING_LOCATION = "MISSING_LOCATION"
    MISSING_CHARACTERS = "MISSING_CHARACTERS"
    # semantic
    UNKNOWN_CHARACTER = "UNKNOWN_CHARACTER"


class Diagnostic(BaseModel):
    """One actionable problem found in a script.

    ``caret_offset`` is a 0-based column into ``source_text``.  Diagnostics
    raised after the last line have ``end_of_file`` set, no source text, and
    the virtual line number ``len(document) + 1``.
    """

    code: DiagnosticCode
    line_number: int
    title: str
    hint: str
    source_text: str | None = None
    caret_offset: int | None = None
    end_of_file: bool = False


class ValidationResult(BaseModel):
    """Result of validating a script."""

    total_lines: int
    diagnostics: list[Diagnostic] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return len(self.diagnostics)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return not self.diagnostics
