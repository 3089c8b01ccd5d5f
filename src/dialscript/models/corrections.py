"""Auto-fix records: per-line corrections and the overall fix outcome."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, computed_field

from dialscript.models.diagnostics import ValidationResult


class FixRule(StrEnum):
    HEADER_KEYWORD = "header_keyword"
    META_KEYWORD = "meta_keyword"
    SPACE_AFTER_COLON = "space_after_colon"
    METADATA_POSITION = "metadata_position"
    CHARACTER_NAME = "character_name"


class CorrectionCandidate(BaseModel):
    """A single-line replacement proposed by one heuristic."""

    line_number: int
    original_text: str
    fixed_text: str
    rule: FixRule


class FixResult(BaseModel):
    """Outcome of an auto-fix pass.

    ``validation`` is the result of re-validating the fixed lines, or of the
    unmodified lines when no correction fired.
    """

    lines: list[str]
    corrections: list[CorrectionCandidate] = []
    validation: ValidationResult

    @computed_field  # type: ignore[prop-decorator]
    @property
    def fix_count(self) -> int:
        return len(self.corrections)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def converged(self) -> bool:
        return self.validation.error_count == 0

    @property
    def changed(self) -> bool:
        return bool(self.corrections)

    def to_text(self, newline: str = "\n", final_newline: bool = True) -> str:
        """Render the fixed lines joined by *newline*.

        With *final_newline* set, the last line is terminated as well.
        """
        text = newline.join(self.lines)
        if final_newline and self.lines:
            text += newline
        return text
