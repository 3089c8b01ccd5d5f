"""Auto-corrector: one heuristic fix per line, then a verification pass."""

from __future__ import annotations

from collections.abc import Sequence

from dialscript.fixer.heuristics import FixContext, fix_line
from dialscript.models.corrections import CorrectionCandidate, FixResult
from dialscript.models.tokens import CharactersDecl
from dialscript.parser.classifier import strip_line_ending
from dialscript.parser.validator import ScriptValidator


class AutoCorrector:
    """Proposes and applies single-line fixes, then re-validates.

    The characters in scope for a line are those of the nearest preceding
    ``Characters:`` line, as fixed so far in the same pass.
    """

    def __init__(self, validator: ScriptValidator | None = None) -> None:
        self._validator = validator or ScriptValidator()

    @property
    def validator(self) -> ScriptValidator:
        return self._validator

    def propose(self, lines: Sequence[str]) -> list[CorrectionCandidate]:
        """Return one candidate per line where a heuristic fired."""
        policy = self._validator.classifier.policy
        known: frozenset[str] = frozenset()
        candidates: list[CorrectionCandidate] = []

        for number, raw in enumerate(lines, start=1):
            line = strip_line_ending(raw)
            fixed = line
            outcome = fix_line(line, FixContext(known_characters=known, policy=policy))
            if outcome is not None:
                rule, fixed = outcome
                candidates.append(
                    CorrectionCandidate(
                        line_number=number,
                        original_text=line,
                        fixed_text=fixed,
                        rule=rule,
                    )
                )
            if fixed.startswith("Characters:"):
                known = frozenset(CharactersDecl(raw_list=fixed[len("Characters:") :]).names)

        return candidates

    def autofix(self, lines: Sequence[str]) -> FixResult:
        """Apply every proposed fix and validate the result with fresh state.

        With no fixes the original lines are validated, which tells an
        already-valid script apart from one that needs manual work.
        """
        fixed = [strip_line_ending(line) for line in lines]
        corrections = self.propose(fixed)
        for correction in corrections:
            fixed[correction.line_number - 1] = correction.fixed_text
        validation = self._validator.validate(fixed)
        return FixResult(lines=fixed, corrections=corrections, validation=validation)
