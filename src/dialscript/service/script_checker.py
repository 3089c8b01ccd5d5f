"""Script checking service: core service layer reusable by CLI, MCP and REST API."""

from __future__ import annotations

import logging
from pathlib import Path

from dialscript.fixer.corrector import AutoCorrector
from dialscript.models.corrections import FixResult
from dialscript.models.diagnostics import ValidationResult
from dialscript.parser.classifier import LineClassifier
from dialscript.parser.loader import Document, ScriptIOError, ScriptLoader, newline_style
from dialscript.parser.validator import ScriptValidator
from dialscript.settings import Settings

logger = logging.getLogger("dialscript.service")

SCRIPT_SUFFIX = ".ds"


class ScriptWriteError(ScriptIOError):
    """Raised when fixed lines cannot be written back."""


class UnsupportedScriptError(ScriptIOError):
    """Raised for files that are not DialScript (``.ds``) files."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Unsupported file '{path.name}': expected a {SCRIPT_SUFFIX} file")


class ScriptChecker:
    """Validates and auto-fixes scripts held in memory or on disk.

    Loader, validator and corrector are stateless and built once from
    settings, so a single checker is safe to share between requests.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self._loader = ScriptLoader(
            max_lines=settings.max_lines,
            max_line_length=settings.max_line_length,
        )
        self._validator = ScriptValidator(
            LineClassifier(settings.typo_policy),
            single_scene=settings.single_scene,
        )
        self._corrector = AutoCorrector(self._validator)

    @property
    def validator(self) -> ScriptValidator:
        return self._validator

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _check_suffix(path: Path) -> None:
        if path.suffix != SCRIPT_SUFFIX:
            raise UnsupportedScriptError(path)

    # -- public API ----------------------------------------------------------

    def read_file(self, path: Path) -> Document:
        """Load a ``.ds`` file under the size policy."""
        self._check_suffix(path)
        return self._loader.load(path)

    def load_text(self, text: str) -> Document:
        """Split *text* into lines under the size policy."""
        return self._loader.load_string(text)

    def validate_lines(self, lines: Document) -> ValidationResult:
        return self._validator.validate(lines)

    def validate_text(self, text: str) -> ValidationResult:
        result = self._validator.validate(self._loader.load_string(text))
        logger.debug("Validated %d lines: %d error(s)", result.total_lines, result.error_count)
        return result

    def fix_text(self, text: str) -> FixResult:
        result = self._corrector.autofix(self._loader.load_string(text))
        logger.debug(
            "Auto-fix applied %d fix(es), %d error(s) remain",
            result.fix_count,
            result.validation.error_count,
        )
        return result

    def validate_file(self, path: Path) -> ValidationResult:
        """Validate a ``.ds`` file.  Raises ``ScriptIOError`` if it cannot be read."""
        result = self._validator.validate(self.read_file(path))
        logger.info("Validated %s: %d error(s)", path, result.error_count)
        return result

    def fix_file(self, path: Path) -> FixResult:
        """Auto-fix a ``.ds`` file in place.

        The file is rewritten only when at least one correction fired, keeping
        its line-ending style and whether the last line ends with a newline.
        Raises ``ScriptWriteError`` if the fixed lines cannot be saved.
        """
        self._check_suffix(path)
        content = self._loader.read(path)
        result = self._corrector.autofix(self._loader.load_string(content))
        if result.changed:
            text = result.to_text(
                newline=newline_style(content),
                final_newline=content.endswith("\n"),
            )
            try:
                path.write_text(text, encoding="utf-8", newline="")
            except OSError as exc:
                raise ScriptWriteError(
                    f"Cannot write to file {path}: {exc.strerror or exc}"
                ) from exc
            logger.info("Applied %d fix(es) to %s", result.fix_count, path)
        return result
