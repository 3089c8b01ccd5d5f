"""Domain models for DialScript: line tokens, diagnostics and fix records."""

from dialscript.models.corrections import CorrectionCandidate, FixResult, FixRule
from dialscript.models.diagnostics import Diagnostic, DiagnosticCode, ValidationResult
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

__all__ = [
    "CharactersDecl",
    "Comment",
    "CorrectionCandidate",
    "Diagnostic",
    "DiagnosticCode",
    "DialogHeader",
    "DialogLine",
    "Empty",
    "FixResult",
    "FixRule",
    "LevelDecl",
    "LineToken",
    "LocationDecl",
    "SceneHeader",
    "SyntaxErrorKind",
    "SyntaxErrorToken",
    "Unknown",
    "ValidationResult",
]
