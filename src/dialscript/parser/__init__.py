"""DialScript parsing: line classification, structural validation, loading."""

from dialscript.parser.classifier import LineClassifier, classify
from dialscript.parser.loader import (
    ScriptIOError,
    ScriptLoader,
    ScriptReadError,
    ScriptSizeError,
)
from dialscript.parser.similarity import TypoPolicy, is_near_miss, levenshtein
from dialscript.parser.validator import ScriptValidator

__all__ = [
    "LineClassifier",
    "ScriptIOError",
    "ScriptLoader",
    "ScriptReadError",
    "ScriptSizeError",
    "ScriptValidator",
    "TypoPolicy",
    "classify",
    "is_near_miss",
    "levenshtein",
]
