"""Heuristic auto-correction of DialScript lines."""

from dialscript.fixer.corrector import AutoCorrector
from dialscript.fixer.heuristics import HEURISTICS, KEYWORD_TYPOS, FixContext, fix_line

__all__ = ["HEURISTICS", "KEYWORD_TYPOS", "AutoCorrector", "FixContext", "fix_line"]
