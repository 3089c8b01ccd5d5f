"""Dependency injection for FastAPI: ScriptChecker singleton."""

from __future__ import annotations

from dialscript.service.script_checker import ScriptChecker

_script_checker: ScriptChecker | None = None


def init_script_checker(checker: ScriptChecker) -> None:
    """Set the global ScriptChecker (called at app startup)."""
    global _script_checker  # noqa: PLW0603
    _script_checker = checker


def get_script_checker() -> ScriptChecker:
    """FastAPI ``Depends`` provider for ScriptChecker."""
    if _script_checker is None:
        raise RuntimeError("ScriptChecker not initialised; call init_script_checker() first")
    return _script_checker


def reset_script_checker() -> None:
    """Clear the global ScriptChecker (for tests)."""
    global _script_checker  # noqa: PLW0603
    _script_checker = None
