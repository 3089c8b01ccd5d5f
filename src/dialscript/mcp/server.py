"""FastMCP server exposing DialScript validation and auto-fix as MCP tools.

Run via::

    dialscript-mcp                       # reads .env (default: stdio)
    MCP_TRANSPORT=http dialscript-mcp    # streamable HTTP on port 9000
    MCP_TRANSPORT=sse  dialscript-mcp    # legacy SSE on port 9000

Scripts are passed as text; nothing is stored between calls.  Settings are
loaded from environment variables and ``.env`` file, see ``.env.example``
for available options.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from dialscript import __version__
from dialscript.models.diagnostics import Diagnostic
from dialscript.parser.loader import ScriptSizeError
from dialscript.reference import DIALSCRIPT_REFERENCE
from dialscript.service.script_checker import ScriptChecker
from dialscript.settings import Settings

# ---------------------------------------------------------------------------
# Server + shared state
# ---------------------------------------------------------------------------

logger = logging.getLogger("dialscript.mcp")

mcp = FastMCP("DialScript Checker")
_checker: ScriptChecker | None = None


def _get_checker() -> ScriptChecker:
    if _checker is None:
        raise ToolError("Script checker not initialised")
    return _checker


def _format_diagnostic(diagnostic: Diagnostic) -> str:
    where = "end of file" if diagnostic.end_of_file else f"line {diagnostic.line_number}"
    line = f"  {where} [{diagnostic.code}] {diagnostic.title}: {diagnostic.hint}"
    if diagnostic.source_text is not None:
        line += f"\n    > {diagnostic.source_text}"
    return line


# ---------------------------------------------------------------------------
# Resources: auto-injected context for LLMs
# ---------------------------------------------------------------------------


@mcp.resource("dialscript://reference")
def dialscript_reference() -> str:
    """Full DialScript format reference: scenes, declarations, dialog lines, metadata."""
    return DIALSCRIPT_REFERENCE


@mcp.tool
def get_dialscript_reference() -> str:
    """Get the DialScript format reference.

    IMPORTANT: Call this tool BEFORE writing or repairing a DialScript file
    to understand the correct syntax.  Returns the rules with a complete
    example script.
    """
    return DIALSCRIPT_REFERENCE


# ---------------------------------------------------------------------------
# Script tools
# ---------------------------------------------------------------------------


@mcp.tool
def validate_script(script: str) -> str:
    """Validate a DialScript file and list every problem found.

    Each problem names its line, a stable code, a short title and a hint
    on how to fix it.  Problems found after the last line are reported at
    "end of file".

    Args:
        script: Complete DialScript text.
    """
    logger.info("validate_script called (script length=%d)", len(script))
    try:
        result = _get_checker().validate_text(script)
    except ScriptSizeError as exc:
        raise ToolError(str(exc)) from exc

    if result.valid:
        return f"Script is valid ({result.total_lines} lines)."
    lines = [f"Script has {result.error_count} error(s) in {result.total_lines} lines:"]
    lines.extend(_format_diagnostic(d) for d in result.diagnostics)
    return "\n".join(lines)


@mcp.tool
def fix_script(script: str) -> str:
    """Apply automatic fixes to a DialScript file.

    Fixes misspelled headers and declaration keywords, a missing space after
    the colon, misplaced metadata blocks and character names one typo away
    from a declared character.  Returns the corrected script, the list of
    changes, and any errors that still need a manual fix.

    Args:
        script: Complete DialScript text.
    """
    logger.info("fix_script called (script length=%d)", len(script))
    try:
        result = _get_checker().fix_text(script)
    except ScriptSizeError as exc:
        raise ToolError(str(exc)) from exc

    parts: list[str] = []
    if not result.changed:
        parts.append("No fixes needed." if result.converged else "Auto-fix not possible.")
    else:
        parts.append(f"Applied {result.fix_count} fix(es):")
        for correction in result.corrections:
            parts.append(
                f"  line {correction.line_number} [{correction.rule}]: "
                f"{correction.original_text!r} -> {correction.fixed_text!r}"
            )
    if not result.converged:
        parts.append(f"{result.validation.error_count} error(s) need a manual fix:")
        parts.extend(_format_diagnostic(d) for d in result.validation.diagnostics)
    if result.changed:
        parts.append("")
        parts.append("Fixed script:")
        parts.append(result.to_text())
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


@mcp.prompt
def debug_script() -> str:
    """All DialScript diagnostic codes with causes and fixes."""
    return """\
# DialScript Diagnostic Codes

## Lexical

- `EMPTY_NAME`: `: Hello` has no character name. Fix: put the name before ':'.
- `EMPTY_TEXT`: `Alan:` has no text. Fix: add text after the colon.
- `NO_SPACE_AFTER_COLON`: `Alan:Hi`. Fix: `Alan: Hi` (auto-fixable).
- `META_NOT_AT_END`: text after a `{...}` block. Fix: move the block to the end (auto-fixable).
- `UNCLOSED_METADATA`: `{` without `}`. Fix: close the metadata block.
- `UNCLOSED_HEADER_BRACKET`: `[Scene.1` without `]`. Fix: close the header.
- `MISSING_COLON`: a line inside a dialog block that is not `Name: Text`.
- `UNKNOWN_SYNTAX`: a line that matches no DialScript construct.

## Typos (auto-fixable)

- `TYPO_HEADER_KEYWORD`: `[Scna.1]`, `[dialog.2]`. Fix: `[Scene.N]` / `[Dialog.N]`.
- `TYPO_META_KEYWORD`: `Levl:`, `location:`. Fix: `Level:`, `Location:`, `Characters:`.

## Structure

- `INVALID_SCENE_NUMBER` / `INVALID_DIALOG_NUMBER`: numbers must be > 0.
- `EXTRA_SCENE`: a second scene when only one scene per file is allowed.
- `DIALOG_WITHOUT_SCENE`: `[Dialog.N]` before any `[Scene.N]`.
- `DECL_OUTSIDE_SCENE`: `Level:`, `Location:` or `Characters:` before any scene.
- `DECL_AFTER_DIALOG`: a declaration after the scene's first `[Dialog.N]`.
- `DUPLICATE_DECL`: the same declaration twice in one scene.
- `EMPTY_DECL_VALUE`: `Level:` with nothing after it.
- `STRAY_DIALOG_LINE`: `Name: Text` outside a dialog block.
- `EMPTY_LINE_IN_DIALOG`: a blank line between two dialog lines.
- `MISSING_SCENE`, `MISSING_LEVEL`, `MISSING_LOCATION`, `MISSING_CHARACTERS`:
  a scene (or the file) lacks a required declaration.  Reported at the scene
  header when the next scene starts, or at end of file for the last scene.

## Semantic

- `UNKNOWN_CHARACTER`: a dialog line names someone not in `Characters:`.
  Fix: add the name, or correct a typo (auto-fixable when exactly one
  declared name is one typo away).

Workflow: call `validate_script`, then `fix_script`, then fix the remaining
diagnostics by hand and validate again.
"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the MCP server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "DialScript MCP Server v%s starting (transport=%s)",
        __version__,
        settings.mcp_transport,
    )

    global _checker  # noqa: PLW0603
    _checker = ScriptChecker(settings)

    if settings.mcp_transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(
            transport=settings.mcp_transport,
            host=settings.mcp_server_host,
            port=settings.mcp_server_port,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()
