"""Unit tests for MCP server tools: direct function calls, no transport.

FastMCP's ``@mcp.tool`` wraps functions in ``FunctionTool`` objects.  We call
the underlying function via ``.fn`` to test the business logic directly.
"""

from __future__ import annotations

import pytest
from fastmcp.exceptions import ToolError

# Import the module-level state so we can swap it between tests
import dialscript.mcp.server as mcp_mod
from dialscript.mcp.server import (
    DIALSCRIPT_REFERENCE,
    debug_script,
    dialscript_reference,
    fix_script,
    get_dialscript_reference,
    validate_script,
)
from dialscript.service.script_checker import ScriptChecker
from dialscript.settings import Settings
from tests.conftest import (
    FIXABLE_SCRIPT_TEXT,
    FIXED_SCRIPT_TEXT,
    MANUAL_SCRIPT_TEXT,
    SAMPLE_SCRIPT,
)

# Unwrap FunctionTool → raw functions
_validate_script = validate_script.fn
_fix_script = fix_script.fn
_get_reference = get_dialscript_reference.fn


@pytest.fixture(autouse=True)
def _checker():
    """Give every test a fresh ScriptChecker."""
    mcp_mod._checker = ScriptChecker(Settings())
    yield
    mcp_mod._checker = None


class TestValidateScript:
    def test_valid(self) -> None:
        assert _validate_script(SAMPLE_SCRIPT) == "Script is valid (13 lines)."

    def test_errors_listed(self) -> None:
        result = _validate_script(FIXABLE_SCRIPT_TEXT)
        assert result.startswith("Script has 12 error(s) in 8 lines:")
        assert "line 1 [TYPO_HEADER_KEYWORD] Did you mean [Scene.N]?: check spelling" in result
        assert "    > [Scna.1]" in result
        assert "end of file [MISSING_SCENE]" in result

    def test_size_limit(self) -> None:
        mcp_mod._checker = ScriptChecker(Settings(max_lines=2))
        with pytest.raises(ToolError, match="maximum length"):
            _validate_script(SAMPLE_SCRIPT)

    def test_not_initialised(self) -> None:
        mcp_mod._checker = None
        with pytest.raises(ToolError, match="not initialised"):
            _validate_script(SAMPLE_SCRIPT)


class TestFixScript:
    def test_fixes_applied(self) -> None:
        result = _fix_script(FIXABLE_SCRIPT_TEXT)
        assert result.startswith("Applied 5 fix(es):")
        assert "line 1 [header_keyword]: '[Scna.1]' -> '[Scene.1]'" in result
        assert "line 8 [character_name]: 'Alann: How are you?' -> 'Alan: How are you?'" in result
        assert "need a manual fix" not in result
        assert result.endswith("Fixed script:\n" + FIXED_SCRIPT_TEXT)

    def test_no_fixes_needed(self) -> None:
        assert _fix_script(SAMPLE_SCRIPT) == "No fixes needed."

    def test_manual_fix(self) -> None:
        result = _fix_script(MANUAL_SCRIPT_TEXT)
        assert result.startswith("Auto-fix not possible.\n1 error(s) need a manual fix:")
        assert "line 6 [UNKNOWN_CHARACTER]" in result
        assert "Fixed script:" not in result


class TestReference:
    def test_tool(self) -> None:
        assert _get_reference() == DIALSCRIPT_REFERENCE
        assert DIALSCRIPT_REFERENCE.startswith("# DialScript Reference")

    def test_resource(self) -> None:
        assert dialscript_reference.fn() == DIALSCRIPT_REFERENCE

    def test_reference_contains_example(self) -> None:
        assert "[Scene.1]\nLevel: 1\nLocation: Forest" in DIALSCRIPT_REFERENCE

    def test_debug_prompt_lists_codes(self) -> None:
        text = debug_script.fn()
        assert "UNKNOWN_CHARACTER" in text
        assert "TYPO_HEADER_KEYWORD" in text
