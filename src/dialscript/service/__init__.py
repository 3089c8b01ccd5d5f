"""Service layer shared by the CLI, REST API and MCP server."""

from dialscript.service.script_checker import (
    ScriptChecker,
    ScriptWriteError,
    UnsupportedScriptError,
)

__all__ = ["ScriptChecker", "ScriptWriteError", "UnsupportedScriptError"]
