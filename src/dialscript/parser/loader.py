"""Script loader: file or string → document lines, with explicit size limits."""

from __future__ import annotations

from pathlib import Path

# ---------------------------------------------------------------------------
# Size limits
# ---------------------------------------------------------------------------

DEFAULT_MAX_LINES = 10_000
DEFAULT_MAX_LINE_LENGTH = 1_024

Document = tuple[str, ...]


class ScriptIOError(Exception):
    """Base class for failures reading or writing a script, as opposed to diagnostics."""


class ScriptReadError(ScriptIOError):
    """Raised when a script cannot be read or decoded."""


class ScriptSizeError(Exception):
    """Raised when a script exceeds the loader's size limits.

    Oversized input is rejected, never truncated.
    """


class ScriptLoader:
    """Splits DialScript text into lines and enforces the size policy."""

    def __init__(
        self,
        max_lines: int = DEFAULT_MAX_LINES,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ) -> None:
        self.max_lines = max_lines
        self.max_line_length = max_line_length

    # -- size checks ---------------------------------------------------------

    def _check_size(self, lines: list[str]) -> None:
        if len(lines) > self.max_lines:
            raise ScriptSizeError(
                f"Script exceeds maximum length "
                f"({len(lines):,} lines > {self.max_lines:,} limit)"
            )
        for number, line in enumerate(lines, start=1):
            if len(line) > self.max_line_length:
                raise ScriptSizeError(
                    f"Line {number} exceeds maximum width "
                    f"({len(line):,} chars > {self.max_line_length:,} limit)"
                )

    # -- public loading API --------------------------------------------------

    def read(self, path: Path) -> str:
        """Read a UTF-8 script file verbatim, line endings included."""
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                content = handle.read()
        except UnicodeDecodeError as exc:
            raise ScriptReadError(f"{path} is not valid UTF-8: {exc.reason}") from exc
        except OSError as exc:
            raise ScriptReadError(f"Cannot open file {path}: {exc.strerror or exc}") from exc
        return content

    def load(self, path: Path) -> Document:
        """Read a UTF-8 script file."""
        return self.load_string(self.read(path))

    def load_string(self, content: str) -> Document:
        """Split *content* on ``\\n``; a trailing newline does not add a line."""
        lines = content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        lines = [line.removesuffix("\r") for line in lines]
        self._check_size(lines)
        return tuple(lines)


def newline_style(content: str) -> str:
    """``"\\r\\n"`` if *content* uses CRLF line endings, else ``"\\n"``."""
    return "\r\n" if "\r\n" in content else "\n"
