"""Tests for the script loader and its size limits."""

from __future__ import annotations

from pathlib import Path

import pytest

from dialscript.parser.loader import (
    ScriptIOError,
    ScriptLoader,
    ScriptReadError,
    ScriptSizeError,
    newline_style,
)
from tests.conftest import VALID_SCRIPT


class TestLoadString:
    def test_trailing_newline_adds_no_line(self, loader: ScriptLoader) -> None:
        assert loader.load_string("a\nb\n") == ("a", "b")

    def test_no_trailing_newline(self, loader: ScriptLoader) -> None:
        assert loader.load_string("a\nb") == ("a", "b")

    def test_empty(self, loader: ScriptLoader) -> None:
        assert loader.load_string("") == ()

    def test_single_blank_line(self, loader: ScriptLoader) -> None:
        assert loader.load_string("\n") == ("",)

    def test_crlf(self, loader: ScriptLoader) -> None:
        assert loader.load_string("[Scene.1]\r\nLevel: 1\r\n") == ("[Scene.1]", "Level: 1")


class TestSizeLimits:
    def test_too_many_lines(self) -> None:
        loader = ScriptLoader(max_lines=2)
        with pytest.raises(ScriptSizeError, match="maximum length"):
            loader.load_string("a\nb\nc\n")

    def test_at_line_limit(self) -> None:
        assert ScriptLoader(max_lines=2).load_string("a\nb\n") == ("a", "b")

    def test_line_too_long(self) -> None:
        loader = ScriptLoader(max_line_length=3)
        with pytest.raises(ScriptSizeError, match="Line 2 exceeds maximum width"):
            loader.load_string("abc\nabcd\n")


class TestLoadFile:
    def test_valid_file(self, loader: ScriptLoader) -> None:
        lines = loader.load(VALID_SCRIPT)
        assert len(lines) == 13
        assert lines[0] == "[Scene.1]"

    def test_crlf_file(self, loader: ScriptLoader, tmp_path: Path) -> None:
        path = tmp_path / "crlf.ds"
        path.write_bytes(b"[Scene.1]\r\nLevel: 1\r\n")
        assert loader.load(path) == ("[Scene.1]", "Level: 1")

    def test_missing_file(self, loader: ScriptLoader, tmp_path: Path) -> None:
        with pytest.raises(ScriptReadError, match="Cannot open file"):
            loader.load(tmp_path / "missing.ds")

    def test_invalid_utf8(self, loader: ScriptLoader, tmp_path: Path) -> None:
        path = tmp_path / "binary.ds"
        path.write_bytes(b"\xff\xfe\x00broken")
        with pytest.raises(ScriptReadError, match="not valid UTF-8"):
            loader.load(path)

    def test_read_error_is_io_error(self) -> None:
        assert issubclass(ScriptReadError, ScriptIOError)
        assert not issubclass(ScriptSizeError, ScriptIOError)


class TestRead:
    def test_read_keeps_line_endings(self, loader: ScriptLoader, tmp_path: Path) -> None:
        path = tmp_path / "crlf.ds"
        path.write_bytes(b"[Scene.1]\r\nLevel: 1")
        assert loader.read(path) == "[Scene.1]\r\nLevel: 1"

    def test_newline_style(self) -> None:
        assert newline_style("a\r\nb\r\n") == "\r\n"
        assert newline_style("a\nb\n") == "\n"
        assert newline_style("") == "\n"
