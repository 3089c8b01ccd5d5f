"""Tests for the dialscript command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dialscript import __version__
from dialscript.cli import EXIT_ERRORS, EXIT_OK, EXIT_USAGE, main
from tests.conftest import FIXABLE_SCRIPT, FIXED_SCRIPT_TEXT, MANUAL_SCRIPT, VALID_SCRIPT


class TestValidate:
    def test_valid_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(VALID_SCRIPT)]) == EXIT_OK
        assert "Parsing completed: 13 lines processed" in capsys.readouterr().out

    def test_broken_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(FIXABLE_SCRIPT)]) == EXIT_ERRORS
        output = capsys.readouterr().out
        assert "Parsing broken" in output
        assert "Did you mean [Scene.N]?" in output

    def test_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--verbose", str(VALID_SCRIPT)]) == EXIT_OK
        assert "◉ Scene 1" in capsys.readouterr().out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--format", "json", str(FIXABLE_SCRIPT)]) == EXIT_ERRORS
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is False
        assert data["error_count"] == 12
        assert data["diagnostics"][0]["code"] == "TYPO_HEADER_KEYWORD"


class TestFix:
    def test_fix_writes_file(self, script_copy, capsys: pytest.CaptureFixture[str]) -> None:
        path = script_copy(FIXABLE_SCRIPT)
        assert main(["--fix", str(path)]) == EXIT_OK
        assert path.read_text(encoding="utf-8") == FIXED_SCRIPT_TEXT
        assert "Applied: 5 fixes" in capsys.readouterr().out

    def test_fix_needs_manual_work(self, script_copy, capsys: pytest.CaptureFixture[str]) -> None:
        path = script_copy(MANUAL_SCRIPT)
        assert main(["--fix", str(path)]) == EXIT_ERRORS
        assert "Auto-fix not possible" in capsys.readouterr().out

    def test_fix_json(self, script_copy, capsys: pytest.CaptureFixture[str]) -> None:
        path = script_copy(FIXABLE_SCRIPT)
        assert main(["--fix", "--format", "json", str(path)]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["fix_count"] == 5
        assert data["converged"] is True


class TestUsage:
    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing.ds")]) == EXIT_USAGE
        err = capsys.readouterr().err
        assert "✗ Error:" in err
        assert "Cannot open file" in err

    def test_wrong_suffix(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("[Scene.1]\n", encoding="utf-8")
        assert main([str(path)]) == EXIT_USAGE
        assert "expected a .ds file" in capsys.readouterr().err

    def test_no_arguments(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert f"dialscript {__version__}" in capsys.readouterr().out

    def test_example(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--example"]) == EXIT_OK
        assert "Example .ds file:" in capsys.readouterr().out
