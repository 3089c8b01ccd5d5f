"""Shared test fixtures for the DialScript checker."""

from __future__ import annotations

from pathlib import Path

import pytest

from dialscript.fixer.corrector import AutoCorrector
from dialscript.parser.classifier import LineClassifier
from dialscript.parser.loader import ScriptLoader
from dialscript.parser.validator import ScriptValidator
from dialscript.service.script_checker import ScriptChecker
from dialscript.settings import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"
VALID_SCRIPT = FIXTURES_DIR / "valid.ds"
FIXABLE_SCRIPT = FIXTURES_DIR / "fixable.ds"
MANUAL_SCRIPT = FIXTURES_DIR / "manual.ds"


@pytest.fixture
def classifier() -> LineClassifier:
    return LineClassifier()


@pytest.fixture
def validator() -> ScriptValidator:
    return ScriptValidator()


@pytest.fixture
def corrector(validator: ScriptValidator) -> AutoCorrector:
    return AutoCorrector(validator)


@pytest.fixture
def loader() -> ScriptLoader:
    return ScriptLoader()


@pytest.fixture
def checker() -> ScriptChecker:
    return ScriptChecker(Settings())


@pytest.fixture
def script_copy(tmp_path: Path):
    """Copy a fixture script into tmp_path so fixes never touch the originals."""

    def _copy(source: Path) -> Path:
        target = tmp_path / source.name
        target.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
        return target

    return _copy


# Scene header block shared by many validator/corrector tests
SCENE_HEAD = [
    "[Scene.1]",
    "Level: 1",
    "Location: Park",
    "Characters: Alan, Beth",
]


SAMPLE_SCRIPT = """\
[Scene.1]
Level: 1
Location: Forest
Characters: Alan, Beth

// Main dialog
[Dialog.1]
Alan: Hello there! {Emotion: happy}
Beth: Hi Alan, nice to see you.
Alan: Want to go for a walk?
Beth: Sure! {Choices: 1, 2}
Alan: Great, let's go! {Choice: 1}
Alan: Maybe next time then. {Choice: 2}
"""


FIXABLE_SCRIPT_TEXT = """\
[Scna.1]
Levl: 1
Location: Park
Characters: Alan, Beth
[Dialog.1]
Alan:Hi there
Beth: Hello {waves} Alan
Alann: How are you?
"""


FIXED_SCRIPT_TEXT = """\
[Scene.1]
Level: 1
Location: Park
Characters: Alan, Beth
[Dialog.1]
Alan: Hi there
Beth: Hello Alan {waves}
Alan: How are you?
"""


MANUAL_SCRIPT_TEXT = """\
[Scene.1]
Level: 1
Location: Park
Characters: Alan
[Dialog.1]
Zed: Who am I?
"""
