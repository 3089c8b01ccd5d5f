"""Tests for Settings loaded from the environment."""

from __future__ import annotations

import pytest

from dialscript.parser.similarity import TypoPolicy
from dialscript.settings import Settings


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.max_lines == 10_000
        assert settings.max_line_length == 1_024
        assert settings.single_scene is False
        assert settings.mcp_transport == "stdio"
        assert settings.typo_policy == TypoPolicy()

    def test_effective_port(self) -> None:
        assert Settings(_env_file=None, api_server_port=8123).effective_port == 8123
        assert Settings(_env_file=None, api_server_port=8123, port=9999).effective_port == 9999


class TestEnvironment:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_LINES", "50")
        monkeypatch.setenv("SINGLE_SCENE", "true")
        monkeypatch.setenv("TYPO_LONG_DISTANCE", "3")
        settings = Settings(_env_file=None)
        assert settings.max_lines == 50
        assert settings.single_scene is True
        assert settings.typo_policy.max_distance(8) == 3
