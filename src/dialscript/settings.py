"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from dialscript.parser.loader import DEFAULT_MAX_LINE_LENGTH, DEFAULT_MAX_LINES
from dialscript.parser.similarity import TypoPolicy


class Settings(BaseSettings):
    """Configuration for the DialScript CLI, REST API and MCP server.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.  See ``.env.example`` for all options.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # Cloud Run injects PORT; takes precedence over api_server_port
    max_request_bytes: int = 5_000_000

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (Cloud Run PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port

    # MCP
    mcp_transport: str = "stdio"  # stdio | http | sse
    mcp_server_host: str = "localhost"
    mcp_server_port: int = 9000

    # Loader limits
    max_lines: int = DEFAULT_MAX_LINES
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    # Typo detection
    typo_short_distance: int = 1
    typo_long_distance: int = 2
    typo_long_word_length: int = 5

    # Validation
    single_scene: bool = False  # reject a second [Scene.N] instead of opening it

    @property
    def typo_policy(self) -> TypoPolicy:
        return TypoPolicy(
            short_distance=self.typo_short_distance,
            long_distance=self.typo_long_distance,
            long_word_length=self.typo_long_word_length,
        )
