from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.judges import DEFAULT_MODEL


APP_NAME = "review_panel"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)


class DirectoryConfig(BaseModel):
    """Directory configuration with computed paths.

    Sections are plain models so only REVIEW_PANEL_-prefixed variables apply
    (a bare HOME or PORT in the environment is ignored).
    """

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for review_panel data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Directory for JSONL service logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class LLMConfig(BaseModel):
    """LLM configuration."""

    api_key: str | None = Field(
        default=None,
        description="API key for the LLM provider (OpenRouter by default)",
    )

    provider_name: str = Field(
        default="openrouter",
        description="LLM provider (openrouter, openai, anthropic)",
    )

    base_url: str | None = Field(
        default=None,
        description="Override the provider endpoint (OpenAI-compatible providers only)",
    )

    default_model: str = Field(
        default=DEFAULT_MODEL,
        description="Model used when a request does not name one",
    )

    max_output_tokens: int = Field(default=8000, gt=0)

    timeout_seconds: float = Field(default=120.0, gt=0)


class GitHubConfig(BaseModel):
    """GitHub configuration."""

    token: str | None = Field(
        default=None,
        description="GitHub personal access token (optional, raises rate limits)",
    )

    api_url: str = Field(default="https://api.github.com")

    timeout_seconds: float = Field(default=30.0, gt=0)


class CacheConfig(BaseModel):
    """Review cache settings."""

    ttl_seconds: int = Field(
        default=24 * 60 * 60,
        gt=0,
        description="Lifetime of a cached review; commit changes invalidate earlier",
    )


class RateLimitConfig(BaseModel):
    """Per-client fixed-window rate limiting."""

    window_seconds: int = Field(default=60, gt=0)
    max_requests: int = Field(default=10, gt=0)
    sweep_interval_seconds: int = Field(default=300, gt=0)


class ReviewConfig(BaseModel):
    """Review generation settings."""

    diff_max_bytes: int = Field(
        default=50_000,
        description="Maximum diff size included in the prompt (later files truncated)",
    )

    preview_chars: int = Field(
        default=500,
        description="Characters of an unparseable model response kept in logs",
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    logger_name: str = Field(default=APP_NAME)
    level: str = Field(default="INFO")
    console_output: bool = Field(default=True)
    json_console: bool = Field(
        default=False,
        description="Emit JSON lines on stderr instead of human-readable text",
    )
    file_output: bool = Field(
        default=False,
        description="Append JSON lines to <home>/logs/review-panel.jsonl",
    )


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with REVIEW_PANEL_ prefix.
    Use double underscore for nested config: REVIEW_PANEL_LLM__API_KEY

    Example env vars:
        # Required for reviews
        export REVIEW_PANEL_LLM__API_KEY=sk-or-xxxxxxxxxxxxx

        # Optional (with defaults)
        export REVIEW_PANEL_GITHUB__TOKEN=ghp_xxxxxxxxxxxxx
        export REVIEW_PANEL_LLM__DEFAULT_MODEL=anthropic/claude-haiku-4.5
        export REVIEW_PANEL_RATE_LIMIT__MAX_REQUESTS=10
        export REVIEW_PANEL_CACHE__TTL_SECONDS=86400
        export REVIEW_PANEL_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="REVIEW_PANEL_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
