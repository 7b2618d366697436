"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from readme_stats.domain.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    # GH_PAT takes precedence over GITHUB_TOKEN when both are set.
    github_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_PAT", "GITHUB_TOKEN"),
    )
    github_api_url: str = "https://api.github.com"
    readme_path: str = "README.md"
    max_concurrency: int = Field(default=6, ge=1)
    language_repo_limit: int = Field(default=30, ge=0)
    top_languages: int = Field(default=10, ge=0)
    recent_repo_limit: int = Field(default=5, ge=0)
    contributor_repo_limit: int = Field(default=5, ge=0)
    top_contributors: int = Field(default=10, ge=0)
    http_timeout: float = 30.0
    log_level: str = "INFO"

    def require_token(self) -> str:
        """Return the access token, or fail if neither variable is set."""
        if self.github_token is None or not self.github_token.get_secret_value():
            raise ConfigurationError("Missing GH_PAT/GITHUB_TOKEN")
        return self.github_token.get_secret_value()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
