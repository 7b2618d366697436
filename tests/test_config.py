from __future__ import annotations

import pytest

from readme_stats.domain.exceptions import ConfigurationError
from readme_stats.infrastructure.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.github_token is None
    assert settings.readme_path == "README.md"
    assert settings.max_concurrency == 6
    assert settings.language_repo_limit == 30
    assert (settings.top_languages, settings.recent_repo_limit) == (10, 5)
    assert (settings.contributor_repo_limit, settings.top_contributors) == (5, 10)


def test_missing_token_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="GH_PAT/GITHUB_TOKEN"):
        Settings().require_token()


def test_github_token_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "from-actions")
    assert Settings().require_token() == "from-actions"


def test_gh_pat_wins_over_github_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "from-actions")
    monkeypatch.setenv("GH_PAT", "personal")
    assert Settings().require_token() == "personal"


def test_env_overrides_and_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_CONCURRENCY", "3")
    monkeypatch.setenv("README_PATH", "docs/profile.md")
    settings = get_settings()
    assert settings.max_concurrency == 3
    assert settings.readme_path == "docs/profile.md"
    assert get_settings() is settings


def test_empty_gh_pat_falls_back_to_github_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GH_PAT", "")
    monkeypatch.setenv("GITHUB_TOKEN", "from-actions")
    assert Settings().require_token() == "from-actions"
