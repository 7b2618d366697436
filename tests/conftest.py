from __future__ import annotations

from collections.abc import Iterator

import pytest

from readme_stats.infrastructure.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep real tokens and any local ``.env`` out of the tests."""
    for name in ("GH_PAT", "GITHUB_TOKEN", "README_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
