"""Port: statistics source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from readme_stats.domain.entities import (
    Contributor,
    Issue,
    LanguageHistogram,
    PullRequest,
    Repository,
)


class StatsSource(Protocol):
    """Abstract contract for fetching the data the aggregation needs."""

    async def fetch_authenticated_login(self) -> str:
        """Return the login of the identity owning the access token."""
        ...

    async def list_owned_repositories(self) -> list[Repository]:
        """Return every public repository owned by the authenticated user."""
        ...

    async def fetch_languages(self, owner: str, repo: str) -> LanguageHistogram:
        """Return language → byte-count mapping from the GitHub Languages API."""
        ...

    async def list_open_pull_requests(self, owner: str, repo: str) -> list[PullRequest]:
        ...

    async def list_open_issues(self, owner: str, repo: str) -> list[Issue]:
        """Return open issues *including* pull requests, as GitHub reports them."""
        ...

    async def list_contributors(self, owner: str, repo: str) -> list[Contributor]:
        ...
