"""Collect-stats use case — the bounded-concurrency aggregation pipeline.

Depends only on the :class:`StatsSource` port and the pure helpers in
:mod:`readme_stats.services.aggregation`.  Every per-repository fetch goes
through :func:`run_bounded`; each task returns its own partial result and
the partials are folded sequentially once all tasks have settled.
"""

from __future__ import annotations

import logging

from readme_stats.domain.entities import (
    AggregationResult,
    Contributor,
    Issue,
    LanguageHistogram,
    LanguageShare,
    PullRequest,
    Repository,
)
from readme_stats.domain.ports.stats_source import StatsSource
from readme_stats.services.aggregation import (
    compute_totals,
    count_open_issues,
    filter_owned,
    language_shares,
    merge_contributors,
    merge_languages,
    most_recent,
    top_starred,
)
from readme_stats.services.bounded_executor import DEFAULT_CONCURRENCY, run_bounded

logger = logging.getLogger(__name__)


class CollectStatsUseCase:
    """Fetches the authenticated user's repositories and aggregates them.

    Parameters
    ----------
    source:
        Adapter that talks to the GitHub API.
    max_concurrency:
        Ceiling on in-flight remote fetches.
    language_repo_limit:
        How many of the most recently pushed repositories feed the
        language histogram.
    top_languages, recent_repo_limit, top_contributors:
        Truncation lengths of the rendered lists.
    contributor_repo_limit:
        How many of the most-starred repositories are scanned for
        contributors.
    """

    def __init__(
        self,
        source: StatsSource,
        max_concurrency: int = DEFAULT_CONCURRENCY,
        language_repo_limit: int = 30,
        top_languages: int = 10,
        recent_repo_limit: int = 5,
        contributor_repo_limit: int = 5,
        top_contributors: int = 10,
    ) -> None:
        self._source = source
        self._max_concurrency = max_concurrency
        self._language_repo_limit = language_repo_limit
        self._top_languages = top_languages
        self._recent_repo_limit = recent_repo_limit
        self._contributor_repo_limit = contributor_repo_limit
        self._top_contributors = top_contributors

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self) -> AggregationResult:
        """Run the full pipeline and return the aggregated snapshot."""
        login = await self._source.fetch_authenticated_login()
        listed = await self._source.list_owned_repositories()
        repos = filter_owned(listed, login)
        logger.info(
            "Aggregating %d owned repositories for %s (%d listed)",
            len(repos),
            login,
            len(listed),
        )

        stars, forks = compute_totals(repos)
        recent = most_recent(repos, limit=len(repos))

        languages = await self._collect_languages(login, recent[: self._language_repo_limit])
        open_issues, open_pulls = await self._collect_issue_counts(login, repos)
        contributors = await self._collect_contributors(
            login, top_starred(repos, limit=self._contributor_repo_limit)
        )

        return AggregationResult(
            login=login,
            repository_count=len(repos),
            total_stars=stars,
            total_forks=forks,
            open_issues=open_issues,
            open_pull_requests=open_pulls,
            languages=languages,
            recent_repositories=recent[: self._recent_repo_limit],
            top_contributors=contributors,
        )

    # ── Fan-out steps ───────────────────────────────────────────────────

    async def _collect_languages(
        self, owner: str, repos: list[Repository]
    ) -> list[LanguageShare]:
        async def _fetch(repo: Repository) -> LanguageHistogram:
            return await self._source.fetch_languages(owner, repo.name)

        histograms = await run_bounded(
            [lambda r=repo: _fetch(r) for repo in repos],
            limit=self._max_concurrency,
        )
        shares = language_shares(merge_languages(histograms), limit=self._top_languages)
        logger.info("Merged languages from %d repositories", len(repos))
        return shares

    async def _collect_issue_counts(
        self, owner: str, repos: list[Repository]
    ) -> tuple[int, int]:
        async def _fetch(repo: Repository) -> tuple[list[PullRequest], list[Issue]]:
            pulls = await self._source.list_open_pull_requests(owner, repo.name)
            issues = await self._source.list_open_issues(owner, repo.name)
            return pulls, issues

        partials = await run_bounded(
            [lambda r=repo: _fetch(r) for repo in repos],
            limit=self._max_concurrency,
        )
        open_pulls = sum(len(pulls) for pulls, _ in partials)
        open_issues = sum(count_open_issues(issues) for _, issues in partials)
        logger.info("Open issues: %d, open PRs: %d", open_issues, open_pulls)
        return open_issues, open_pulls

    async def _collect_contributors(
        self, owner: str, repos: list[Repository]
    ) -> list[Contributor]:
        async def _fetch(repo: Repository) -> list[Contributor]:
            return await self._source.list_contributors(owner, repo.name)

        per_repository = await run_bounded(
            [lambda r=repo: _fetch(r) for repo in repos],
            limit=self._max_concurrency,
        )
        return merge_contributors(per_repository, limit=self._top_contributors)
