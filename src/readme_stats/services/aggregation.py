"""Aggregation steps — pure transformations over already-fetched data.

Nothing here performs I/O.  The orchestration in
:mod:`readme_stats.services.collect_stats` fetches the inputs and folds the
partial results through these helpers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone

from readme_stats.domain.entities import (
    Contributor,
    Issue,
    LanguageHistogram,
    LanguageShare,
    Repository,
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


# ── Repositories ────────────────────────────────────────────────────────────


def filter_owned(repositories: Iterable[Repository], owner_login: str) -> list[Repository]:
    """Keep non-fork repositories owned by *owner_login*, without duplicates.

    Ownership is compared case-insensitively.  Duplicates (same full name)
    keep their first listing position.
    """
    owner = owner_login.lower()
    seen: set[str] = set()
    owned: list[Repository] = []
    for repo in repositories:
        key = repo.full_name.lower()
        if repo.fork or repo.owner.lower() != owner or key in seen:
            continue
        seen.add(key)
        owned.append(repo)
    return owned


def compute_totals(repositories: Iterable[Repository]) -> tuple[int, int]:
    """Return ``(total_stars, total_forks)``."""
    stars = forks = 0
    for repo in repositories:
        stars += repo.stars
        forks += repo.forks
    return stars, forks


def most_recent(repositories: Iterable[Repository], limit: int = 5) -> list[Repository]:
    """Return the *limit* most recently pushed repositories.

    Ordering is enforced here rather than trusted from the API.  Never-pushed
    repositories sort last; ties keep listing order.
    """
    ordered = sorted(
        repositories,
        key=lambda r: _aware(r.pushed_at) if r.pushed_at else _EPOCH,
        reverse=True,
    )
    return ordered[:limit]


def top_starred(repositories: Iterable[Repository], limit: int = 5) -> list[Repository]:
    """Return the *limit* repositories with the most stars (ties keep listing order)."""
    return sorted(repositories, key=lambda r: -r.stars)[:limit]


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# ── Languages ───────────────────────────────────────────────────────────────


def merge_languages(histograms: Iterable[Mapping[str, int]]) -> LanguageHistogram:
    """Add byte counts across *histograms*, keeping first-occurrence order."""
    total: LanguageHistogram = {}
    for histogram in histograms:
        for language, count in histogram.items():
            total[language] = total.get(language, 0) + count
    return total


def language_shares(histogram: Mapping[str, int], limit: int = 10) -> list[LanguageShare]:
    """Convert a byte histogram into the top *limit* percentage shares.

    A zero grand total is treated as 1 so empty histograms yield 0 %.
    Ties keep first-occurrence order.
    """
    grand_total = sum(histogram.values()) or 1
    shares = [
        LanguageShare(
            language=language,
            byte_count=count,
            percentage=count / grand_total * 100,
        )
        for language, count in histogram.items()
    ]
    shares.sort(key=lambda s: -s.byte_count)
    return shares[:limit]


# ── Issues ──────────────────────────────────────────────────────────────────


def count_open_issues(issues: Iterable[Issue]) -> int:
    """Count entries that are real issues, not pull requests."""
    return sum(1 for issue in issues if not issue.is_pull_request)


# ── Contributors ────────────────────────────────────────────────────────────


def fold_contributors(
    merged: dict[str, Contributor],
    contributors: Iterable[Contributor],
) -> dict[str, Contributor]:
    """Fold one repository's *contributors* into *merged* (mutated and returned).

    Keys are lowercased logins.  Contribution counts accumulate; the login
    spelling and URLs seen first are kept.
    """
    for contributor in contributors:
        if not contributor.login:
            continue
        key = contributor.login.lower()
        previous = merged.get(key)
        if previous is None:
            merged[key] = contributor
            continue
        merged[key] = Contributor(
            login=previous.login,
            html_url=previous.html_url,
            avatar_url=previous.avatar_url,
            contributions=previous.contributions + contributor.contributions,
        )
    return merged


def rank_contributors(merged: Mapping[str, Contributor], limit: int = 10) -> list[Contributor]:
    """Sort by cumulative contributions, descending; ties keep first-seen order."""
    return sorted(merged.values(), key=lambda c: -c.contributions)[:limit]


def merge_contributors(
    per_repository: Sequence[Iterable[Contributor]],
    limit: int = 10,
) -> list[Contributor]:
    """Fold every repository's contributor list and return the ranked top *limit*."""
    merged: dict[str, Contributor] = {}
    for contributors in per_repository:
        fold_contributors(merged, contributors)
    return rank_contributors(merged, limit)
