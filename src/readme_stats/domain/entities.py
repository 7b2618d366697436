"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

LanguageHistogram = dict[str, int]


class RegionStatus(str, Enum):
    """What happened to a marker region during patching."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class Repository:
    """Snapshot of one repository as listed by the GitHub API."""

    name: str
    full_name: str
    html_url: str
    owner: str
    fork: bool = False
    stars: int = 0
    forks: int = 0
    pushed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Issue:
    """An open issue.  GitHub's issues endpoint also returns pull requests."""

    number: int
    title: str = ""
    is_pull_request: bool = False


@dataclass(frozen=True, slots=True)
class PullRequest:
    number: int
    title: str = ""


@dataclass(frozen=True, slots=True)
class Contributor:
    """A contributor with a cumulative contribution count."""

    login: str
    html_url: str | None = None
    avatar_url: str | None = None
    contributions: int = 0


@dataclass(frozen=True, slots=True)
class LanguageShare:
    """One language's share of the merged byte histogram."""

    language: str
    byte_count: int
    percentage: float


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """The final snapshot consumed by the markdown renderer."""

    login: str
    repository_count: int
    total_stars: int
    total_forks: int
    open_issues: int
    open_pull_requests: int
    languages: list[LanguageShare] = field(default_factory=list)
    recent_repositories: list[Repository] = field(default_factory=list)
    top_contributors: list[Contributor] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PatchOutcome:
    """Patched document text plus the per-region result."""

    content: str
    regions: dict[str, RegionStatus] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UpdateReport:
    """Outcome of one full run."""

    written: bool
    regions: dict[str, RegionStatus] = field(default_factory=dict)
