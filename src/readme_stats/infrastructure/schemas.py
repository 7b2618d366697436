"""Pydantic models for the GitHub REST payloads this tool consumes.

Only the fields the aggregation needs are declared; everything else in the
response is ignored.  Each model knows how to turn itself into the matching
domain entity.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, RootModel

from readme_stats.domain.entities import Contributor, Issue, PullRequest, Repository


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class OwnerPayload(_Payload):
    login: str


class UserPayload(_Payload):
    """Response of ``GET /user``."""

    login: str


class RepositoryPayload(_Payload):
    """One element of ``GET /user/repos``."""

    name: str
    full_name: str
    html_url: str
    owner: OwnerPayload
    fork: bool = False
    stargazers_count: NonNegativeInt | None = 0
    forks_count: NonNegativeInt | None = 0
    pushed_at: datetime | None = None

    def to_entity(self) -> Repository:
        return Repository(
            name=self.name,
            full_name=self.full_name,
            html_url=self.html_url,
            owner=self.owner.login,
            fork=self.fork,
            stars=self.stargazers_count or 0,
            forks=self.forks_count or 0,
            pushed_at=self.pushed_at,
        )


class LanguagesPayload(RootModel[dict[str, NonNegativeInt]]):
    """Response of ``GET /repos/{owner}/{repo}/languages``."""


class PullRequestPayload(_Payload):
    number: int
    title: str = ""

    def to_entity(self) -> PullRequest:
        return PullRequest(number=self.number, title=self.title)


class IssuePayload(_Payload):
    """One element of ``GET /repos/{owner}/{repo}/issues``.

    GitHub returns pull requests from this endpoint too; they are the
    entries carrying a ``pull_request`` object.
    """

    number: int
    title: str = ""
    pull_request: dict[str, Any] | None = None

    def to_entity(self) -> Issue:
        return Issue(
            number=self.number,
            title=self.title,
            is_pull_request=self.pull_request is not None,
        )


class ContributorPayload(_Payload):
    """One element of ``GET /repos/{owner}/{repo}/contributors``."""

    login: str | None = None
    html_url: str | None = None
    avatar_url: str | None = None
    contributions: NonNegativeInt = Field(default=0)

    def to_entity(self) -> Contributor | None:
        if not self.login:
            return None
        return Contributor(
            login=self.login,
            html_url=self.html_url,
            avatar_url=self.avatar_url,
            contributions=self.contributions,
        )
