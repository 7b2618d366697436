"""GitHub REST API adapter — implements the StatsSource port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from readme_stats.domain.entities import (
    Contributor,
    Issue,
    LanguageHistogram,
    PullRequest,
    Repository,
)
from readme_stats.domain.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    GitHubRateLimitError,
    RemoteFetchError,
    RepositoryNotFoundError,
)
from readme_stats.infrastructure.schemas import (
    ContributorPayload,
    IssuePayload,
    LanguagesPayload,
    PullRequestPayload,
    RepositoryPayload,
    UserPayload,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_PER_PAGE = 100

_REPOS = TypeAdapter(list[RepositoryPayload])
_PULLS = TypeAdapter(list[PullRequestPayload])
_ISSUES = TypeAdapter(list[IssuePayload])
_CONTRIBUTORS = TypeAdapter(list[ContributorPayload])


class GitHubRestAdapter:
    """Concrete StatsSource backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "readme-stats/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_authenticated_login(self) -> str:
        """GET /user → login."""
        resp = await self._api_get("/user")
        return _validate(UserPayload, resp).login

    async def list_owned_repositories(self) -> list[Repository]:
        """GET /user/repos (all pages) → [Repository], most recently pushed first."""
        items = await self._paginate(
            "/user/repos",
            params={
                "visibility": "public",
                "affiliation": "owner",
                "sort": "pushed",
                "direction": "desc",
            },
        )
        payloads = _validate_list(_REPOS, items, "/user/repos")
        return [p.to_entity() for p in payloads]

    async def fetch_languages(self, owner: str, repo: str) -> LanguageHistogram:
        """GET /repos/{owner}/{repo}/languages → {lang: bytes}."""
        resp = await self._api_get(f"/repos/{owner}/{repo}/languages")
        return dict(_validate(LanguagesPayload, resp).root)

    async def list_open_pull_requests(self, owner: str, repo: str) -> list[PullRequest]:
        """GET /repos/{owner}/{repo}/pulls?state=open (all pages)."""
        endpoint = f"/repos/{owner}/{repo}/pulls"
        items = await self._paginate(endpoint, params={"state": "open"})
        return [p.to_entity() for p in _validate_list(_PULLS, items, endpoint)]

    async def list_open_issues(self, owner: str, repo: str) -> list[Issue]:
        """GET /repos/{owner}/{repo}/issues?state=open (all pages).

        Pull requests are returned as well and flagged on the entity.
        """
        endpoint = f"/repos/{owner}/{repo}/issues"
        items = await self._paginate(endpoint, params={"state": "open"})
        return [p.to_entity() for p in _validate_list(_ISSUES, items, endpoint)]

    async def list_contributors(self, owner: str, repo: str) -> list[Contributor]:
        """GET /repos/{owner}/{repo}/contributors (all pages, no anonymous entries)."""
        endpoint = f"/repos/{owner}/{repo}/contributors"
        items = await self._paginate(endpoint, params={"anon": "false"})
        contributors = []
        for payload in _validate_list(_CONTRIBUTORS, items, endpoint):
            entity = payload.to_entity()
            if entity is not None:
                contributors.append(entity)
        return contributors

    # ── Transport ───────────────────────────────────────────────────────

    async def _paginate(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> list[Any]:
        """Follow ``Link: rel="next"`` headers and concatenate every page."""
        query: dict[str, str] | None = {**(params or {}), "per_page": str(_PER_PAGE)}
        url: str | None = f"{self._base_url}{endpoint}"
        items: list[Any] = []
        pages = 0

        while url:
            resp = await self._request(url, params=query)
            pages += 1
            # 204 No Content: e.g. contributors of an empty repository.
            if resp.status_code == 204:
                break
            data = _json(resp)
            if not isinstance(data, list):
                raise RemoteFetchError(
                    f"Expected a JSON array from {endpoint}", status=resp.status_code
                )
            items.extend(data)
            url = resp.links.get("next", {}).get("url")
            # The next link already carries the query string.
            query = None

        logger.debug("Fetched %d item(s) from %s in %d page(s)", len(items), endpoint, pages)
        return items

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a single GitHub API GET request."""
        return await self._request(f"{self._base_url}{endpoint}", params=params)

    async def _request(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """GET *url* and translate failures into RemoteFetchError subclasses."""
        try:
            resp = await self._client.get(url, headers=self._api_headers, params=params)
        except httpx.HTTPError as exc:
            raise RemoteFetchError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code in (200, 204):
            return resp

        detail = _error_detail(resp)

        if resp.status_code == 401:
            raise AuthenticationError(
                "Bad credentials. Check the GH_PAT / GITHUB_TOKEN value.",
                status=401,
                detail=detail,
            )

        if resp.status_code == 404:
            raise RepositoryNotFoundError(f"Not found: {url}", status=404, detail=detail)

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {_reset_time(resp)}.",
                    status=403,
                    detail=detail,
                )
            raise AccessDeniedError(f"Access denied: {url}", status=403, detail=detail)

        if resp.status_code == 429:
            raise GitHubRateLimitError(
                "GitHub API rate limit exceeded (HTTP 429).",
                status=429,
                detail=detail,
            )

        raise RemoteFetchError(
            f"GitHub API returned HTTP {resp.status_code} for {url}",
            status=resp.status_code,
            detail=detail,
        )


# ── Helpers ─────────────────────────────────────────────────────────────────


def _json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise RemoteFetchError(
            f"GitHub returned a non-JSON body for {resp.request.url}",
            status=resp.status_code,
        ) from exc


def _validate(model: type[BaseModel], resp: httpx.Response) -> Any:
    try:
        return model.model_validate(_json(resp))
    except ValidationError as exc:
        raise RemoteFetchError(
            f"Unexpected payload from {resp.request.url.path}",
            status=resp.status_code,
            detail=str(exc),
        ) from exc


def _validate_list(adapter: TypeAdapter[Any], items: list[Any], endpoint: str) -> Any:
    try:
        return adapter.validate_python(items)
    except ValidationError as exc:
        raise RemoteFetchError(
            f"Unexpected payload from {endpoint}", detail=str(exc)
        ) from exc


def _error_detail(resp: httpx.Response) -> str | None:
    """Extract GitHub's ``message`` / ``documentation_url`` from an error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip() or None
    if not isinstance(body, dict):
        return str(body)
    parts = [str(body[key]) for key in ("message", "documentation_url") if body.get(key)]
    return "; ".join(parts) or None


def _reset_time(resp: httpx.Response) -> str:
    reset_raw = resp.headers.get("x-ratelimit-reset", "")
    try:
        return datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except (ValueError, OSError):
        return reset_raw or "unknown"
