"""Domain exception hierarchy.

Every failure surfaced to the user derives from :class:`ReadmeStatsError`.
Inner layers raise these; ``main`` translates them into a diagnostic on
stderr and a nonzero exit status.
"""

from __future__ import annotations


class ReadmeStatsError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(ReadmeStatsError):
    """Required configuration (e.g. the access token) is missing or invalid."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RemoteFetchError(ReadmeStatsError):
    """A call to the GitHub API failed.

    ``status`` is the HTTP status code (``None`` for network failures) and
    ``detail`` is whatever explanation the provider returned.
    """

    def __init__(self, message: str, status: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail

    def __str__(self) -> str:
        text = super().__str__()
        if self.status is not None:
            text = f"[HTTP {self.status}] {text}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text


class AuthenticationError(RemoteFetchError):
    """The access token was rejected (401)."""


class AccessDeniedError(RemoteFetchError):
    """Access to the resource was denied (403 without rate-limit exhaustion)."""


class RepositoryNotFoundError(RemoteFetchError):
    """The repository or endpoint does not exist (404)."""


class GitHubRateLimitError(RemoteFetchError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""
