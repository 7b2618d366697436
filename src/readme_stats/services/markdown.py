"""Markdown rendering of an :class:`AggregationResult`."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from readme_stats.domain.entities import AggregationResult

NO_DATA = "_No data found_"


@dataclass(frozen=True, slots=True)
class RenderedSections:
    """One markdown block per marker region."""

    stats: str
    langs: str
    recent: str
    contrib: str

    def as_regions(self) -> dict[str, str]:
        """Map marker region names to their blocks, in patch order."""
        return {
            "STATS": self.stats,
            "LANGS": self.langs,
            "RECENT": self.recent,
            "CONTRIB": self.contrib,
        }


def markdown_table(rows: Sequence[Mapping[str, object]]) -> str:
    """Render uniform *rows* as a pipe table; header from the first row's keys.

    ``None`` cells render as empty strings.  No rows → empty string.
    """
    if not rows:
        return ""
    header = list(rows[0].keys())
    lines = [
        " | ".join(header),
        " | ".join("---" for _ in header),
    ]
    for row in rows:
        lines.append(" | ".join(_cell(row.get(name)) for name in header))
    return "\n".join(lines)


def _cell(value: object) -> str:
    return "" if value is None else str(value)


def _utc_date(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).date().isoformat()


def render_summary(result: AggregationResult, generated_at: datetime) -> str:
    return "  \n".join(
        [
            f"**Update:** {generated_at.isoformat()}",
            f"**Total Public Repos:** {result.repository_count}",
            f"**Total Stars:** {result.total_stars} • **Total Forks:** {result.total_forks}",
            f"**Open Issues:** {result.open_issues} • **Open PRs:** {result.open_pull_requests}",
        ]
    )


def render_languages(result: AggregationResult) -> str:
    return markdown_table(
        [
            {"Language": share.language, "Percentage": f"{share.percentage:.1f}%"}
            for share in result.languages
        ]
    )


def render_recent(result: AggregationResult) -> str:
    return markdown_table(
        [
            {
                "Repo": f"[{repo.name}]({repo.html_url})",
                "Stars": repo.stars,
                "Forks": repo.forks,
                "Updated": _utc_date(repo.pushed_at),
            }
            for repo in result.recent_repositories
        ]
    )


def render_contributors(result: AggregationResult) -> str:
    return markdown_table(
        [
            {
                "Contributor": (
                    f"[{c.login}]({c.html_url})" if c.html_url else c.login
                ),
                "Contributions": c.contributions,
            }
            for c in result.top_contributors
        ]
    )


def render_sections(result: AggregationResult, generated_at: datetime) -> RenderedSections:
    """Render all four blocks; empty tables become the :data:`NO_DATA` placeholder."""
    return RenderedSections(
        stats=render_summary(result, generated_at),
        langs=render_languages(result) or NO_DATA,
        recent=render_recent(result) or NO_DATA,
        contrib=render_contributors(result) or NO_DATA,
    )
