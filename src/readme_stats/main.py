from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import httpx

from readme_stats.domain.entities import UpdateReport
from readme_stats.domain.exceptions import ReadmeStatsError, RemoteFetchError
from readme_stats.infrastructure.config import Settings, get_settings
from readme_stats.infrastructure.document_store import DocumentStore
from readme_stats.infrastructure.github_rest_adapter import GitHubRestAdapter
from readme_stats.services.collect_stats import CollectStatsUseCase
from readme_stats.services.update_readme import UpdateReadmeUseCase

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="readme-stats",
        description="Refresh the statistics sections of a GitHub profile README.",
    )
    parser.add_argument("--readme", help="document to patch (default: README.md)")
    parser.add_argument("--log-level", help="logging level (default: INFO)")
    return parser.parse_args(argv)


async def run(settings: Settings) -> UpdateReport:
    """Wire the adapters and execute one update."""
    token = settings.require_token()
    async with httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout)) as client:
        source = GitHubRestAdapter(client=client, token=token, base_url=settings.github_api_url)
        collector = CollectStatsUseCase(
            source,
            max_concurrency=settings.max_concurrency,
            language_repo_limit=settings.language_repo_limit,
            top_languages=settings.top_languages,
            recent_repo_limit=settings.recent_repo_limit,
            contributor_repo_limit=settings.contributor_repo_limit,
            top_contributors=settings.top_contributors,
        )
        use_case = UpdateReadmeUseCase(collector, DocumentStore(settings.readme_path))
        return await use_case.execute()


def main(argv: list[str] | None = None) -> int:
    """Run one README update; returns the process exit status."""
    args = _parse_args(argv)
    try:
        settings = get_settings()
        overrides = {
            key: value
            for key, value in (("readme_path", args.readme), ("log_level", args.log_level))
            if value
        }
        if overrides:
            settings = settings.model_copy(update=overrides)

        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        )
        report = asyncio.run(run(settings))
    except RemoteFetchError as exc:
        print(f"GitHub API error: {exc}", file=sys.stderr)
        return 1
    except ReadmeStatsError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Cannot access document: {exc}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Unhandled exception")
        return 1

    print("README updated." if report.written else "No changes.")
    for region, status in report.regions.items():
        print(f"  {region}: {status.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
