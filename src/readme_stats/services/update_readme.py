"""Update-README use case — collect, render, patch, and conditionally write."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from readme_stats.domain.entities import UpdateReport
from readme_stats.infrastructure.document_store import DocumentStore
from readme_stats.services.collect_stats import CollectStatsUseCase
from readme_stats.services.document_patcher import patch_document
from readme_stats.services.markdown import render_sections

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UpdateReadmeUseCase:
    """Splices freshly aggregated statistics into the document's marker regions."""

    def __init__(
        self,
        collector: CollectStatsUseCase,
        document: DocumentStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._collector = collector
        self._document = document
        self._clock = clock

    async def execute(self) -> UpdateReport:
        # Read first so a missing document fails before any API traffic.
        current = self._document.read()

        result = await self._collector.execute()
        sections = render_sections(result, generated_at=self._clock())
        outcome = patch_document(current, sections.as_regions())

        written = self._document.write_if_changed(outcome.content)
        logger.info(
            "%s %s",
            self._document.path,
            "updated" if written else "unchanged",
        )
        return UpdateReport(written=written, regions=outcome.regions)
