"""Marker-region patching of a text document.

A region named ``STATS`` is everything between ``<!-- STATS:START -->`` and
``<!-- STATS:END -->``.  Text outside the markers is never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from readme_stats.domain.entities import PatchOutcome, RegionStatus

logger = logging.getLogger(__name__)

REGIONS: tuple[str, ...] = ("STATS", "LANGS", "RECENT", "CONTRIB")


def start_marker(region: str) -> str:
    return f"<!-- {region}:START -->"


def end_marker(region: str) -> str:
    return f"<!-- {region}:END -->"


def replace_between_markers(content: str, region: str, block: str) -> str:
    """Replace the text between *region*'s markers with *block*.

    Returns *content* unchanged when either marker is missing or the end
    marker precedes the start marker.
    """
    span = _locate(content, region)
    if span is None:
        return content
    return _splice(content, span, block)


def _locate(content: str, region: str) -> tuple[int, int] | None:
    """Return the (start, end) offsets of the text between the markers, if valid."""
    start = start_marker(region)
    start_idx = content.find(start)
    end_idx = content.find(end_marker(region))
    if start_idx == -1 or end_idx == -1 or end_idx < start_idx:
        return None
    return start_idx + len(start), end_idx


def _splice(content: str, span: tuple[int, int], block: str) -> str:
    return content[: span[0]] + "\n" + block + "\n" + content[span[1] :]


def patch_document(content: str, sections: Mapping[str, str]) -> PatchOutcome:
    """Apply *sections* (region name → block) in :data:`REGIONS` order.

    Regions not listed in :data:`REGIONS` are applied afterwards in the
    mapping's own order.
    """
    ordered = [r for r in REGIONS if r in sections]
    ordered += [r for r in sections if r not in REGIONS]

    statuses: dict[str, RegionStatus] = {}
    for region in ordered:
        span = _locate(content, region)
        if span is None:
            logger.warning("Marker pair for %s not found — region left untouched", region)
            statuses[region] = RegionStatus.MISSING
            continue
        patched = _splice(content, span, sections[region])
        statuses[region] = (
            RegionStatus.UNCHANGED if patched == content else RegionStatus.UPDATED
        )
        content = patched
    return PatchOutcome(content=content, regions=statuses)
