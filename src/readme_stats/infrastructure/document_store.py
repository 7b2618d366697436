"""Filesystem access for the document being patched."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class DocumentStore:
    """Reads and conditionally rewrites a UTF-8 text document."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str:
        return self._path.read_text(encoding="utf-8")

    def write_if_changed(self, content: str) -> bool:
        """Write *content* unless it matches the file (ignoring outer whitespace).

        Returns True when the file was written.
        """
        current = self.read()
        if content.strip() == current.strip():
            logger.debug("%s unchanged — skipping write", self._path)
            return False
        self._path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", self._path)
        return True
