"""Snapshot loader: reads the search corpus from a local JSON export.

The export is produced by the meeting, minutes and transcript collaborators
and has the shape::

    {"meetings": [...], "minutes": [...], "transcripts": [...]}

Keys may be camelCase (as exported) or snake_case. The parsed snapshot is
cached and reloaded only when the file's mtime moves forward.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from meeting_search.config import settings
from meeting_search.services.search_service import SearchDataSources, SearchServiceError

logger = logging.getLogger(__name__)


class SnapshotLoader:
    def __init__(self, path: str | Path | None = None) -> None:
        raw = str(path) if path is not None else settings.snapshot_path
        self._path = Path(os.path.expanduser(raw))
        self._snapshot: SearchDataSources | None = None
        self._last_loaded: float = 0

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SearchDataSources:
        if not self._path.exists():
            if self._snapshot is None:
                logger.warning("Search snapshot not found at %s, searching an empty corpus", self._path)
                self._snapshot = SearchDataSources()
            return self._snapshot

        mtime = os.path.getmtime(self._path)
        if self._snapshot is None or mtime > self._last_loaded:
            self._snapshot = self._read(self._path)
            self._last_loaded = mtime
            logger.info(
                "Search snapshot loaded: %d meetings, %d minutes, %d transcripts from %s",
                len(self._snapshot.meetings),
                len(self._snapshot.minutes),
                len(self._snapshot.transcripts),
                self._path,
            )
        return self._snapshot

    def _read(self, path: Path) -> SearchDataSources:
        try:
            with open(path, "r") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SearchServiceError(
                f"Search snapshot at {path} could not be read",
                "INVALID_SNAPSHOT",
                500,
                {"reason": str(e)},
            ) from e

        try:
            return SearchDataSources.model_validate(raw)
        except ValidationError as e:
            raise SearchServiceError(
                f"Search snapshot at {path} is malformed",
                "INVALID_SNAPSHOT",
                500,
                e.errors(include_url=False, include_context=False, include_input=False),
            ) from e
