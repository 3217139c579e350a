"""
Reading History
Bounded most-recently-used list of read articles, persisted as JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
import time
from typing import List, Optional, Union
from uuid import uuid4

from pydantic import ValidationError

from models import ArticleRecord, HistoryEntry
from utils.exceptions import HistoryError


logger = logging.getLogger(__name__)


class ReadingHistoryStore:
    """Newest entry first, one entry per URL, at most `max_items` entries."""

    def __init__(self, path: Union[str, Path] = "./data/history.json", max_items: int = 20):
        self.path = Path(path)
        self.max_items = max(1, int(max_items))
        self._lock = Lock()

    def _load(self) -> List[HistoryEntry]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load history {self.path}: {e}")
            return []
        if not isinstance(raw, list):
            logger.error(f"Ignoring malformed history file {self.path}")
            return []

        entries: List[HistoryEntry] = []
        for item in raw:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValidationError:
                logger.warning(f"Skipping invalid history entry: {item!r}")
        return entries

    def _save(self, entries: List[HistoryEntry]) -> None:
        payload = [entry.model_dump(mode="json") for entry in entries]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise HistoryError(f"Failed to write history: {e}", {"path": str(self.path)}) from e

    def list(self) -> List[HistoryEntry]:
        with self._lock:
            return self._load()[: self.max_items]

    def append(self, record: ArticleRecord, *, timestamp: Optional[int] = None) -> HistoryEntry:
        """Record a read; older entries for the same URL are dropped."""
        entry = HistoryEntry(
            id=uuid4().hex[:12],
            url=record.url,
            title=record.title,
            timestamp=int(timestamp if timestamp is not None else time.time() * 1000),
        )
        with self._lock:
            entries = [item for item in self._load() if item.url != record.url]
            entries = [entry] + entries
            self._save(entries[: self.max_items])
        return entry

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            entries = self._load()
            kept = [item for item in entries if item.id != entry_id]
            if len(kept) == len(entries):
                return False
            self._save(kept)
            return True

    def clear(self) -> None:
        with self._lock:
            self._save([])
