"""Shared runtime instances for web/CLI entrypoints."""

from __future__ import annotations

from functools import lru_cache

from config import get_settings
from intelligence.reader import ArticleReader
from storage import ReadingHistoryStore


@lru_cache()
def get_reader() -> ArticleReader:
    return ArticleReader.from_settings(get_settings())


@lru_cache()
def get_history_store() -> ReadingHistoryStore:
    settings = get_settings().history
    return ReadingHistoryStore(path=settings.path, max_items=settings.max_items)
