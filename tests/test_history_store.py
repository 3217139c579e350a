"""Tests for the reading history store."""

from __future__ import annotations

import json

import pytest

from models import ArticleRecord
from storage import ReadingHistoryStore
from utils.exceptions import HistoryError


def _record(url: str, title: str = "Title") -> ArticleRecord:
    return ArticleRecord(title=title, content="body", url=url)


def test_append_puts_newest_first_and_persists(tmp_path):
    path = tmp_path / "history.json"
    store = ReadingHistoryStore(path, max_items=5)

    store.append(_record("https://a.example", "A"), timestamp=1)
    store.append(_record("https://b.example", "B"), timestamp=2)

    reloaded = ReadingHistoryStore(path, max_items=5).list()
    assert [(e.url, e.title, e.timestamp) for e in reloaded] == [
        ("https://b.example", "B", 2),
        ("https://a.example", "A", 1),
    ]
    assert json.loads(path.read_text(encoding="utf-8"))[0]["url"] == "https://b.example"


def test_same_url_is_moved_to_front_without_duplicates(tmp_path):
    store = ReadingHistoryStore(tmp_path / "history.json")

    store.append(_record("https://a.example", "Old A"))
    store.append(_record("https://b.example", "B"))
    store.append(_record("https://a.example", "New A"))

    entries = store.list()
    assert [e.url for e in entries] == ["https://a.example", "https://b.example"]
    assert entries[0].title == "New A"


def test_history_is_bounded(tmp_path):
    store = ReadingHistoryStore(tmp_path / "history.json", max_items=3)

    for idx in range(5):
        store.append(_record(f"https://example.com/{idx}"))

    assert [e.url for e in store.list()] == [
        "https://example.com/4",
        "https://example.com/3",
        "https://example.com/2",
    ]


def test_delete_and_clear(tmp_path):
    store = ReadingHistoryStore(tmp_path / "history.json")
    first = store.append(_record("https://a.example"))
    store.append(_record("https://b.example"))

    assert store.delete(first.id) is True
    assert store.delete("missing") is False
    assert [e.url for e in store.list()] == ["https://b.example"]

    store.clear()
    assert store.list() == []


def test_corrupt_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")
    store = ReadingHistoryStore(path)

    assert store.list() == []
    store.append(_record("https://a.example"))
    assert len(store.list()) == 1


def test_invalid_entries_are_skipped(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(
        json.dumps([{"id": "1", "url": "https://ok.example", "title": "ok", "timestamp": 1}, {"bad": True}]),
        encoding="utf-8",
    )

    assert [e.id for e in ReadingHistoryStore(path).list()] == ["1"]


def test_write_failure_raises_history_error(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file", encoding="utf-8")
    store = ReadingHistoryStore(blocker / "history.json")

    with pytest.raises(HistoryError):
        store.append(_record("https://a.example"))
