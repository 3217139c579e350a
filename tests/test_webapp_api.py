"""Tests for the reader FastAPI web interface."""

from __future__ import annotations

import importlib

import pytest

from fastapi.testclient import TestClient

from models import ArticleRecord, Source
from storage import ReadingHistoryStore
from utils.exceptions import ContentBlocked, GenerationFailure

webapp_module = importlib.import_module("webapp.app")


class _FakeReader:
    def __init__(self, record=None, error=None, answer="answer"):
        self.record = record
        self.error = error
        self.answer = answer
        self.fetched = []
        self.questions = []

    async def fetch_article(self, url):
        self.fetched.append(url)
        if self.error is not None:
            raise self.error
        return self.record.model_copy(update={"url": url})

    async def ask_question(self, article_content, question):
        self.questions.append((article_content, question))
        return self.answer


def _record() -> ArticleRecord:
    return ArticleRecord(
        title="Story",
        content="Body",
        author="Ann",
        siteName="Example",
        url="https://example.com/story",
        sources=[Source(title="Example", uri="https://example.com/story")],
    )


def _client(monkeypatch, tmp_path, reader) -> TestClient:
    store = ReadingHistoryStore(tmp_path / "history.json")
    monkeypatch.setattr(webapp_module, "get_reader", lambda: reader)
    monkeypatch.setattr(webapp_module, "get_history_store", lambda: store)
    return TestClient(webapp_module.app)


def test_health(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path, _FakeReader())

    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_fetch_article_normalizes_url_and_records_history(monkeypatch, tmp_path):
    reader = _FakeReader(record=_record())
    client = _client(monkeypatch, tmp_path, reader)

    resp = client.post("/api/articles", json={"url": "example.com/story"})

    assert resp.status_code == 200
    body = resp.json()
    assert reader.fetched == ["https://example.com/story"]
    assert body["article"]["title"] == "Story"
    assert body["article"]["siteName"] == "Example"
    assert body["article"]["sources"] == [{"title": "Example", "uri": "https://example.com/story"}]
    assert body["history_entry"]["url"] == "https://example.com/story"

    history = client.get("/api/history").json()["items"]
    assert [item["title"] for item in history] == ["Story"]


def test_fetch_article_maps_content_blocked_to_422(monkeypatch, tmp_path):
    reader = _FakeReader(error=ContentBlocked(ContentBlocked.COPYRIGHT))
    client = _client(monkeypatch, tmp_path, reader)

    resp = client.post("/api/articles", json={"url": "https://example.com/x"})

    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["kind"] == "copyright"
    assert "copyright" in detail["reason"]


def test_fetch_article_maps_generation_failure_to_502(monkeypatch, tmp_path):
    reader = _FakeReader(error=GenerationFailure("Failed to reconstruct article content: down"))
    client = _client(monkeypatch, tmp_path, reader)

    resp = client.post("/api/articles", json={"url": "https://example.com/x"})

    assert resp.status_code == 502
    assert resp.json()["detail"]["kind"] == "exhausted"
    assert client.get("/api/history").json()["items"] == []


def test_fetch_article_rejects_blank_url(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path, _FakeReader(record=_record()))

    resp = client.post("/api/articles", json={"url": "   "})

    assert resp.status_code == 422


def test_ask_question(monkeypatch, tmp_path):
    reader = _FakeReader(answer="Because.")
    client = _client(monkeypatch, tmp_path, reader)

    resp = client.post("/api/articles/ask", json={"content": "Body", "question": "Why?"})

    assert resp.status_code == 200
    assert resp.json() == {"answer": "Because."}
    assert reader.questions == [("Body", "Why?")]


def test_export_markdown_download(monkeypatch, tmp_path):
    client = _client(monkeypatch, tmp_path, _FakeReader())

    resp = client.post("/api/articles/markdown", json={"article": _record().to_dict()})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/markdown")
    assert 'filename="story.md"' in resp.headers["content-disposition"]
    assert resp.text.startswith("# Story")


def test_history_delete_and_clear(monkeypatch, tmp_path):
    reader = _FakeReader(record=_record())
    client = _client(monkeypatch, tmp_path, reader)
    client.post("/api/articles", json={"url": "https://example.com/a"})
    client.post("/api/articles", json={"url": "https://example.com/b"})

    items = client.get("/api/history").json()["items"]
    assert [item["url"] for item in items] == ["https://example.com/b", "https://example.com/a"]

    assert client.delete(f"/api/history/{items[0]['id']}").status_code == 200
    assert client.delete("/api/history/missing").status_code == 404
    assert [item["url"] for item in client.get("/api/history").json()["items"]] == ["https://example.com/a"]

    assert client.delete("/api/history").json() == {"cleared": True}
    assert client.get("/api/history").json()["items"] == []


@pytest.fixture()
def unconfigured_reader(monkeypatch):
    from config import get_settings
    from webapp import runtime

    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "LLM_GEMINI_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    runtime.get_reader.cache_clear()
    monkeypatch.setattr(webapp_module, "get_reader", runtime.get_reader)
    yield
    get_settings.cache_clear()
    runtime.get_reader.cache_clear()


def test_ask_without_api_key_returns_error_answer(monkeypatch, tmp_path, unconfigured_reader):
    monkeypatch.setattr(webapp_module, "get_history_store", lambda: ReadingHistoryStore(tmp_path / "h.json"))
    client = TestClient(webapp_module.app)

    resp = client.post("/api/articles/ask", json={"content": "x", "question": "q"})

    assert resp.status_code == 200
    assert resp.json() == {"answer": "Error answering question."}


def test_fetch_without_api_key_returns_503(monkeypatch, tmp_path, unconfigured_reader):
    monkeypatch.setattr(webapp_module, "get_history_store", lambda: ReadingHistoryStore(tmp_path / "h.json"))
    client = TestClient(webapp_module.app)

    resp = client.post("/api/articles", json={"url": "https://example.com/x"})

    assert resp.status_code == 503
    assert "API key" in resp.json()["detail"]["message"]
