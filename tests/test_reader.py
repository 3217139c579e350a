"""Tests for the ArticleReader facade."""

from __future__ import annotations

from typing import Any, List, Optional

import pytest

from config import LLMSettings, ReaderSettings, Settings
from intelligence.llm import BaseLLM, FinishStatus, NO_TOOLS, RetrievalResponse, ToolConfig
from intelligence.reader import ArticleReader, normalize_article_url
from utils.exceptions import ConfigurationError, ContentBlocked, GenerationFailure, InvalidURLError


class _QueueLLM(BaseLLM):
    def __init__(self, outcomes: List[Any]):
        super().__init__()
        self.outcomes = list(outcomes)
        self.models: List[str] = []
        self.closed = False

    @property
    def provider(self) -> str:
        return "fake"

    async def agenerate(
        self,
        prompt: str,
        *,
        model: str,
        tools: ToolConfig = NO_TOOLS,
        system_instruction: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> RetrievalResponse:
        self.models.append(model)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True


def _settings() -> Settings:
    return Settings(
        llm=LLMSettings(primary_model="pro", fallback_model="flash", chat_model="chat"),
        reader=ReaderSettings(min_title_length=3, chat_max_context_chars=100),
    )


def test_normalize_article_url_prepends_https() -> None:
    assert normalize_article_url("  example.com/story ") == "https://example.com/story"
    assert normalize_article_url("http://example.com") == "http://example.com"
    assert normalize_article_url("HTTPS://Example.com/x") == "HTTPS://Example.com/x"
    with pytest.raises(InvalidURLError):
        normalize_article_url("   ")


@pytest.mark.asyncio
async def test_fetch_article_parses_response_and_echoes_url() -> None:
    url = "https://example.com/some-cool-article"
    llm = _QueueLLM(
        [
            RetrievalResponse(
                text="---\ntitle: Cool\nauthor: Ann\nsiteName: Example\n---\n# Cool\n\nBody",
                finish_status=FinishStatus.NORMAL,
                citations=[{"web": {"title": "Example", "uri": url}}],
            )
        ]
    )
    reader = ArticleReader.from_settings(_settings(), llm=llm)

    record = await reader.fetch_article(url)

    assert record.url == url
    assert (record.title, record.author, record.site_name) == ("Cool", "Ann", "Example")
    assert record.content == "Body"
    assert [s.uri for s in record.sources] == [url]
    assert llm.models == ["pro"]


@pytest.mark.asyncio
async def test_fetch_article_propagates_generation_failure() -> None:
    llm = _QueueLLM([RuntimeError("down"), RuntimeError("still down")])
    reader = ArticleReader.from_settings(_settings(), llm=llm)

    with pytest.raises(GenerationFailure):
        await reader.fetch_article("https://example.com/x")
    assert llm.models == ["pro", "flash"]


@pytest.mark.asyncio
async def test_fetch_article_propagates_content_blocked() -> None:
    llm = _QueueLLM([RetrievalResponse(text="", finish_status=FinishStatus.SAFETY_BLOCKED)])
    reader = ArticleReader.from_settings(_settings(), llm=llm)

    with pytest.raises(ContentBlocked) as exc_info:
        await reader.fetch_article("https://example.com/x")
    assert exc_info.value.kind == ContentBlocked.SAFETY


@pytest.mark.asyncio
async def test_fetch_article_rejects_empty_url() -> None:
    reader = ArticleReader.from_settings(_settings(), llm=_QueueLLM([]))

    with pytest.raises(InvalidURLError):
        await reader.fetch_article("")


@pytest.mark.asyncio
async def test_ask_question_never_raises_and_uses_chat_model() -> None:
    llm = _QueueLLM([RuntimeError("boom"), RetrievalResponse(text="42", finish_status=FinishStatus.NORMAL)])
    reader = ArticleReader.from_settings(_settings(), llm=llm)

    assert await reader.ask_question("body", "q") == "Error answering question."
    assert await reader.ask_question("body", "q") == "42"
    assert llm.models == ["chat", "chat"]

    await reader.aclose()
    assert llm.closed is True


def test_from_settings_without_api_key_raises_configuration_error(monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    settings = Settings(llm=LLMSettings(gemini_api_key=None))

    with pytest.raises(ConfigurationError):
        ArticleReader.from_settings(settings)
