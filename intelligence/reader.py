"""
Article Reader
Inbound facade: fetch_article (retrieve -> parse) and ask_question.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from config import Settings
from intelligence.agents import ArticleChatAgent
from intelligence.invoker import ModelInvoker
from intelligence.llm import BaseLLM, get_llm
from intelligence.parser import ResponseParser
from models import ArticleRecord
from utils.exceptions import InvalidURLError


logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://", flags=re.IGNORECASE)


def normalize_article_url(raw: str) -> str:
    """Trim and prepend https:// when the input has no http(s) scheme."""
    text = str(raw or "").strip()
    if not text:
        raise InvalidURLError("Article URL is required")
    if not _SCHEME_RE.match(text):
        text = f"https://{text}"
    return text


class ArticleReader:
    """
    Reader core

    Each call builds its own prompt and gets its own response; nothing is cached
    between calls.
    """

    def __init__(
        self,
        invoker: ModelInvoker,
        chat_agent: ArticleChatAgent,
        parser: Optional[ResponseParser] = None,
    ):
        self.invoker = invoker
        self.chat_agent = chat_agent
        self.parser = parser or ResponseParser()

    @classmethod
    def from_settings(cls, settings: Settings, llm: Optional[BaseLLM] = None) -> "ArticleReader":
        llm = llm or get_llm(settings.llm)
        return cls(
            invoker=ModelInvoker.from_settings(llm, settings.llm),
            chat_agent=ArticleChatAgent(
                llm,
                model=settings.llm.chat_model,
                max_context_chars=settings.reader.chat_max_context_chars,
            ),
            parser=ResponseParser(min_title_length=settings.reader.min_title_length),
        )

    async def fetch_article(self, url: str) -> ArticleRecord:
        """
        Retrieve and reconstruct the article at `url` (scheme already present).

        Raises:
            InvalidURLError: empty url
            GenerationFailure: every retrieval attempt failed
            ContentBlocked: terminal safety or copyright block
        """
        if not str(url or "").strip():
            raise InvalidURLError("Article URL is required")

        response = await self.invoker.invoke(url)
        record = self.parser.parse(response, url)
        logger.info(f"Parsed '{record.title}' ({record.site_name}, {len(record.sources)} sources)")
        return record

    async def ask_question(self, article_content: str, question: str) -> str:
        """Answer `question` from `article_content`; never raises."""
        return await self.chat_agent.ask(article_content, question)

    async def aclose(self) -> None:
        await self.invoker.llm.aclose()
