"""
Chat Agent
One-shot question answering scoped to an already-fetched article.
"""

from __future__ import annotations

from typing import Optional
import logging

from intelligence.llm import BaseLLM, NO_TOOLS
from intelligence.prompts import QUESTION_SYSTEM_INSTRUCTION, build_question_prompt
from utils.exceptions import AnswerFailure


logger = logging.getLogger(__name__)

ERROR_ANSWER = "Error answering question."
EMPTY_ANSWER = "I couldn't generate an answer."
EMPTY_QUESTION_ANSWER = "Please ask a question about the article."


class ArticleChatAgent:
    """Best-effort article Q&A; `ask` always returns a string."""

    def __init__(
        self,
        llm: BaseLLM,
        *,
        model: str = "gemini-2.5-flash",
        max_context_chars: int = 30000,
    ):
        self.llm = llm
        self.model = model
        self.max_context_chars = max(1, int(max_context_chars))

    async def _answer(self, article_content: str, question: str) -> str:
        prompt = build_question_prompt(article_content, question, self.max_context_chars)
        try:
            response = await self.llm.agenerate(
                prompt,
                model=self.model,
                tools=NO_TOOLS,
                system_instruction=QUESTION_SYSTEM_INSTRUCTION,
            )
        except Exception as exc:
            raise AnswerFailure(f"Question answering failed: {exc}", provider=self.llm.provider) from exc
        return (response.text or "").strip()

    async def ask(self, article_content: str, question: str) -> str:
        query = str(question or "").strip()
        if not query:
            return EMPTY_QUESTION_ANSWER

        try:
            answer = await self._answer(str(article_content or ""), query)
        except AnswerFailure as exc:
            logger.warning(str(exc))
            return ERROR_ANSWER
        except Exception as exc:
            logger.warning(f"Unexpected chat error: {exc}")
            return ERROR_ANSWER

        return answer or EMPTY_ANSWER
