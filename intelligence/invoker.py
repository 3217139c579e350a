"""
Model Invoker
Runs the retrieval prompt against an ordered table of model tiers.

Escalation policy:
- a tier that raises, returns no text or stops abnormally hands over to the next tier
- a recitation (copyright) block is retried once with the paraphrase-only prompt
- a safety block is terminal
Both escalations are used at most once per fetch and always run sequentially.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional, Sequence

from config import LLMSettings
from intelligence.llm import BaseLLM, FinishStatus, RetrievalResponse, ToolConfig
from intelligence.prompts import build_paraphrase_prompt, build_retrieval_prompt
from utils.exceptions import ContentBlocked, GenerationFailure


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelAttempt:
    """One row of the model tier table."""

    model: str
    tools: ToolConfig = field(default_factory=ToolConfig)
    thinking_budget: Optional[int] = None


def default_attempts(settings: LLMSettings) -> List[ModelAttempt]:
    """Primary tier with search + URL context, fallback tier with search only."""
    return [
        ModelAttempt(
            model=settings.primary_model,
            tools=ToolConfig(google_search=True, url_context=settings.use_url_context),
            thinking_budget=settings.thinking_budget,
        ),
        ModelAttempt(
            model=settings.fallback_model,
            tools=ToolConfig(google_search=True, url_context=False),
        ),
    ]


def classify_response(response: RetrievalResponse) -> RetrievalResponse:
    """Return the response when usable, otherwise raise the matching error."""
    status = response.finish_status
    if status == FinishStatus.SAFETY_BLOCKED:
        raise ContentBlocked(ContentBlocked.SAFETY, model=response.model)
    if status == FinishStatus.COPYRIGHT_BLOCKED:
        raise ContentBlocked(ContentBlocked.COPYRIGHT, model=response.model)
    if status == FinishStatus.OTHER_ABNORMAL:
        raise GenerationFailure(
            f"Generation stopped abnormally ({response.finish_reason or 'unknown'})",
            kind=GenerationFailure.ABNORMAL,
            model=response.model,
        )
    if not response.has_text:
        raise GenerationFailure(
            "No content received from AI.",
            kind=GenerationFailure.EMPTY,
            model=response.model,
        )
    return response


class ModelInvoker:
    """Sequential model-tier fallback around a BaseLLM."""

    def __init__(self, llm: BaseLLM, attempts: Sequence[ModelAttempt]):
        if not attempts:
            raise ValueError("at least one model attempt is required")
        self.llm = llm
        self.attempts = list(attempts)

    @classmethod
    def from_settings(cls, llm: BaseLLM, settings: LLMSettings) -> "ModelInvoker":
        return cls(llm, default_attempts(settings))

    async def invoke(self, url: str) -> RetrievalResponse:
        """
        Retrieve the article at `url`.

        Raises:
            ContentBlocked: safety block, or copyright block after the paraphrase retry
            GenerationFailure: every tier failed
        """
        prompt = build_retrieval_prompt(url)
        paraphrased = False
        last_error: Optional[Exception] = None

        tier = 0
        while tier < len(self.attempts):
            attempt = self.attempts[tier]
            try:
                response = await self.llm.agenerate(
                    prompt,
                    model=attempt.model,
                    tools=attempt.tools,
                    thinking_budget=attempt.thinking_budget,
                )
                result = classify_response(response)
                logger.info(
                    f"Retrieved {url} with {attempt.model} "
                    f"({len(result.text)} chars, {len(result.citations)} citations)"
                )
                return result
            except ContentBlocked as exc:
                if exc.kind == ContentBlocked.COPYRIGHT and not paraphrased:
                    logger.warning(f"Recitation block from {attempt.model}; retrying with paraphrase prompt")
                    paraphrased = True
                    prompt = build_paraphrase_prompt(url)
                    continue
                logger.warning(f"Content blocked ({exc.kind}) for {url}")
                raise
            except Exception as exc:
                last_error = exc
                logger.warning(f"Model tier {attempt.model} failed: {exc}")
                tier += 1

        kind = last_error.kind if isinstance(last_error, GenerationFailure) else GenerationFailure.EXHAUSTED
        message = str(getattr(last_error, "message", None) or last_error or "unknown error")
        raise GenerationFailure(
            f"Failed to reconstruct article content: {message}",
            kind=kind,
            model=self.attempts[-1].model,
        ) from last_error
