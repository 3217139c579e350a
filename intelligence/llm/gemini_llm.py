"""
Google Gemini LLM
Gemini client on the google-genai SDK, with Google Search grounding and URL context tools
"""
from typing import Any, Dict, List, Optional
import logging

from .base import BaseLLM, FinishStatus, NO_TOOLS, RetrievalResponse, ToolConfig


logger = logging.getLogger(__name__)


_SAFETY_REASONS = {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII", "IMAGE_SAFETY"}
_COPYRIGHT_REASONS = {"RECITATION"}
_NORMAL_REASONS = {"STOP"}


def _reason_name(reason: Any) -> Optional[str]:
    if reason is None:
        return None
    name = getattr(reason, "name", None)
    if name:
        return str(name).upper()
    return str(reason).strip().upper() or None


def map_finish_reason(reason: Any) -> FinishStatus:
    """Map a platform finish reason to FinishStatus"""
    name = _reason_name(reason)
    if name is None or name in _NORMAL_REASONS:
        return FinishStatus.NORMAL
    if name in _SAFETY_REASONS:
        return FinishStatus.SAFETY_BLOCKED
    if name in _COPYRIGHT_REASONS:
        return FinishStatus.COPYRIGHT_BLOCKED
    return FinishStatus.OTHER_ABNORMAL


class GeminiLLM(BaseLLM):
    """
    Google Gemini implementation

    Recommended models:
    - gemini-2.5-pro (retrieval, primary tier)
    - gemini-2.5-flash (fallback tier, chat)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        temperature: float = 0.3,
        timeout: float = 120.0,
        **kwargs,
    ):
        super().__init__(temperature, timeout, **kwargs)
        self.api_key = api_key
        self._client = None

    @property
    def provider(self) -> str:
        return "gemini"

    def _get_client(self):
        """Create the google-genai client on first use"""
        if self._client is None:
            from google import genai
            from google.genai import types

            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._client

    def _build_config(
        self,
        tools: ToolConfig,
        system_instruction: Optional[str],
        thinking_budget: Optional[int],
    ):
        from google.genai import types

        params: Dict[str, Any] = {"temperature": self.temperature}

        gemini_tools = []
        if tools.google_search:
            gemini_tools.append(types.Tool(google_search=types.GoogleSearch()))
        if tools.url_context:
            gemini_tools.append(types.Tool(url_context=types.UrlContext()))
        if gemini_tools:
            params["tools"] = gemini_tools

        if system_instruction:
            params["system_instruction"] = system_instruction
        if thinking_budget is not None:
            params["thinking_config"] = types.ThinkingConfig(thinking_budget=thinking_budget)

        return types.GenerateContentConfig(**params)

    async def agenerate(
        self,
        prompt: str,
        *,
        model: str,
        tools: ToolConfig = NO_TOOLS,
        system_instruction: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> RetrievalResponse:
        client = self._get_client()
        config = self._build_config(tools, system_instruction, thinking_budget)

        logger.debug(f"Gemini call model={model} tools={tools.enabled}")
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        return self.parse_response(response, model=model)

    @classmethod
    def parse_response(cls, response: Any, model: str = "") -> RetrievalResponse:
        """Normalize a generate_content response into a RetrievalResponse"""
        candidates = getattr(response, "candidates", None) or []
        first = candidates[0] if candidates else None

        text = cls._extract_text(response, first)

        if first is None:
            feedback = getattr(response, "prompt_feedback", None)
            block_reason = _reason_name(getattr(feedback, "block_reason", None))
            if block_reason:
                status = FinishStatus.SAFETY_BLOCKED
            else:
                status = FinishStatus.NORMAL if text else FinishStatus.OTHER_ABNORMAL
            finish_reason = block_reason
        else:
            finish_reason = _reason_name(getattr(first, "finish_reason", None))
            status = map_finish_reason(finish_reason)

        return RetrievalResponse(
            text=text,
            finish_status=status,
            citations=cls._extract_citations(first),
            model=model,
            finish_reason=finish_reason,
            raw_response=response,
        )

    @staticmethod
    def _extract_text(response: Any, candidate: Any) -> str:
        # response.text may raise when only non-text parts are present
        try:
            text = getattr(response, "text", None)
        except ValueError:
            text = None
        if text:
            return text

        if candidate is None:
            return ""
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or []
        return "".join(
            part.text
            for part in parts
            if getattr(part, "text", None) and not getattr(part, "thought", False)
        )

    @staticmethod
    def _extract_citations(candidate: Any) -> List[Dict[str, Any]]:
        if candidate is None:
            return []
        metadata = getattr(candidate, "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        citations: List[Dict[str, Any]] = []
        for chunk in chunks:
            if isinstance(chunk, dict):
                citations.append(dict(chunk))
                continue
            model_dump = getattr(chunk, "model_dump", None)
            if callable(model_dump):
                citations.append(model_dump(exclude_none=True))
                continue
            web = getattr(chunk, "web", None)
            if web is None:
                citations.append({})
            else:
                citations.append({"web": {"title": getattr(web, "title", None), "uri": getattr(web, "uri", None)}})
        return citations

    async def aclose(self) -> None:
        client, self._client = self._client, None
        aio = getattr(client, "aio", None)
        close = getattr(aio, "aclose", None)
        if callable(close):
            await close()
