"""
Base LLM
Abstract generative-content client
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum


class FinishStatus(str, Enum):
    """Why generation stopped, normalized across platform reasons"""
    NORMAL = "normal"
    SAFETY_BLOCKED = "safety_blocked"
    COPYRIGHT_BLOCKED = "copyright_blocked"
    OTHER_ABNORMAL = "other_abnormal"


@dataclass(frozen=True)
class ToolConfig:
    """Tool augmentation for a generation call"""
    google_search: bool = True
    url_context: bool = False

    @property
    def enabled(self) -> List[str]:
        names = []
        if self.google_search:
            names.append("google_search")
        if self.url_context:
            names.append("url_context")
        return names


NO_TOOLS = ToolConfig(google_search=False, url_context=False)


@dataclass
class RetrievalResponse:
    """Normalized generation result"""
    text: str
    finish_status: FinishStatus
    citations: List[Dict[str, Any]] = field(default_factory=list)  # raw grounding chunks
    model: str = ""
    finish_reason: Optional[str] = None  # platform reason name, for logs
    raw_response: Optional[Any] = None

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())


class BaseLLM(ABC):
    """
    Generative content client

    Providers implement `agenerate`; model identifiers are chosen per call so one
    client can serve every model tier.
    """

    def __init__(
        self,
        temperature: float = 0.3,
        timeout: float = 120.0,
        **kwargs,
    ):
        self.temperature = temperature
        self.timeout = timeout
        self.extra_config = kwargs

    @property
    @abstractmethod
    def provider(self) -> str:
        """Provider name"""
        pass

    @abstractmethod
    async def agenerate(
        self,
        prompt: str,
        *,
        model: str,
        tools: ToolConfig = NO_TOOLS,
        system_instruction: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> RetrievalResponse:
        """
        Run one generation call.

        Args:
            prompt: user prompt text
            model: model identifier
            tools: tool augmentation
            system_instruction: optional system instruction
            thinking_budget: optional thinking effort hint

        Returns:
            RetrievalResponse
        """
        pass

    def generate(self, prompt: str, **kwargs) -> RetrievalResponse:
        """Synchronous wrapper around `agenerate`"""
        import asyncio
        return asyncio.run(self.agenerate(prompt, **kwargs))

    async def aclose(self) -> None:
        """Release underlying client resources (no-op by default)."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider})"
