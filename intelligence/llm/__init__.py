"""
LLM Module
Generative content client abstraction
"""
from .base import BaseLLM, FinishStatus, NO_TOOLS, RetrievalResponse, ToolConfig
from .gemini_llm import GeminiLLM, map_finish_reason
from .factory import get_llm

__all__ = [
    "BaseLLM",
    "FinishStatus",
    "NO_TOOLS",
    "RetrievalResponse",
    "ToolConfig",
    "GeminiLLM",
    "map_finish_reason",
    "get_llm",
]
