"""
Intelligence Module
LLM client, prompt building, tiered invocation, response parsing and article Q&A
"""
from .llm import (
    BaseLLM,
    FinishStatus,
    RetrievalResponse,
    ToolConfig,
    GeminiLLM,
    get_llm,
)
from .invoker import ModelAttempt, ModelInvoker, default_attempts
from .parser import ResponseParser, parse_article_response
from .agents import ArticleChatAgent
from .reader import ArticleReader, normalize_article_url

__all__ = [
    # LLM
    "BaseLLM",
    "FinishStatus",
    "RetrievalResponse",
    "ToolConfig",
    "GeminiLLM",
    "get_llm",
    # Retrieval
    "ModelAttempt",
    "ModelInvoker",
    "default_attempts",
    "ResponseParser",
    "parse_article_response",
    # Chat
    "ArticleChatAgent",
    # Facade
    "ArticleReader",
    "normalize_article_url",
]
