"""
Agents Module
"""
from .chat_agent import ArticleChatAgent

__all__ = [
    "ArticleChatAgent",
]
