"""
Storage Module
Local reading history
"""
from .history import ReadingHistoryStore

__all__ = [
    "ReadingHistoryStore",
]
