"""
Data Models
"""
from .schemas import (
    DEFAULT_AUTHOR,
    DEFAULT_SITE_NAME,
    Source,
    ArticleRecord,
    HistoryEntry,
)

__all__ = [
    "DEFAULT_AUTHOR",
    "DEFAULT_SITE_NAME",
    "Source",
    "ArticleRecord",
    "HistoryEntry",
]
