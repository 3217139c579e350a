"""
Configuration Management Module
"""
from .settings import (
    Settings,
    LLMSettings,
    ReaderSettings,
    HistorySettings,
    get_settings,
    get_llm_settings,
    get_reader_settings,
    get_history_settings,
)

__all__ = [
    "Settings",
    "LLMSettings",
    "ReaderSettings",
    "HistorySettings",
    "get_settings",
    "get_llm_settings",
    "get_reader_settings",
    "get_history_settings",
]
