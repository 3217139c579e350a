"""
Utils Module
Logging and error types
"""
from .logger import configure_logging, setup_logger, get_logger
from .exceptions import (
    ReaderError,
    ConfigurationError,
    InvalidURLError,
    LLMError,
    GenerationFailure,
    ContentBlocked,
    AnswerFailure,
    StorageError,
    HistoryError,
)

__all__ = [
    "configure_logging",
    "setup_logger",
    "get_logger",
    "ReaderError",
    "ConfigurationError",
    "InvalidURLError",
    "LLMError",
    "GenerationFailure",
    "ContentBlocked",
    "AnswerFailure",
    "StorageError",
    "HistoryError",
]
