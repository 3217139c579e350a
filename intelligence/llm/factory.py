"""
LLM Factory
Create the LLM client from configuration
"""
from typing import Optional
import logging
import os

from config import LLMSettings
from utils.exceptions import ConfigurationError

from .base import BaseLLM
from .gemini_llm import GeminiLLM


logger = logging.getLogger(__name__)


def get_llm(
    settings: Optional[LLMSettings] = None,
    **kwargs,
) -> BaseLLM:
    """
    Build an LLM client.

    Args:
        settings: LLM settings (defaults to the environment-loaded settings)
        **kwargs: overrides (api_key, temperature, timeout)

    Returns:
        BaseLLM instance

    Example:
        llm = get_llm()
        llm = get_llm(api_key="test-key", timeout=30)
    """
    if settings is None:
        from config import get_llm_settings
        settings = get_llm_settings()

    provider = (settings.provider or "gemini").lower()
    if provider != "gemini":
        raise ValueError(f"Unsupported LLM provider: {provider}")

    api_key = (
        kwargs.pop("api_key", None)
        or settings.gemini_api_key
        or os.getenv("GEMINI_API_KEY")
        or os.getenv("GOOGLE_API_KEY")
    )
    if not api_key:
        raise ConfigurationError(
            "Gemini API key is not configured",
            {"env": "LLM_GEMINI_API_KEY"},
        )

    kwargs.setdefault("temperature", settings.temperature)
    kwargs.setdefault("timeout", settings.timeout)

    logger.debug(f"Creating {provider} client")
    return GeminiLLM(api_key=api_key, **kwargs)
