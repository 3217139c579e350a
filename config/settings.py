"""
Settings Configuration
Pydantic-validated configuration loaded from the environment / .env
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    """Generative model configuration"""
    provider: str = Field(default="gemini", description="LLM provider (only gemini is supported)")
    gemini_api_key: Optional[str] = Field(default=None, description="Google Gemini API Key")

    primary_model: str = Field(default="gemini-2.5-pro", description="Model used first for article retrieval")
    fallback_model: str = Field(default="gemini-2.5-flash", description="Lower-latency model retried once on failure")
    chat_model: str = Field(default="gemini-2.5-flash", description="Model used for article questions")

    use_url_context: bool = Field(default=True, description="Enable the URL-context tool on the primary tier")
    thinking_budget: Optional[int] = Field(default=None, description="Thinking token budget hint for the primary tier")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    timeout: float = Field(default=120.0, description="Transport timeout per call (seconds)")

    class Config:
        env_prefix = "LLM_"


class ReaderSettings(BaseSettings):
    """Response parsing and question answering"""
    min_title_length: int = Field(default=3, description="Shorter titles are treated as missing")
    chat_max_context_chars: int = Field(default=30000, description="Article characters sent with a question")

    class Config:
        env_prefix = "READER_"


class HistorySettings(BaseSettings):
    """Reading history storage"""
    path: str = Field(default="./data/history.json", description="History JSON file")
    max_items: int = Field(default=20, description="Most-recent entries kept")

    class Config:
        env_prefix = "HISTORY_"


class Settings(BaseSettings):
    """Aggregate configuration"""

    llm: LLMSettings = Field(default_factory=LLMSettings)
    reader: ReaderSettings = Field(default_factory=ReaderSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """Load configuration from a specific .env file"""
        if env_path is None:
            # Default: config/.env
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            llm=LLMSettings(),
            reader=ReaderSettings(),
            history=HistorySettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings for entry points (CLI, web app)"""
    return Settings.load_from_env_file()


def get_llm_settings() -> LLMSettings:
    return get_settings().llm


def get_reader_settings() -> ReaderSettings:
    return get_settings().reader


def get_history_settings() -> HistorySettings:
    return get_settings().history
