"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Redis
    REDIS_URL: str = "redis://localhost:6379"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Groq (OpenAI-compatible completions)
    GROQ_API_KEY: str = ""
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.1-70b-versatile"
    GROQ_TEMPERATURE: float = 0.7
    GROQ_MAX_TOKENS: int = 2000

    # Retention
    CONTENT_TTL_SECONDS: int = 3600 * 24 * 7
    ANALYSIS_TTL_SECONDS: int = 3600 * 24 * 30
    SAVED_RESULT_TTL_SECONDS: int = 3600 * 24 * 90
    SAVED_RESULTS_LIMIT: int = 100

    # Extraction
    WEB_CONTENT_MAX_CHARS: int = 5000
    WEB_FETCH_TIMEOUT_SECONDS: float = 15.0
    ANALYSIS_PROMPT_MAX_CHARS: int = 4000

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()


def groq_api_key() -> str:
    """Return the configured Groq API key, or an empty string when unset."""
    api_key = (settings.GROQ_API_KEY or "").strip()
    if not api_key or api_key.startswith("your_"):
        return ""
    return api_key
