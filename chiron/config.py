"""
Configuration management for Chiron
"""
import os
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Central configuration"""

    # Text generation backend ("ollama" or "openai")
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "ollama").lower()

    # Ollama
    OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
    DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "gemma3n:e4b")

    # OpenAI
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # Timeouts (seconds)
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))
    LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "120"))

    # Research fetching
    USER_AGENT = "Chiron Mental Health Research Agent/1.0"
    WHITELISTED_DOMAINS = (
        "en.wikipedia.org",
        "www.psychologytoday.com",
        "psychologytoday.com",
    )
    WIKIPEDIA_BASE_URL = "https://en.wikipedia.org/wiki/"
    WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
    WIKIPEDIA_USE_SEARCH_API = _env_bool("WIKIPEDIA_USE_SEARCH_API", False)
    WIKIPEDIA_SEARCH_LIMIT = 3

    # Extraction
    MIN_CONTENT_LENGTH = 100  # characters for a region to count as substantial
    MARKDOWN_WRAP_WIDTH = 120
    MAX_CONTENT_CHARS = int(os.getenv("MAX_CONTENT_CHARS", "12000"))

    @classmethod
    def validate(cls) -> List[str]:
        """Check configuration, returning a list of warnings"""
        warnings = []
        if cls.LLM_PROVIDER not in ("ollama", "openai"):
            warnings.append(f"Unknown LLM_PROVIDER '{cls.LLM_PROVIDER}', expected 'ollama' or 'openai'")
        if cls.LLM_PROVIDER == "openai" and not cls.OPENAI_API_KEY:
            warnings.append("OPENAI_API_KEY not set in .env file")
        if cls.HTTP_TIMEOUT <= 0:
            warnings.append(f"HTTP_TIMEOUT must be positive, got {cls.HTTP_TIMEOUT}")
        return warnings

    @classmethod
    def summary(cls) -> str:
        model = cls.OPENAI_MODEL if cls.LLM_PROVIDER == "openai" else cls.DEFAULT_MODEL
        return (
            f"provider={cls.LLM_PROVIDER}, model={model}, "
            f"ollama_host={cls.OLLAMA_HOST}, "
            f"wikipedia_search_api={cls.WIKIPEDIA_USE_SEARCH_API}"
        )
