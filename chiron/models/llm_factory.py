"""
Factory for creating LLM instances
"""
from typing import Optional

from chiron.config import Config
from chiron.models.base import BaseLLM
from chiron.models.ollama_llm import OllamaLLM
from chiron.models.openai_llm import OpenAILLM


class LLMFactory:
    """Factory for creating LLM instances"""

    @staticmethod
    def create(
        provider: Optional[str] = None,
        model: Optional[str] = None,
        **kwargs
    ) -> BaseLLM:
        """
        Create an LLM instance

        Args:
            provider: 'ollama' or 'openai' (defaults to Config.LLM_PROVIDER)
            model: Model name (if None, uses default for provider)
            **kwargs: Additional parameters passed to LLM constructor

        Returns:
            LLM instance

        Examples:
            # Local default model
            llm = LLMFactory.create()

            # Hosted model
            llm = LLMFactory.create(provider="openai", model="gpt-4o-mini")
        """
        provider = (provider or Config.LLM_PROVIDER).lower()
        if provider == "ollama":
            return OllamaLLM(model=model or Config.DEFAULT_MODEL, **kwargs)
        elif provider == "openai":
            return OpenAILLM(model=model or Config.OPENAI_MODEL, **kwargs)
        else:
            raise ValueError(f"Unknown provider: {provider}")
