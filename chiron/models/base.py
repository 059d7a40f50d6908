"""
Base class for all text-generation backends
"""
from abc import ABC, abstractmethod
from typing import Optional


class BaseLLM(ABC):
    """Abstract base class for LLM providers"""

    def __init__(self, model: str, temperature: float = 0.3, timeout: Optional[float] = None, **kwargs):
        """
        Initialize LLM

        Args:
            model: Default model identifier (e.g., 'gemma3n:e4b')
            temperature: Sampling temperature (0.0 to 1.0)
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific parameters
        """
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.kwargs = kwargs

    @abstractmethod
    async def generate(self, model_name: Optional[str], prompt: str) -> str:
        """
        Single-prompt completion

        Args:
            model_name: Model to use; falls back to the default model when empty
            prompt: Full prompt text

        Returns:
            Response text as string

        Raises:
            GenerationError: transport, HTTP or protocol failure
        """
        pass

    def _resolve_model(self, model_name: Optional[str]) -> str:
        return model_name or self.model

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model='{self.model}', temperature={self.temperature})"
