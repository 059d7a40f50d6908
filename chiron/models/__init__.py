"""
Text-generation backends
"""
from .base import BaseLLM
from .ollama_llm import OllamaLLM
from .openai_llm import OpenAILLM
from .llm_factory import LLMFactory

__all__ = [
    "BaseLLM",
    "OllamaLLM",
    "OpenAILLM",
    "LLMFactory"
]
