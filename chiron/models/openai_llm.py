"""
OpenAI LLM wrapper
"""
import asyncio
import logging
import os
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from chiron.config import Config
from chiron.errors import GenerationError
from chiron.models.base import BaseLLM

logger = logging.getLogger(__name__)


class OpenAILLM(BaseLLM):
    """Wrapper for OpenAI chat models"""

    def __init__(
        self,
        model: str = Config.OPENAI_MODEL,
        temperature: float = 0.3,
        api_key: Optional[str] = None,
        timeout: float = Config.LLM_TIMEOUT,
        client: Optional[OpenAI] = None,
        **kwargs
    ):
        """Initialize OpenAI LLM"""
        super().__init__(model=model, temperature=temperature, timeout=timeout, **kwargs)

        if client is None:
            self.api_key = api_key or os.getenv("OPENAI_API_KEY")
            if not self.api_key:
                raise ValueError("OpenAI API key not found.")
            client = OpenAI(api_key=self.api_key, timeout=timeout)
        self.client = client

        self.total_input_tokens = 0
        self.total_output_tokens = 0
        self.call_count = 0

    def chat_with_response(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        max_completion_tokens: int = 1000,
        **kwargs
    ) -> Dict[str, Any]:
        """Chat completion with full response metadata"""
        params = {
            "model": model or self.model,
            "messages": messages,
            "max_completion_tokens": max_completion_tokens,
            **self.kwargs,
            **kwargs
        }

        if "nano" not in params["model"].lower():
            params["temperature"] = self.temperature

        try:
            response = self.client.chat.completions.create(**params)
        except OpenAIError as e:
            raise GenerationError(f"OpenAI request failed: {e}") from e

        usage = response.usage
        if usage is not None:
            self.total_input_tokens += usage.prompt_tokens
            self.total_output_tokens += usage.completion_tokens
        self.call_count += 1

        return {
            "content": response.choices[0].message.content or "",
            "model": response.model,
            "finish_reason": response.choices[0].finish_reason
        }

    async def generate(self, model_name: Optional[str], prompt: str) -> str:
        model = self._resolve_model(model_name)
        logger.info(f"Generating with {model} ({len(prompt)} prompt chars)")
        response = await asyncio.to_thread(
            self.chat_with_response,
            [{"role": "user", "content": prompt}],
            model
        )
        return response["content"]

    def get_usage_stats(self) -> Dict[str, Any]:
        """Get cumulative usage statistics"""
        return {
            "total_calls": self.call_count,
            "total_input_tokens": self.total_input_tokens,
            "total_output_tokens": self.total_output_tokens,
            "total_tokens": self.total_input_tokens + self.total_output_tokens
        }

    def __repr__(self) -> str:
        return f"OpenAILLM(model='{self.model}', temperature={self.temperature})"
