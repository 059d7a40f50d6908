"""
Ollama LLM wrapper (local models over the /api/generate endpoint)
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from chiron.config import Config
from chiron.errors import GenerationError
from chiron.models.base import BaseLLM

logger = logging.getLogger(__name__)


class OllamaLLM(BaseLLM):
    """Wrapper for models served by a local Ollama instance"""

    def __init__(
        self,
        model: str = Config.DEFAULT_MODEL,
        host: str = Config.OLLAMA_HOST,
        temperature: float = 0.3,
        timeout: float = Config.LLM_TIMEOUT,
        session: Optional[requests.Session] = None,
        **kwargs
    ):
        super().__init__(model=model, temperature=temperature, timeout=timeout, **kwargs)
        self.host = host.rstrip("/")
        self.session = session or requests.Session()
        self.call_count = 0

    @property
    def generate_url(self) -> str:
        return f"{self.host}/api/generate"

    def _generate_sync(self, model: str, prompt: str) -> str:
        payload: Dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": self.temperature, **self.kwargs},
        }
        try:
            response = self.session.post(self.generate_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise GenerationError(f"Ollama request failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Ollama returned invalid JSON: {e}") from e

        if "response" not in data:
            raise GenerationError(f"Ollama response missing 'response' field: {data.get('error', data)}")

        self.call_count += 1
        return data["response"]

    async def generate(self, model_name: Optional[str], prompt: str) -> str:
        model = self._resolve_model(model_name)
        logger.info(f"Generating with {model} ({len(prompt)} prompt chars)")
        return await asyncio.to_thread(self._generate_sync, model, prompt)

    def __repr__(self) -> str:
        return f"OllamaLLM(model='{self.model}', host='{self.host}')"
