"""
Shared fixtures and test doubles.

No test touches the network: HTTP goes through MagicMock sessions and the
language model is replaced by FakeGenerator.
"""

import json
import sys
from pathlib import Path
from typing import List, Optional
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from chiron.agents.base_agent import AgentContext, AgentRequest, AgentResponse, BaseAgent, Capability
from chiron.errors import GenerationError
from chiron.models.base import BaseLLM

LONG_PARAGRAPH = (
    "Depression is a mental state of low mood and aversion to activity. It affects "
    "more than 280 million people of all ages, and it can disturb thoughts, behaviour, "
    "motivation, feelings and sense of well-being."
)

WIKIPEDIA_HTML = f"""<html>
<head><title>Depression (mood) - Wikipedia</title><script>var tracking = 1;</script></head>
<body>
<div id="mw-navigation">Main page Contents Current events</div>
<div id="mw-content-text">
  <p>{LONG_PARAGRAPH}</p>
  <p>Treatment often combines psychotherapy and social support.</p>
</div>
</body>
</html>"""

VALID_JSON_RESPONSE = json.dumps({
    "summary": "Depression is a common mood disorder.",
    "key_facts": ["Affects 280 million people", "Treatable with therapy"],
    "relevant_sections": ["Symptoms", "Treatment"],
    "therapeutic_relevance": "Helps normalize the experience of low mood."
})


class FakeGenerator(BaseLLM):
    """Returns a canned answer and records every prompt"""

    def __init__(self, response: str = VALID_JSON_RESPONSE, error: Optional[Exception] = None):
        super().__init__(model="fake-model")
        self.response = response
        self.error = error
        self.calls: List[tuple] = []

    async def generate(self, model_name, prompt):
        self.calls.append((model_name, prompt))
        if self.error is not None:
            raise self.error
        return self.response


class StaticAgent(BaseAgent):
    """Agent with a fixed score and a fixed answer"""

    def __init__(
        self,
        name: str,
        score: float,
        content: str = "static answer",
        resources_used: Optional[List[str]] = None,
        error: Optional[Exception] = None,
        mutate_context: bool = False
    ):
        super().__init__(agent_name=name)
        self.score = score
        self.content = content
        self.resources_used = resources_used or []
        self.error = error
        self.mutate_context = mutate_context
        self.executed_requests: List[AgentRequest] = []
        self.cleaned_up = False

    async def capabilities(self):
        return [Capability(name=f"{self.agent_name}_cap", description="static", input_types=["text"])]

    async def can_handle(self, request):
        return self.score

    async def execute(self, request) -> AgentResponse:
        self.executed_requests.append(request)
        if self.mutate_context:
            request.context.shared_resources["leaked"] = True
            request.context.conversation_history.append("leaked")
        if self.error is not None:
            raise self.error
        return self._create_response(
            content=self.content,
            confidence=self.score,
            sources=["static-source"],
            resources_used=self.resources_used
        )

    async def cleanup(self):
        self.cleaned_up = True


def make_response(text: str = "", status_code: int = 200, json_data=None, headers=None) -> MagicMock:
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    response.headers = headers or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Client Error")
    else:
        response.raise_for_status.return_value = None
    if json_data is not None:
        response.json.return_value = json_data
    return response


def make_request(text: str, generator: Optional[BaseLLM] = None, model_name: str = "fake-model") -> AgentRequest:
    context = AgentContext(user_input=text, session_id="test-session", model_name=model_name, generator=generator)
    return AgentRequest(input=text, context=context)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def http_session() -> MagicMock:
    session = MagicMock()
    session.get.return_value = make_response(WIKIPEDIA_HTML)
    return session
