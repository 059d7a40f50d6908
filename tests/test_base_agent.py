"""
Unit tests for the shared agent data model and configuration.
"""

import importlib

import pytest

import chiron.config
from chiron.agents.base_agent import AgentConfig, AgentContext, AgentMetadata, clamp_confidence
from chiron.config import Config
from tests.conftest import StaticAgent, make_request


@pytest.mark.parametrize("value, expected", [
    (0.3, 0.3),
    (-1, 0.0),
    (2.5, 1.0),
    (float("nan"), 0.0),
    ("bad", 0.0),
])
def test_clamp_confidence(value, expected) -> None:
    assert clamp_confidence(value) == expected


def test_metadata_confidence_clamped() -> None:
    assert AgentMetadata(agent_name="x", confidence=3.0).confidence == 1.0


def test_snapshot_is_independent() -> None:
    generator = object()
    context = AgentContext(
        session_id="s",
        conversation_history=["User: hi"],
        shared_resources={"k": {"nested": [1]}},
        generator=generator
    )
    snapshot = context.snapshot()
    snapshot.conversation_history.append("extra")
    snapshot.shared_resources["k"]["nested"].append(2)

    assert context.conversation_history == ["User: hi"]
    assert context.shared_resources == {"k": {"nested": [1]}}
    assert snapshot.generator is generator


@pytest.mark.asyncio
async def test_response_dict() -> None:
    agent = StaticAgent("helper", 0.6, content="answer", resources_used=["r"])
    response = await agent.execute(make_request("q"))
    assert response.agent_name == "helper"
    assert response.to_dict()["resources_used"] == ["r"]


def test_agent_config_mappings() -> None:
    assert AgentConfig.get_routing_config() == {"threshold": 0.5}
    assert AgentConfig.get_research_confidences() == {
        "direct_url": 1.0,
        "explicit_research": 0.9,
        "suggested_research": 0.7,
        "none": 0.0
    }


def test_config_validate_flags_unknown_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Config, "LLM_PROVIDER", "bogus")
    assert any("bogus" in warning for warning in Config.validate())


def test_config_summary_mentions_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Config, "LLM_PROVIDER", "ollama")
    assert "provider=ollama" in Config.summary()


def test_default_model_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_MODEL", "llama3.2:3b")
    try:
        reloaded = importlib.reload(chiron.config)
        assert reloaded.Config.DEFAULT_MODEL == "llama3.2:3b"
    finally:
        monkeypatch.delenv("DEFAULT_MODEL")
        importlib.reload(chiron.config)
