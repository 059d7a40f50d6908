"""
Unit tests for turn orchestration in the coordinator.
"""

import pytest

from chiron.agents.base_agent import AgentContext, Capability
from chiron.agents.coordinator_agent import NO_AGENT_MESSAGE, AgentCoordinator, CoordinatorResponse
from tests.conftest import StaticAgent


@pytest.fixture
def coordinator() -> AgentCoordinator:
    return AgentCoordinator(context=AgentContext(session_id="s-1", model_name="fake-model"))


@pytest.mark.asyncio
async def test_no_agent_is_a_defined_response(coordinator: AgentCoordinator) -> None:
    coordinator.register_agent(StaticAgent("weak", 0.2))
    result = await coordinator.process_input("hello")

    assert result.content == NO_AGENT_MESSAGE
    assert result.agent_used == "none"
    assert result.confidence == 0.0
    assert result.processing_time_ms == 0
    assert result.sources == []
    assert result.has_additional_context is False
    assert coordinator.context.user_input == "hello"


@pytest.mark.asyncio
async def test_resources_merged_into_context(coordinator: AgentCoordinator) -> None:
    agent = StaticAgent("helper", 0.9, content="found it", resources_used=["k1", "k2"])
    coordinator.register_agent(agent)

    result = await coordinator.process_input("look")

    assert result.content == "found it"
    assert result.agent_used == "helper"
    assert result.confidence == 0.9
    assert result.sources == ["static-source"]
    assert result.has_additional_context is True
    assert result.processing_time_ms >= 0
    assert coordinator.context.shared_resources == {"k1": "found it", "k2": "found it"}


@pytest.mark.asyncio
async def test_later_turn_overwrites_resource(coordinator: AgentCoordinator) -> None:
    agent = StaticAgent("helper", 0.9, content="first", resources_used=["k"])
    coordinator.register_agent(agent)
    await coordinator.process_input("one")
    agent.content = "second"
    await coordinator.process_input("two")
    assert coordinator.context.shared_resources["k"] == "second"


@pytest.mark.asyncio
async def test_no_resources_means_no_additional_context(coordinator: AgentCoordinator) -> None:
    coordinator.register_agent(StaticAgent("helper", 0.9))
    result = await coordinator.process_input("hi")
    assert result.has_additional_context is False
    assert coordinator.context.shared_resources == {}


@pytest.mark.asyncio
async def test_agent_receives_snapshot(coordinator: AgentCoordinator) -> None:
    coordinator.update_context({"existing": 1})
    agent = StaticAgent("mutator", 0.9, mutate_context=True)
    coordinator.register_agent(agent)

    await coordinator.process_input("hi")

    request = agent.executed_requests[0]
    assert request.input == "hi"
    assert request.parameters == {}
    assert request.context.user_input == "hi"
    assert request.context.shared_resources["existing"] == 1
    assert "leaked" not in coordinator.context.shared_resources
    assert "leaked" not in coordinator.context.conversation_history


@pytest.mark.asyncio
async def test_execute_errors_propagate(coordinator: AgentCoordinator) -> None:
    coordinator.register_agent(StaticAgent("broken", 0.9, error=RuntimeError("boom")))
    with pytest.raises(RuntimeError, match="boom"):
        await coordinator.process_input("hi")


@pytest.mark.asyncio
async def test_get_all_capabilities(coordinator: AgentCoordinator) -> None:
    coordinator.register_agent(StaticAgent("a", 0.1))
    coordinator.register_agent(StaticAgent("b", 0.1))
    capabilities = await coordinator.get_all_capabilities()
    assert set(capabilities) == {"a", "b"}
    assert capabilities["a"] == [Capability(name="a_cap", description="static", input_types=["text"])]


def test_update_context_merges(coordinator: AgentCoordinator) -> None:
    coordinator.update_context({"a": 1, "b": {"nested": True}})
    coordinator.update_context({"a": 2})
    assert coordinator.context.shared_resources == {"a": 2, "b": {"nested": True}}


def test_record_exchange(coordinator: AgentCoordinator) -> None:
    coordinator.record_exchange("User", "hello")
    coordinator.record_exchange("Assistant", "hi there")
    assert coordinator.context.conversation_history == ["User: hello", "Assistant: hi there"]


@pytest.mark.asyncio
async def test_cleanup_reaches_every_agent(coordinator: AgentCoordinator) -> None:
    agents = [StaticAgent("a", 0.1), StaticAgent("b", 0.1)]
    for agent in agents:
        coordinator.register_agent(agent)
    await coordinator.cleanup()
    assert all(agent.cleaned_up for agent in agents)


def test_response_to_dict() -> None:
    response = CoordinatorResponse("c", "research", 0.8, 12, ["u"], True)
    assert response.to_dict() == {
        "content": "c",
        "agent_used": "research",
        "confidence": 0.8,
        "processing_time_ms": 12,
        "sources": ["u"],
        "has_additional_context": True,
    }
