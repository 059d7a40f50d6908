"""
Agent coordination layer for Chiron

- Base agent contract and shared data model (requests, responses, context)
- Registry: confidence-based routing between named agents
- Coordinator: runs one conversational turn and owns the session context
- Research Agent: intent detection + whitelisted fetch + LLM summary

Flow:
    User Text → Coordinator → Registry (can_handle on every agent) → best agent → Response
"""

from .base_agent import (
    BaseAgent,
    AgentConfig,
    AgentContext,
    AgentMetadata,
    AgentRequest,
    AgentResponse,
    Capability,
)
from .registry import AgentRegistry
from .coordinator_agent import AgentCoordinator, CoordinatorResponse
from .research_agent import ResearchAgent

__all__ = [
    "BaseAgent",
    "AgentConfig",
    "AgentContext",
    "AgentMetadata",
    "AgentRequest",
    "AgentResponse",
    "Capability",
    "AgentRegistry",
    "AgentCoordinator",
    "CoordinatorResponse",
    "ResearchAgent",
]
