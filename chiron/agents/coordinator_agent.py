"""
Agent Coordinator - Orchestrates one conversational turn

This coordinator:
1. Records the user input in the shared context
2. Builds a request carrying a snapshot of that context
3. Asks the registry for the best agent
4. Executes it and times the execution
5. Folds produced resources back into the shared context
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chiron.agents.base_agent import AgentContext, AgentRequest, BaseAgent, Capability
from chiron.agents.registry import AgentRegistry

NO_AGENT_MESSAGE = "No agent available to handle this request"


@dataclass
class CoordinatorResponse:
    """What the caller gets back for one turn"""
    content: str
    agent_used: str
    confidence: float
    processing_time_ms: int
    sources: List[str] = field(default_factory=list)
    has_additional_context: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "agent_used": self.agent_used,
            "confidence": self.confidence,
            "processing_time_ms": self.processing_time_ms,
            "sources": list(self.sources),
            "has_additional_context": self.has_additional_context
        }


class AgentCoordinator:
    """
    Owns the agent registry and the mutable session context.

    Turns must be serialized by the caller; the context is only mutated
    between agent executions, never while one is running.
    """

    def __init__(self, context: Optional[AgentContext] = None, registry: Optional[AgentRegistry] = None):
        """
        Initialize the coordinator.

        Args:
            context: Session context (a fresh one is created if omitted)
            registry: Agent registry (a fresh one is created if omitted)
        """
        self._context = context or AgentContext()
        self.registry = registry or AgentRegistry()
        self.logger = logging.getLogger("agent_coordinator")

        self.logger.info(
            f"Coordinator initialized: session_id={self._context.session_id or 'n/a'}, "
            f"model={self._context.model_name or 'n/a'}"
        )

    @property
    def context(self) -> AgentContext:
        return self._context

    def register_agent(self, agent: BaseAgent) -> None:
        """Register an agent with the coordinator"""
        self.registry.register(agent)

    async def process_input(self, text: str) -> CoordinatorResponse:
        """
        Route one user message through the agent system.

        Args:
            text: Raw user input

        Returns:
            CoordinatorResponse for the turn

        Raises:
            Whatever the selected agent's execute() raises; the turn is aborted.
        """
        self._context.user_input = text

        request = AgentRequest(
            input=text,
            context=self._context.snapshot(),
            parameters={}
        )

        agent = await self.registry.find_best_agent(request)
        if agent is None:
            self.logger.info("No agent matched input")
            return CoordinatorResponse(
                content=NO_AGENT_MESSAGE,
                agent_used="none",
                confidence=0.0,
                processing_time_ms=0,
                sources=[],
                has_additional_context=False
            )

        self.logger.info(f"Dispatching to '{agent.name}'")
        start_time = time.perf_counter()
        try:
            response = await agent.execute(request)
        except Exception as e:
            self.logger.error(f"Agent '{agent.name}' failed: {e}", exc_info=True)
            raise
        processing_time_ms = int((time.perf_counter() - start_time) * 1000)

        for resource in response.resources_used:
            self._context.shared_resources[resource] = response.content

        self.logger.info(
            f"Turn complete: agent={response.metadata.agent_name}, "
            f"confidence={response.metadata.confidence:.2f}, "
            f"{processing_time_ms}ms, resources={len(response.resources_used)}"
        )

        return CoordinatorResponse(
            content=response.content,
            agent_used=response.metadata.agent_name,
            confidence=response.metadata.confidence,
            processing_time_ms=processing_time_ms,
            sources=list(response.metadata.sources),
            has_additional_context=bool(response.resources_used)
        )

    async def get_all_capabilities(self) -> Dict[str, List[Capability]]:
        """Get all capabilities from registered agents"""
        all_capabilities = {}
        for name, agent in self.registry.get_agents().items():
            all_capabilities[name] = await agent.capabilities()
        return all_capabilities

    def update_context(self, updates: Dict[str, Any]) -> None:
        """Merge externally supplied values into the shared resources"""
        for key, value in updates.items():
            self._context.shared_resources[key] = value

    def record_exchange(self, role: str, text: str) -> None:
        """Append one line to the conversation history between turns"""
        self._context.conversation_history.append(f"{role}: {text}")

    async def cleanup(self) -> None:
        """Give every registered agent a chance to release resources"""
        for name, agent in self.registry.get_agents().items():
            self.logger.info(f"Cleaning up agent '{name}'")
            await agent.cleanup()
