"""
Agent Registry - holds named agents and picks the best one for a request
"""

import logging
from typing import Dict, List, Optional

from chiron.agents.base_agent import AgentConfig, AgentRequest, BaseAgent, clamp_confidence

logger = logging.getLogger(__name__)


class AgentRegistry:
    """
    Name -> agent mapping with confidence-based routing.

    Registering a name that already exists replaces the old agent in place,
    so routing order stays the order in which names were first registered.
    """

    def __init__(self, threshold: Optional[float] = None):
        self._agents: Dict[str, BaseAgent] = {}
        if threshold is None:
            threshold = AgentConfig.get_routing_config()["threshold"]
        self.threshold = threshold

    def register(self, agent: BaseAgent) -> None:
        """Register an agent under its name (last registration wins)"""
        if agent.name in self._agents:
            logger.info(f"Replacing registered agent '{agent.name}'")
        else:
            logger.info(f"Registered agent '{agent.name}'")
        self._agents[agent.name] = agent

    def unregister(self, name: str) -> Optional[BaseAgent]:
        return self._agents.pop(name, None)

    def get_agent(self, name: str) -> Optional[BaseAgent]:
        return self._agents.get(name)

    def get_agents(self) -> Dict[str, BaseAgent]:
        return dict(self._agents)

    def names(self) -> List[str]:
        return list(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, name: str) -> bool:
        return name in self._agents

    async def find_best_agent(self, request: AgentRequest) -> Optional[BaseAgent]:
        """
        Score every agent and return the best one above the threshold.

        Agents are scored sequentially in registration order. A later agent
        must score strictly higher to displace the current best, so the
        first-registered agent wins ties.

        Args:
            request: The request being routed

        Returns:
            The best agent, or None if no score is strictly above the threshold
        """
        best_agent = None
        best_score = 0.0

        for name, agent in self._agents.items():
            score = clamp_confidence(await agent.can_handle(request))
            logger.debug(f"Agent '{name}' scored {score:.2f}")
            if score > best_score:
                best_score = score
                best_agent = agent

        if best_agent is not None and best_score > self.threshold:
            logger.info(f"Selected agent '{best_agent.name}' (score={best_score:.2f})")
            return best_agent

        logger.info(f"No agent above threshold {self.threshold} (best score={best_score:.2f})")
        return None
