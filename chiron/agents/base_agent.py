"""
Base Agent Abstract Class
All agents in the coordination layer inherit from this class
"""

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def clamp_confidence(value: float) -> float:
    """Force a confidence score into [0.0, 1.0]"""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class Capability:
    """Static self-description of something an agent can do"""
    name: str
    description: str
    input_types: List[str] = field(default_factory=list)
    output_types: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_types": list(self.input_types),
            "output_types": list(self.output_types),
        }


@dataclass
class AgentContext:
    """
    Shared session context

    Owned by the coordinator. Agents only ever see a snapshot and hand
    writes back through AgentResponse.resources_used.
    """
    user_input: str = ""
    session_id: str = ""
    therapeutic_phase: str = "assessment"
    session_count: int = 0
    conversation_history: List[str] = field(default_factory=list)
    shared_resources: Dict[str, Any] = field(default_factory=dict)
    model_name: str = ""
    generator: Any = None

    def snapshot(self) -> "AgentContext":
        """Copy of the context; the generator client is shared, not copied"""
        return AgentContext(
            user_input=self.user_input,
            session_id=self.session_id,
            therapeutic_phase=self.therapeutic_phase,
            session_count=self.session_count,
            conversation_history=list(self.conversation_history),
            shared_resources=copy.deepcopy(self.shared_resources),
            model_name=self.model_name,
            generator=self.generator,
        )


@dataclass
class AgentRequest:
    """One request per coordinator turn"""
    input: str
    context: AgentContext
    parameters: Dict[str, str] = field(default_factory=dict)


@dataclass
class AgentMetadata:
    """Metadata about an agent response"""
    agent_name: str
    confidence: float = 0.0
    processing_time_ms: int = 0
    sources: List[str] = field(default_factory=list)
    content_type: str = "text"  # "text", "markdown", "json"

    def __post_init__(self):
        self.confidence = clamp_confidence(self.confidence)


@dataclass
class AgentResponse:
    """
    Standardized response format for all agents
    Ensures consistency across the coordination layer
    """
    content: str
    metadata: AgentMetadata
    resources_used: List[str] = field(default_factory=list)

    @property
    def agent_name(self) -> str:
        return self.metadata.agent_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert response to dictionary"""
        return {
            "content": self.content,
            "metadata": {
                "agent_name": self.metadata.agent_name,
                "confidence": self.metadata.confidence,
                "processing_time_ms": self.metadata.processing_time_ms,
                "sources": list(self.metadata.sources),
                "content_type": self.metadata.content_type,
            },
            "resources_used": list(self.resources_used),
        }


class BaseAgent(ABC):
    """
    Abstract base class for all agents in Chiron

    Provides:
    - Standardized interface (capabilities, can_handle, execute, cleanup)
    - Logging capabilities
    - Response formatting
    """

    def __init__(self, agent_name: str, config: Optional[Dict[str, Any]] = None):
        """
        Initialize base agent

        Args:
            agent_name: Unique identifier for the agent, used as registry key
            config: Optional configuration dictionary
        """
        self.agent_name = agent_name
        self.config = config or {}
        self.logger = logging.getLogger(agent_name)

        self.logger.info(f"Initialized {agent_name}")

    @property
    def name(self) -> str:
        return self.agent_name

    @abstractmethod
    async def capabilities(self) -> List[Capability]:
        """Advertise what this agent can do. Must not have side effects."""
        pass

    @abstractmethod
    async def can_handle(self, request: AgentRequest) -> float:
        """
        Score how well this agent fits the request

        Runs against every registered agent on every turn, so it must be
        cheap and must not touch the network.

        Returns:
            float in [0.0, 1.0]; 0.0 means "cannot handle"
        """
        pass

    @abstractmethod
    async def execute(self, request: AgentRequest) -> AgentResponse:
        """
        Handle the request

        Failures the user can act on are returned as content with
        confidence 0 rather than raised.
        """
        pass

    async def cleanup(self) -> None:
        """Release resources held by the agent"""
        return None

    def _create_response(
        self,
        content: str,
        confidence: float,
        processing_time_ms: int = 0,
        sources: Optional[List[str]] = None,
        content_type: str = "text",
        resources_used: Optional[List[str]] = None
    ) -> AgentResponse:
        """
        Helper method to create standardized responses

        Args:
            content: Text shown to the user
            confidence: Self-reported confidence, clamped to [0, 1]
            processing_time_ms: Time spent in the agent
            sources: URLs or source names backing the content
            content_type: "text", "markdown" or "json"
            resources_used: Shared-resource keys the coordinator should fill

        Returns:
            AgentResponse: Standardized response object
        """
        return AgentResponse(
            content=content,
            metadata=AgentMetadata(
                agent_name=self.agent_name,
                confidence=confidence,
                processing_time_ms=processing_time_ms,
                sources=sources or [],
                content_type=content_type
            ),
            resources_used=resources_used or []
        )

    def _error_response(self, message: str, processing_time_ms: int = 0) -> AgentResponse:
        """User-visible failure: confidence 0, no sources, no resources"""
        return self._create_response(
            content=message,
            confidence=0.0,
            processing_time_ms=processing_time_ms
        )

    def _log_processing(self, query: str):
        """Log the start of processing"""
        self.logger.info(f"Processing query: {query[:100]}...")

    def _log_success(self, message: str = "Processing completed successfully"):
        """Log successful processing"""
        self.logger.info(message)

    def _log_error(self, error: Exception):
        """Log errors during processing"""
        self.logger.error(f"Error in {self.agent_name}: {str(error)}", exc_info=True)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.agent_name}')"


class AgentConfig:
    """
    Configuration helper for agents
    Centralizes routing and confidence constants
    """

    # Registry routing
    CONFIDENCE_THRESHOLD = 0.5  # best score must be strictly above this

    # Research agent intent -> confidence mapping
    DIRECT_URL_CONFIDENCE = 1.0
    EXPLICIT_RESEARCH_CONFIDENCE = 0.9
    SUGGESTED_RESEARCH_CONFIDENCE = 0.7
    NO_INTENT_CONFIDENCE = 0.0

    # Confidence reported on a completed fetch + summarize
    RESEARCH_RESULT_CONFIDENCE = 0.8

    # Topic used when an explicit research request carries no terms
    DEFAULT_RESEARCH_TOPIC = "mental health"

    @classmethod
    def get_routing_config(cls) -> Dict[str, Any]:
        """Get registry routing configuration"""
        return {
            "threshold": cls.CONFIDENCE_THRESHOLD
        }

    @classmethod
    def get_research_confidences(cls) -> Dict[str, float]:
        """Get research intent confidence mapping"""
        return {
            "direct_url": cls.DIRECT_URL_CONFIDENCE,
            "explicit_research": cls.EXPLICIT_RESEARCH_CONFIDENCE,
            "suggested_research": cls.SUGGESTED_RESEARCH_CONFIDENCE,
            "none": cls.NO_INTENT_CONFIDENCE
        }
