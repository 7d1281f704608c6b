"""
Base classes for the agent architecture.

Every agent exposes the same small contract - a name, a description and an
async ``execute(context) -> str`` - so the registry, the workflow engine and
the orchestrator can drive any of them interchangeably.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from verno.core.errors import ValidationError


class AgentRole(Enum):
    """Tags the variant of each agent in the system."""
    ORCHESTRATOR = "orchestrator"
    PLANNER = "planner"
    ROUTER = "router"
    CODE_GENERATOR = "code_generator"
    DOCUMENTATION = "documentation"
    TEST_GENERATOR = "test_generator"


@dataclass(frozen=True)
class AgentContext:
    """
    Input envelope threaded through a pipeline.

    Contexts are never modified in place. A stage that needs to hand data
    to the next one builds a new context with ``with_metadata``:

        derived = context.with_metadata(specification=analysis)

    ``metadata`` is the only channel for inter-stage data
    (``userRequest``, ``specification``, ``codeAnalysis``, ...).
    """
    workspace_root: str
    selected_text: Optional[str] = None
    file_path: Optional[str] = None
    file_content: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_metadata(self, **updates: Any) -> "AgentContext":
        """Return a shallow copy whose metadata is merged with ``updates``."""
        return replace(self, metadata={**self.metadata, **updates})

    def get(self, key: str, default: Any = None) -> Any:
        """Read a metadata value."""
        return self.metadata.get(key, default)


@runtime_checkable
class Agent(Protocol):
    """Capability shared by every agent variant."""

    name: str
    description: str

    async def execute(self, context: AgentContext) -> str:
        ...


class BaseAgent(ABC):
    """
    Base class for all agents.

    Agents receive their collaborators (logger, LLM client, file service)
    through the constructor; nothing is looked up globally.

    - OrchestratorAgent: Drives the analyze -> code -> docs -> tests pipeline
    - PlannerAgent: Turns a request into an ordered plan of agents
    - RouterAgent: Sends a request to the single most suitable agent
    - CodeGenerator / Documentation / TestGenerator: Write files from analysis
    """

    name: str = "BaseAgent"
    description: str = ""
    role: AgentRole

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__module__)

    @abstractmethod
    async def execute(self, context: AgentContext) -> str:
        """
        Execute the agent's logic.

        Args:
            context: Pipeline context with accumulated metadata

        Returns:
            Human-readable result text

        Raises:
            ExecutionError: If the agent cannot complete its work
        """
        pass

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    def validate_context(self, context: AgentContext) -> None:
        """Raise ValidationError when the context has no workspace root."""
        if not context.workspace_root:
            self._log("Missing workspace_root in context", logging.ERROR)
            raise ValidationError(
                f"Invalid context provided to {self.name}: workspace root is required",
                agent_name=self.name,
            )
