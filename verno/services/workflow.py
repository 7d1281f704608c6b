"""
Workflow Engine - Runs an ordered list of named agent steps.

RESPONSIBILITY:
Steps run strictly in order against the registry,
every step receives the same context, results come back in step order.
There is no retry, no skip and no data threading between steps; enriching
the context between stages is the orchestrator's job.

FLOW:
    Workflow(steps=[A, B, C], context)
        │
        ├── registry.require("A") ──► A.execute(context) ──► results[0]
        ├── registry.require("B") ──► B.execute(context) ──► results[1]
        └── registry.require("C") ──► AgentNotFoundError (nothing returned)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from verno.agents.base import AgentContext
from verno.agents.registry import AgentRegistry
from verno.core.errors import ValidationError
from verno.services.progress import ProgressIndicator


@dataclass
class WorkflowStep:
    """One named step of a workflow."""
    agent_name: str
    input: Dict[str, Any] = field(default_factory=dict)
    output: Optional[str] = None


@dataclass
class Workflow:
    """Ordered steps plus the context every step receives."""
    steps: List[WorkflowStep]
    context: AgentContext


class WorkflowEngine:
    """
    Executes workflows against an agent registry.

    Every step must resolve: a missing agent aborts the workflow with
    AgentNotFoundError. Agent failures propagate unchanged.
    """

    def __init__(
        self,
        agent_registry: AgentRegistry,
        progress: Optional[ProgressIndicator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            agent_registry: Registry used to resolve step agent names
            progress: Optional indicator advanced once per step
            logger: Logger for step boundaries
        """
        self.agent_registry = agent_registry
        self.progress = progress
        self.logger = logger or logging.getLogger(__name__)

    async def execute_workflow(self, workflow: Workflow) -> List[str]:
        """
        Run every step in order.

        Returns:
            One result per step, in step order

        Raises:
            AgentNotFoundError: If a step names an unregistered agent
        """
        results: List[str] = []

        if self.progress is not None:
            self.progress.initialize([step.agent_name for step in workflow.steps])

        for index, step in enumerate(workflow.steps, 1):
            try:
                agent = self.agent_registry.require(step.agent_name)

                self.logger.info(f"Workflow step {index}/{len(workflow.steps)}: {step.agent_name}")
                if self.progress is not None:
                    self.progress.start_stage(step.agent_name, agent.name)

                result = await agent.execute(workflow.context)
            except Exception as e:
                self.logger.error(f"Workflow aborted at step {index} ({step.agent_name}): {e}")
                if self.progress is not None:
                    self.progress.error(str(e))
                raise

            if self.progress is not None:
                self.progress.complete_stage()
            results.append(result)

        if self.progress is not None:
            self.progress.complete()

        return results


class ContextBuilder:
    """
    Fluent builder for AgentContext.

    Usage:
        context = (
            ContextBuilder()
            .set_workspace_root("/path/to/workspace")
            .set_metadata({"userRequest": "build a todo app"})
            .build()
        )
    """

    def __init__(self):
        self._workspace_root: Optional[str] = None
        self._selected_text: Optional[str] = None
        self._file_path: Optional[str] = None
        self._file_content: Optional[str] = None
        self._metadata: Dict[str, Any] = {}

    def set_workspace_root(self, root: str) -> "ContextBuilder":
        self._workspace_root = root
        return self

    def set_selected_text(self, text: str) -> "ContextBuilder":
        self._selected_text = text
        return self

    def set_file_path(self, file_path: str) -> "ContextBuilder":
        self._file_path = file_path
        return self

    def set_file_content(self, content: str) -> "ContextBuilder":
        self._file_content = content
        return self

    def set_metadata(self, metadata: Dict[str, Any]) -> "ContextBuilder":
        self._metadata = dict(metadata)
        return self

    def build(self) -> AgentContext:
        """
        Raises:
            ValidationError: If no workspace root was set
        """
        if not self._workspace_root:
            raise ValidationError("Workspace root is required")

        return AgentContext(
            workspace_root=self._workspace_root,
            selected_text=self._selected_text,
            file_path=self._file_path,
            file_content=self._file_content,
            metadata=dict(self._metadata),
        )
