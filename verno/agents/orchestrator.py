"""
Orchestrator - Coordinates the content-generation pipeline.

RESPONSIBILITY:
The Orchestrator is the main entry point. It turns one user request into
generated code, documentation and tests by sequencing the specialized
agents found in the registry.

COMPLETE FLOW:
==============
1. Context with metadata["userRequest"]
        │
        ▼
2. ANALYSIS (one LLM call)
   - Response text is used verbatim as ``analysis``
        │
        ▼
3. STAGES (each gets a derived context, never the original)
   ┌──────────────────────────────────────────────────────┐
   │  a. codeGenerator       ← specification = analysis   │
   │  b. documentationAgent  ← codeAnalysis  = analysis   │
   │  c. testGenerator       ← codeAnalysis  = analysis   │
   └──────────────────────────────────────────────────────┘
   - Agent missing from the registry → stage skipped
   - Agent raises → remaining stages abort, error propagates
        │
        ▼
4. Return a human-readable summary
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from verno.agents.base import Agent, AgentContext, AgentRole, BaseAgent
from verno.agents.registry import AgentRegistry
from verno.agents.specialized import CodeGeneratorAgent, DocumentationAgent, TestGeneratorAgent
from verno.core.errors import NotFoundError, ValidationError
from verno.models.schemas import NewTask, TaskPriority, TaskStatus, TodoList
from verno.services.file_service import FileService
from verno.services.llm_service import LLMClient
from verno.services.progress import ProgressIndicator
from verno.services.todo_service import TodoService


ANALYSIS_STAGE = "analysis"
TODO_LIST_NAME = "Orchestrator"

ANALYSIS_PROMPT = """Analyze the following user request and produce a detailed
technical specification for it. Describe the components, data structures,
public API and edge cases that the implementation must cover.

Respond as JSON with the keys "summary", "components", "api" and "edgeCases".

User request:
{request}
"""


@dataclass(frozen=True)
class PipelineStage:
    """One downstream stage: which agent runs and under which metadata key it gets the analysis."""
    agent_name: str
    input_key: str
    title: str


PIPELINE_STAGES: List[PipelineStage] = [
    PipelineStage("codeGenerator", "specification", "Generate code"),
    PipelineStage("documentationAgent", "codeAnalysis", "Generate documentation"),
    PipelineStage("testGenerator", "codeAnalysis", "Generate tests"),
]


class OrchestratorAgent(BaseAgent):
    """
    Coordinates the analyze -> code -> docs -> tests pipeline.

    The orchestrator manages:
    - Registration of the specialized agents
    - Stage sequencing and derived contexts
    - Progress reporting (optional)
    - The "Orchestrator" TODO list (optional)
    """

    name = "OrchestratorAgent"
    description = "Orchestrates code, documentation and test generation for a request"
    role = AgentRole.ORCHESTRATOR

    def __init__(
        self,
        agent_registry: AgentRegistry,
        llm: LLMClient,
        file_service: FileService,
        progress: Optional[ProgressIndicator] = None,
        todo_provider: Optional[Callable[[str], TodoService]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the orchestrator and register the specialized agents.

        Args:
            agent_registry: Registry the stages are looked up in
            llm: Client for the analysis call (also given to the generators)
            file_service: Used by the generators to write files
            progress: Optional indicator advanced at stage boundaries
            todo_provider: Returns the TodoService for a workspace root
            logger: Logger shared with the specialized agents
        """
        super().__init__(logger)
        self.agent_registry = agent_registry
        self.llm = llm
        self.file_service = file_service
        self.progress = progress
        self.todo_provider = todo_provider

        self._register_specialized_agents()

    def _register_specialized_agents(self) -> None:
        self.agent_registry.register(
            "codeGenerator", CodeGeneratorAgent(self.llm, self.file_service, self.logger)
        )
        self.agent_registry.register(
            "documentationAgent", DocumentationAgent(self.llm, self.file_service, self.logger)
        )
        self.agent_registry.register(
            "testGenerator", TestGeneratorAgent(self.llm, self.file_service, self.logger)
        )

    async def execute(self, context: AgentContext) -> str:
        """
        Run the full pipeline for ``metadata["userRequest"]``.

        Args:
            context: Must carry a workspace root and a non-empty userRequest

        Returns:
            Summary of the stages that ran and the stages that were skipped

        Raises:
            ValidationError: If the workspace root or the request is missing
            Exception: The first failure of the analysis call or any stage
        """
        self.validate_context(context)

        request = context.get("userRequest")
        if not request:
            self._log("No user request found in context", logging.ERROR)
            raise ValidationError("No user request found in context", agent_name=self.name)

        self._log(f"Starting pipeline for '{str(request)[:50]}'")

        # Resolve every stage up front (optional lookup)
        planned: List[Tuple[PipelineStage, Agent]] = []
        skipped: List[str] = []
        for stage in PIPELINE_STAGES:
            agent = self.agent_registry.get(stage.agent_name)
            if agent is None:
                self._log(f"Agent '{stage.agent_name}' not registered, skipping stage", logging.WARNING)
                skipped.append(stage.agent_name)
            else:
                planned.append((stage, agent))

        todos = self._create_todo_list(context, planned)

        if self.progress is not None:
            self.progress.initialize([ANALYSIS_STAGE] + [stage.agent_name for stage, _ in planned])

        outputs: List[Tuple[str, str]] = []
        current_task: Optional[str] = None

        try:
            analysis = await self._run_analysis(request)

            for index, (stage, agent) in enumerate(planned):
                current_task = todos.tasks[index].id if todos else None
                output = await self._run_stage(context, stage, agent, analysis, current_task)
                outputs.append((stage.agent_name, output))
                current_task = None

        except Exception as e:
            self._log(f"Pipeline failed: {e}", logging.ERROR)
            if self.progress is not None:
                self.progress.error(str(e))
            if current_task is not None:
                self._set_task_status(context, current_task, TaskStatus.BLOCKED)
            raise

        if self.progress is not None:
            self.progress.complete()

        self._log("Pipeline complete")
        return self._build_summary(request, outputs, skipped)

    async def _run_analysis(self, request: str) -> str:
        """Analysis stage: one LLM call, response passed through untouched."""
        self._log("Analyzing request")
        if self.progress is not None:
            self.progress.start_stage(ANALYSIS_STAGE, self.name)

        analysis = await self.llm.generate_text(self._build_analysis_prompt(request))

        if self.progress is not None:
            self.progress.complete_stage()
        return analysis

    async def _run_stage(
        self,
        context: AgentContext,
        stage: PipelineStage,
        agent: Agent,
        analysis: str,
        task_id: Optional[str]
    ) -> str:
        self._log(f"Running stage {stage.agent_name}")
        if self.progress is not None:
            self.progress.start_stage(stage.agent_name, agent.name)
        if task_id is not None:
            self._set_task_status(context, task_id, TaskStatus.IN_PROGRESS)

        stage_context = context.with_metadata(**{stage.input_key: analysis})
        output = await agent.execute(stage_context)

        if self.progress is not None:
            self.progress.complete_stage()
        if task_id is not None:
            self._set_task_status(context, task_id, TaskStatus.COMPLETED)

        self._log(f"Stage {stage.agent_name} completed")
        return output

    def _build_analysis_prompt(self, request: str) -> str:
        return ANALYSIS_PROMPT.format(request=request)

    def _create_todo_list(
        self,
        context: AgentContext,
        planned: List[Tuple[PipelineStage, Agent]]
    ) -> Optional[TodoList]:
        """One high-priority task per stage that will run."""
        if self.todo_provider is None:
            return None

        tasks = [
            NewTask(
                title=stage.title,
                description=f"Agent: {stage.agent_name}",
                assigned_agent=stage.agent_name,
                priority=TaskPriority.HIGH,
            )
            for stage, _ in planned
        ]
        todo_list = self.todo_provider(context.workspace_root).create_todo_list(TODO_LIST_NAME, tasks)
        self._log(f"Created {len(tasks)} TODO items")
        return todo_list

    def _set_task_status(self, context: AgentContext, task_id: str, status: TaskStatus) -> None:
        """Best-effort TODO update; a list replaced mid-run is logged, not raised."""
        try:
            self.todo_provider(context.workspace_root).update_task_status(TODO_LIST_NAME, task_id, status)
        except NotFoundError as e:
            self._log(f"Could not mark task {task_id} as {status.value}: {e.message}", logging.WARNING)

    def _build_summary(
        self,
        request: str,
        outputs: List[Tuple[str, str]],
        skipped: List[str]
    ) -> str:
        sections = [f"## Pipeline Complete\nRequest: {request}"]

        for agent_name, output in outputs:
            sections.append(f"### {agent_name}\n{output}")

        ran = ", ".join(name for name, _ in outputs) or "none"
        status = f"Stages run: {ran}"
        if skipped:
            status += f"\nStages skipped: {', '.join(skipped)}"
        sections.append(status)

        return "\n\n---\n\n".join(sections)
