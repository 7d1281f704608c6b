"""
Agent Architecture for the Verno Agent Pipeline
===============================================

FLOW OVERVIEW:
--------------
1. A caller builds an AgentContext (workspace root + metadata["userRequest"])
2. OrchestratorAgent asks the LLM for an analysis of the request
3. Specialized agents run in sequence, each on a derived context:
   - CodeGeneratorAgent: specification -> index.ts, types.ts
   - DocumentationAgent: codeAnalysis -> README.md, API.md
   - TestGeneratorAgent: codeAnalysis -> index.test.ts, integration.test.ts
4. ProgressIndicator and TodoService record each stage boundary
5. The orchestrator returns a summary of what ran and what was skipped

PlannerAgent and RouterAgent are alternative entry points: the planner
turns a request into a Workflow for the WorkflowEngine, the router hands
it to the single most suitable agent.

ARCHITECTURE:
-------------
                    ┌─────────────────┐
                    │  User Request   │
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │  Orchestrator   │  ← One LLM analysis call
                    └────────┬────────┘
                             │
              ┌──────────────┼──────────────┐
              │              │              │
       ┌──────▼─────┐ ┌──────▼─────┐ ┌──────▼─────┐
       │    Code    │ │    Docs    │ │   Tests    │  ← AgentRegistry
       │ Generator  │ │   Agent    │ │ Generator  │
       └──────┬─────┘ └──────┬─────┘ └──────┬─────┘
              │              │              │
              └──────────────┼──────────────┘
                             │
                    ┌────────▼────────┐
                    │   FileService   │  ← Records into FileChangeTracker
                    └─────────────────┘

USAGE:
------
    from verno.agents import AgentContext, AgentRegistry
    from verno.agents.orchestrator import OrchestratorAgent

    orchestrator = OrchestratorAgent(
        agent_registry=AgentRegistry(),
        llm=my_llm_client,
        file_service=FileService(change_tracker=FileChangeTracker())
    )

    summary = await orchestrator.execute(AgentContext(
        workspace_root="/path/to/workspace",
        metadata={"userRequest": "Build a todo list API"}
    ))

Concrete agents are imported from their own modules; this package only
exports the agent contract so the services layer can depend on it
without importing every agent.
"""

from verno.agents.base import Agent, AgentContext, AgentRole, BaseAgent
from verno.agents.registry import AgentRegistry

__all__ = [
    "Agent",
    "AgentContext",
    "AgentRole",
    "BaseAgent",
    "AgentRegistry",
]
