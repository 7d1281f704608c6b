"""
Dependencies - Dependency injection for services and components.

Provides process-wide singleton instances for the HTTP surface. The core
classes never call these getters; they receive their collaborators through
constructors, so tests and embedders can wire them directly.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from verno.agents.orchestrator import OrchestratorAgent
from verno.agents.planner import PlannerAgent
from verno.agents.registry import AgentRegistry
from verno.agents.router import RouterAgent
from verno.core.config import get_settings
from verno.services.file_changes import FileChangeTracker
from verno.services.file_service import FileService
from verno.services.llm_service import LLMConfig, LLMClient, OpenAICompatibleClient
from verno.services.progress import ProgressIndicator
from verno.services.todo_service import TodoService


logger = logging.getLogger(__name__)


class WorkspaceManager:
    """
    Keeps one TodoService per workspace root.

    TodoService loads its lists eagerly, so reusing the instance keeps the
    in-memory ledger authoritative for the whole process.
    """

    def __init__(self):
        self._todo_services: Dict[str, TodoService] = {}

    def get_todo_service(self, workspace_root: str) -> TodoService:
        """Get (or create) the TODO service of a workspace."""
        key = str(Path(workspace_root).resolve())
        service = self._todo_services.get(key)
        if service is None:
            logger.info(f"Opening TODO ledger for workspace {key}")
            service = TodoService(workspace_root)
            self._todo_services[key] = service
        return service

    def workspaces(self) -> List[str]:
        return list(self._todo_services.keys())

    def close_workspace(self, workspace_root: str) -> bool:
        """Forget a workspace. Returns True iff it was open."""
        key = str(Path(workspace_root).resolve())
        return self._todo_services.pop(key, None) is not None


# Singleton instances
_agent_registry: Optional[AgentRegistry] = None
_change_tracker: Optional[FileChangeTracker] = None
_file_service: Optional[FileService] = None
_llm_client: Optional[LLMClient] = None
_progress: Optional[ProgressIndicator] = None
_workspace_manager: Optional[WorkspaceManager] = None
_orchestrator: Optional[OrchestratorAgent] = None


def get_agent_registry() -> AgentRegistry:
    """Get the shared agent registry."""
    global _agent_registry
    if _agent_registry is None:
        _agent_registry = AgentRegistry()
    return _agent_registry


def get_change_tracker() -> FileChangeTracker:
    """Get the file change tracker shared by all writes."""
    global _change_tracker
    if _change_tracker is None:
        _change_tracker = FileChangeTracker()
    return _change_tracker


def get_file_service() -> FileService:
    """Get file service instance (records into the shared tracker)."""
    global _file_service
    if _file_service is None:
        _file_service = FileService(change_tracker=get_change_tracker())
    return _file_service


def get_llm_client() -> LLMClient:
    """Get LLM client instance configured from settings."""
    global _llm_client
    if _llm_client is None:
        settings = get_settings()
        config = LLMConfig(
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds
        )
        _llm_client = OpenAICompatibleClient(config=config)
    return _llm_client


def get_progress_indicator() -> ProgressIndicator:
    """Get the progress indicator of the pipeline."""
    global _progress
    if _progress is None:
        _progress = ProgressIndicator()
    return _progress


def get_workspace_manager() -> WorkspaceManager:
    """Get workspace manager instance."""
    global _workspace_manager
    if _workspace_manager is None:
        _workspace_manager = WorkspaceManager()
    return _workspace_manager


def get_orchestrator() -> OrchestratorAgent:
    """
    Get the orchestrator, wired to every shared collaborator.

    Building it registers the specialized agents in the shared registry,
    together with the orchestrator, planner and router themselves.
    """
    global _orchestrator
    if _orchestrator is None:
        registry = get_agent_registry()
        _orchestrator = OrchestratorAgent(
            agent_registry=registry,
            llm=get_llm_client(),
            file_service=get_file_service(),
            progress=get_progress_indicator(),
            todo_provider=get_workspace_manager().get_todo_service
        )
        registry.register("orchestrator", _orchestrator)
        registry.register("planner", PlannerAgent(registry, llm=get_llm_client()))
        registry.register("router", RouterAgent(registry))
    return _orchestrator


def reset_dependencies() -> None:
    """Drop every singleton (tests and app shutdown)."""
    global _agent_registry, _change_tracker, _file_service, _llm_client
    global _progress, _workspace_manager, _orchestrator
    _agent_registry = None
    _change_tracker = None
    _file_service = None
    _llm_client = None
    _progress = None
    _workspace_manager = None
    _orchestrator = None


async def shutdown_dependencies() -> None:
    """Close the LLM HTTP client (if one was built) and drop every singleton."""
    close = getattr(_llm_client, "close", None)
    if callable(close):
        await close()
    reset_dependencies()
