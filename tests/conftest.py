"""Shared test fixtures for the Verno test suite."""

from typing import Any, Dict, List, Optional

import pytest

from verno.agents.base import AgentContext
from verno.agents.registry import AgentRegistry
from verno.services.file_changes import FileChangeTracker
from verno.services.file_service import FileService


class FakeLLM:
    """LLM stand-in that records prompts and answers from a script."""

    def __init__(self, responses: Optional[List[str]] = None, default: str = "generated"):
        self.responses = list(responses or [])
        self.default = default
        self.prompts: List[str] = []

    async def generate_text(self, prompt: str, options: Optional[Dict[str, Any]] = None) -> str:
        self.prompts.append(prompt)
        if self.responses:
            return self.responses.pop(0)
        return self.default


class RecordingAgent:
    """Agent that records every context it receives."""

    def __init__(self, name: str, result: Optional[str] = None, error: Optional[Exception] = None):
        self.name = name
        self.description = f"{name} for tests"
        self.result = result if result is not None else f"{name} done"
        self.error = error
        self.contexts: List[AgentContext] = []

    async def execute(self, context: AgentContext) -> str:
        self.contexts.append(context)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def workspace(tmp_path):
    """An empty workspace root."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def context(workspace):
    """Context with a workspace root and a user request."""
    return AgentContext(
        workspace_root=str(workspace),
        metadata={"userRequest": "Build a todo list API"},
    )


@pytest.fixture
def registry():
    return AgentRegistry()


@pytest.fixture
def fake_llm():
    return FakeLLM(default="analysis text")


@pytest.fixture
def tracker():
    return FileChangeTracker()


@pytest.fixture
def file_service(tracker):
    return FileService(change_tracker=tracker)


class FakeClock:
    """Manually advanced clock (seconds for progress, ms for TODOs)."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, delta: float) -> None:
        self.now += delta


@pytest.fixture
def clock():
    return FakeClock(1000.0)
