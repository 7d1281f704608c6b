"""
Core Domain Schemas - TODO ledger models.

These models are persisted as JSON (one document per agent) with the
camelCase keys shown by each field alias. There is no schema version;
renaming a field is a breaking change for existing workspaces.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Status of a TODO task. Any status may move to any other."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class TaskPriority(str, Enum):
    """Priority of a TODO task."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NewTask(BaseModel):
    """A task before it is added to a list (no id or timestamps yet)."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    assigned_agent: str = Field("", alias="assignedAgent")
    status: TaskStatus = TaskStatus.PENDING
    dependencies: List[str] = Field(default_factory=list)
    priority: TaskPriority = TaskPriority.MEDIUM


class TodoTask(NewTask):
    """A tracked unit of work assigned to an agent."""
    id: str
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")
    completed_at: Optional[int] = Field(None, alias="completedAt")


class TodoList(BaseModel):
    """All tasks of one agent, persisted as ``<agentName>.json``."""
    model_config = ConfigDict(populate_by_name=True)

    agent_name: str = Field(..., alias="agentName")
    tasks: List[TodoTask] = Field(default_factory=list)
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")

    def to_document(self) -> dict:
        """JSON-ready dict with the persisted camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
