"""
Data Models for the Verno Agent Pipeline
========================================

Organized into three categories:
- schemas: TODO ledger models persisted to the workspace
- requests: API request validation models
- responses: API response models
"""

from verno.models.schemas import (
    TaskStatus,
    TaskPriority,
    NewTask,
    TodoTask,
    TodoList,
)

from verno.models.requests import (
    PipelineRunRequest,
    TaskStatusUpdateRequest,
)

from verno.models.responses import (
    HealthResponse,
    AgentInfo,
    AgentListResponse,
    PipelineRunResponse,
    ProgressResponse,
    TodoListsResponse,
    FileChangeResponse,
    ChangesResponse,
    FileDiffResponse,
    ErrorResponse,
)

__all__ = [
    # Schemas
    "TaskStatus",
    "TaskPriority",
    "NewTask",
    "TodoTask",
    "TodoList",
    # Requests
    "PipelineRunRequest",
    "TaskStatusUpdateRequest",
    # Responses
    "HealthResponse",
    "AgentInfo",
    "AgentListResponse",
    "PipelineRunResponse",
    "ProgressResponse",
    "TodoListsResponse",
    "FileChangeResponse",
    "ChangesResponse",
    "FileDiffResponse",
    "ErrorResponse",
]
