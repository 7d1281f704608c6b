"""
API Response Models - Pydantic models for API responses.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    environment: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class AgentInfo(BaseModel):
    """A registered agent."""
    name: str
    agent: str
    description: str = ""


class AgentListResponse(BaseModel):
    """All agents in the registry, in registration order."""
    agents: List[AgentInfo] = Field(default_factory=list)
    total: int = 0


class PipelineRunResponse(BaseModel):
    """
    Response from a pipeline run.

    Example:
        {
            "success": true,
            "summary": "## Pipeline Complete\\nRequest: ..."
        }
    """
    success: bool
    summary: Optional[str] = None
    duration_seconds: Optional[float] = None


class ProgressResponse(BaseModel):
    """Snapshot of the pipeline progress indicator."""
    current_stage: str
    current_agent: str
    total_stages: int
    completed_stages: int
    percentage: int
    estimated_time_remaining: Optional[int] = None
    estimated_time_remaining_text: Optional[str] = None
    status: str
    error_message: Optional[str] = None


class TodoListsResponse(BaseModel):
    """
    All TODO lists of a workspace plus the markdown summary.

    Lists are returned in their persisted camelCase form.
    """
    workspace_root: str
    lists: List[Dict[str, Any]] = Field(default_factory=list)
    summary: str


class FileChangeResponse(BaseModel):
    """One recorded file change."""
    file_path: str
    operation: str
    timestamp: int
    old_content: Optional[str] = None
    new_content: Optional[str] = None


class ChangesResponse(BaseModel):
    """Recorded file changes, oldest first."""
    changes: List[FileChangeResponse] = Field(default_factory=list)
    total: int = 0
    summary: str = ""


class FileDiffResponse(BaseModel):
    """Before/after content of the first recorded change of a file."""
    file_path: str
    before: str
    after: str


class ErrorResponse(BaseModel):
    """
    Standard error response.

    Example:
        {
            "success": false,
            "error": "Agent 'codeGenerator' not found in registry",
            "error_code": "AGENT_NOT_FOUND",
            "details": {...}
        }
    """
    success: bool = False
    error: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
