"""
API Request Models - Pydantic models for request validation.
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from verno.models.schemas import TaskStatus


class PipelineRunRequest(BaseModel):
    """
    Request to run the full generation pipeline.

    Example:
        {
            "workspace_root": "/home/me/project",
            "user_request": "Build a todo list API"
        }
    """
    workspace_root: str = Field(
        ...,
        min_length=1,
        description="Absolute path of the workspace the pipeline writes into"
    )
    user_request: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="What the user wants built",
        examples=["Build a REST API for managing todo items"]
    )
    selected_text: Optional[str] = Field(
        default=None,
        description="Text selected in the editor, if any"
    )
    file_path: Optional[str] = Field(
        default=None,
        description="Path of the active file"
    )
    file_content: Optional[str] = Field(
        default=None,
        description="Content of the active file"
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Extra metadata merged into the pipeline context"
    )

    @field_validator("user_request")
    @classmethod
    def validate_user_request(cls, v: str) -> str:
        """Reject whitespace-only requests."""
        v = v.strip()
        if not v:
            raise ValueError("user_request must not be blank")
        return v


class TaskStatusUpdateRequest(BaseModel):
    """
    Request to move a TODO task to a new status.

    Example:
        {
            "workspace_root": "/home/me/project",
            "status": "completed"
        }
    """
    workspace_root: str = Field(..., min_length=1)
    status: TaskStatus

    @field_validator("workspace_root")
    @classmethod
    def validate_workspace_root(cls, v: str) -> str:
        return check_workspace_root(v)


def check_workspace_root(path: str) -> str:
    """
    Accept only absolute paths of existing directories.

    Raises:
        ValueError: If ``path`` is relative or not a directory
    """
    if not os.path.isabs(path):
        raise ValueError("workspace_root must be an absolute path")
    if not os.path.isdir(path):
        raise ValueError("workspace_root must be an existing directory")
    return path
