"""
TODO Endpoints - Read and update the per-agent TODO ledger of a workspace.
"""

from fastapi import APIRouter, Depends, Query

from verno.core.dependencies import WorkspaceManager, get_workspace_manager
from verno.core.errors import NotFoundError, ValidationError
from verno.models.requests import TaskStatusUpdateRequest, check_workspace_root
from verno.models.responses import ErrorResponse, TodoListsResponse


router = APIRouter(prefix="/todos", tags=["TODOs"])


def workspace_root_param(workspace_root: str = Query(..., min_length=1)) -> str:
    """Query parameter naming an existing workspace; reads never create it."""
    try:
        return check_workspace_root(workspace_root)
    except ValueError as e:
        raise ValidationError(str(e)) from e


@router.get(
    "",
    response_model=TodoListsResponse,
    summary="List TODO Lists",
    description="All TODO lists of a workspace with a markdown summary"
)
async def list_todos(
    workspace_root: str = Depends(workspace_root_param),
    workspaces: WorkspaceManager = Depends(get_workspace_manager)
) -> TodoListsResponse:
    service = workspaces.get_todo_service(workspace_root)
    return TodoListsResponse(
        workspace_root=workspace_root,
        lists=[todo_list.to_document() for todo_list in service.get_all_todo_lists()],
        summary=service.get_todo_summary()
    )


@router.get(
    "/{agent_name}",
    summary="Get TODO List",
    description="The TODO list of one agent, in its persisted form",
    responses={404: {"model": ErrorResponse, "description": "No list for this agent"}}
)
async def get_todo_list(
    agent_name: str,
    workspace_root: str = Depends(workspace_root_param),
    workspaces: WorkspaceManager = Depends(get_workspace_manager)
) -> dict:
    todo_list = workspaces.get_todo_service(workspace_root).get_todo_list(agent_name)
    if todo_list is None:
        raise NotFoundError(
            f"TODO list for agent {agent_name} not found",
            details={"agent_name": agent_name}
        )
    return todo_list.to_document()


@router.patch(
    "/{agent_name}/tasks/{task_id}",
    summary="Update Task Status",
    description="Move a task to a new status",
    responses={404: {"model": ErrorResponse, "description": "List or task not found"}}
)
async def update_task_status(
    agent_name: str,
    task_id: str,
    request: TaskStatusUpdateRequest,
    workspaces: WorkspaceManager = Depends(get_workspace_manager)
) -> dict:
    service = workspaces.get_todo_service(request.workspace_root)
    task = service.update_task_status(agent_name, task_id, request.status)
    return task.model_dump(mode="json", by_alias=True, exclude_none=True)
