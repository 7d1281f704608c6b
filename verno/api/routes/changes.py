"""
Change Endpoints - Review the files agents have written.
"""

from fastapi import APIRouter, Depends, Query

from verno.core.dependencies import get_change_tracker
from verno.core.errors import NotFoundError
from verno.models.responses import (
    ChangesResponse,
    ErrorResponse,
    FileChangeResponse,
    FileDiffResponse,
)
from verno.services.file_changes import FileChangeTracker


router = APIRouter(prefix="/changes", tags=["Changes"])


@router.get(
    "",
    response_model=ChangesResponse,
    summary="List Changes",
    description="Every recorded file change, oldest first, with a text summary"
)
async def list_changes(
    tracker: FileChangeTracker = Depends(get_change_tracker)
) -> ChangesResponse:
    changes = [
        FileChangeResponse(
            file_path=change.file_path,
            operation=change.operation.value,
            timestamp=change.timestamp,
            old_content=change.old_content,
            new_content=change.new_content
        )
        for change in tracker.get_changes()
    ]
    return ChangesResponse(
        changes=changes,
        total=len(changes),
        summary=tracker.get_diff_summary()
    )


@router.get(
    "/diff",
    response_model=FileDiffResponse,
    summary="File Diff",
    description="Before/after content of the first recorded change of a file",
    responses={404: {"model": ErrorResponse, "description": "No change recorded for this path"}}
)
async def get_file_diff(
    path: str = Query(..., min_length=1),
    tracker: FileChangeTracker = Depends(get_change_tracker)
) -> FileDiffResponse:
    diff = tracker.get_diff_for_file(path)
    if diff is None:
        raise NotFoundError(
            f"No changes recorded for {path}",
            details={"path": path}
        )
    return FileDiffResponse(file_path=path, before=diff.before, after=diff.after)
