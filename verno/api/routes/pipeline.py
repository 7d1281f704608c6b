"""
Pipeline Endpoints - Run the orchestrator and watch its progress.

The pipeline runs inside the request: the response arrives when every
stage has finished (or the first one has failed). Poll
``/pipeline/progress`` from another client to follow a long run.
"""

import logging
import time

from fastapi import APIRouter, Depends

from verno.agents.orchestrator import OrchestratorAgent
from verno.core.dependencies import get_orchestrator, get_progress_indicator
from verno.models.requests import PipelineRunRequest
from verno.models.responses import (
    AgentInfo,
    AgentListResponse,
    ErrorResponse,
    PipelineRunResponse,
    ProgressResponse,
)
from verno.services.progress import ProgressIndicator, format_time
from verno.services.workflow import ContextBuilder


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pipeline"])


@router.get(
    "/agents",
    response_model=AgentListResponse,
    summary="List Agents",
    description="List every agent in the registry"
)
async def list_agents(
    orchestrator: OrchestratorAgent = Depends(get_orchestrator)
) -> AgentListResponse:
    agents = [
        AgentInfo(
            name=name,
            agent=getattr(agent, "name", type(agent).__name__),
            description=getattr(agent, "description", "")
        )
        for name, agent in orchestrator.agent_registry.get_all().items()
    ]
    return AgentListResponse(agents=agents, total=len(agents))


@router.post(
    "/pipeline/run",
    response_model=PipelineRunResponse,
    summary="Run Pipeline",
    description="Analyze a request and generate code, documentation and tests",
    responses={
        200: {"description": "Pipeline completed successfully"},
        422: {"model": ErrorResponse, "description": "Invalid request or context"},
        502: {"model": ErrorResponse, "description": "LLM provider failed"}
    }
)
async def run_pipeline(
    request: PipelineRunRequest,
    orchestrator: OrchestratorAgent = Depends(get_orchestrator)
) -> PipelineRunResponse:
    """
    Run the full pipeline for one request.

    Failures are not caught here: the error handlers turn them into the
    standard error response.
    """
    builder = (
        ContextBuilder()
        .set_workspace_root(request.workspace_root)
        .set_metadata({**request.metadata, "userRequest": request.user_request})
    )
    if request.selected_text is not None:
        builder.set_selected_text(request.selected_text)
    if request.file_path is not None:
        builder.set_file_path(request.file_path)
    if request.file_content is not None:
        builder.set_file_content(request.file_content)

    start_time = time.time()
    summary = await orchestrator.execute(builder.build())
    duration = time.time() - start_time

    logger.info(f"Pipeline finished in {duration:.2f}s for {request.workspace_root}")
    return PipelineRunResponse(success=True, summary=summary, duration_seconds=duration)


@router.get(
    "/pipeline/progress",
    response_model=ProgressResponse,
    summary="Pipeline Progress",
    description="Current stage, percentage and estimated time remaining"
)
async def get_progress(
    progress: ProgressIndicator = Depends(get_progress_indicator)
) -> ProgressResponse:
    state = progress.get_state()
    eta = state.estimated_time_remaining
    return ProgressResponse(
        current_stage=state.current_stage,
        current_agent=state.current_agent,
        total_stages=state.total_stages,
        completed_stages=state.completed_stages,
        percentage=state.percentage,
        estimated_time_remaining=eta,
        estimated_time_remaining_text=format_time(eta) if eta is not None else None,
        status=state.status.value,
        error_message=state.error_message
    )
