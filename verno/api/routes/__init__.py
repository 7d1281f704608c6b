"""
API Routes - FastAPI route modules.
"""

from verno.api.routes.health import router as health_router
from verno.api.routes.pipeline import router as pipeline_router
from verno.api.routes.todos import router as todos_router
from verno.api.routes.changes import router as changes_router

__all__ = [
    "health_router",
    "pipeline_router",
    "todos_router",
    "changes_router",
]
