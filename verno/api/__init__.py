"""
API Layer - FastAPI routes and middleware.

A status surface over the pipeline: run it, follow its progress and
inspect the TODO ledger and file changes it leaves behind.
"""

from verno.api.routes import health_router, pipeline_router, todos_router, changes_router

__all__ = [
    "health_router",
    "pipeline_router",
    "todos_router",
    "changes_router",
]
