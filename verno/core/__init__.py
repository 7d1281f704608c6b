"""
Core Module - Configuration, errors and dependency injection.
"""

from verno.core.config import Settings, get_settings
from verno.core.errors import (
    AppException,
    ExecutionError,
    ValidationError,
    NotFoundError,
    AgentNotFoundError,
    ProviderError,
    PersistenceError,
)

__all__ = [
    "Settings",
    "get_settings",
    "AppException",
    "ExecutionError",
    "ValidationError",
    "NotFoundError",
    "AgentNotFoundError",
    "ProviderError",
    "PersistenceError",
]
