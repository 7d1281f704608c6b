"""
Error Taxonomy - Exceptions raised by the agent pipeline.

Every exception carries a machine-readable error code and the HTTP status
the API layer maps it to, so the same classes serve in-process callers and
the status endpoints.

    AppException
    ├── ExecutionError
    │   └── ValidationError      missing workspace root / user request / input
    ├── NotFoundError            TODO list or task lookup miss
    │   └── AgentNotFoundError   required registry lookup miss
    ├── ProviderError            LLM collaborator failure
    └── PersistenceError         file read/write failure
"""

from typing import Optional


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[dict] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ExecutionError(AppException):
    """Raised when an agent cannot complete its execution."""

    def __init__(
        self,
        message: str,
        agent_name: Optional[str] = None,
        error_code: str = "EXECUTION_ERROR",
        status_code: int = 500
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status_code,
            details={"agent_name": agent_name} if agent_name else {}
        )
        self.agent_name = agent_name


class ValidationError(ExecutionError):
    """Raised when a required context field or agent input is missing."""

    def __init__(self, message: str, agent_name: Optional[str] = None):
        super().__init__(
            message=message,
            agent_name=agent_name,
            error_code="VALIDATION_ERROR",
            status_code=422
        )


class NotFoundError(AppException):
    """Raised when a TODO list or task does not exist."""

    def __init__(self, message: str, error_code: str = "NOT_FOUND", details: Optional[dict] = None):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=404,
            details=details
        )


class AgentNotFoundError(NotFoundError):
    """Raised when a required agent is not registered."""

    def __init__(self, agent_name: str):
        super().__init__(
            message=f"Agent '{agent_name}' not found in registry",
            error_code="AGENT_NOT_FOUND",
            details={"agent_name": agent_name}
        )
        self.agent_name = agent_name


class ProviderError(AppException):
    """Raised when the LLM provider call fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(
            message=message,
            error_code="PROVIDER_ERROR",
            status_code=502,
            details={"provider_status": status} if status is not None else {}
        )
        self.status = status


class PersistenceError(AppException):
    """Raised when reading or writing workspace files fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="PERSISTENCE_ERROR",
            status_code=500,
            details={"path": path} if path else {}
        )
