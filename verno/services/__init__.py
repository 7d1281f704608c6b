"""
Services Layer - Collaborators the agents and the API build on.
"""

from verno.services.file_changes import ChangeOperation, FileChange, FileChangeTracker, FileDiff
from verno.services.file_service import FileService
from verno.services.llm_service import LLMClient, LLMConfig, OpenAICompatibleClient, stream_text
from verno.services.progress import ProgressIndicator, ProgressState, ProgressStatus, format_time
from verno.services.todo_service import TodoService

__all__ = [
    "ChangeOperation",
    "FileChange",
    "FileChangeTracker",
    "FileDiff",
    "FileService",
    "LLMClient",
    "LLMConfig",
    "OpenAICompatibleClient",
    "stream_text",
    "ProgressIndicator",
    "ProgressState",
    "ProgressStatus",
    "format_time",
    "TodoService",
]
