"""
TODO Service - Persisted per-agent task ledger.

RESPONSIBILITY:
Owns one TodoList per agent name and keeps it on disk so work can be
audited or resumed.

PERSISTENCE:
    <workspace>/.verno/todos/<agentName>.json   (pretty-printed JSON)

- Loaded eagerly at construction, best effort: an unreadable directory or
  file is logged and treated as absent.
- Every mutating call saves immediately (write-through, no batching).
  The directory is created on the first save, never by reads.
- A failed save is logged and swallowed. The in-memory list stays
  authoritative for the session even if disk and memory diverge.
"""

import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from verno.core.config import get_settings
from verno.core.errors import NotFoundError
from verno.models.schemas import NewTask, TaskStatus, TodoList, TodoTask


TaskInput = Union[NewTask, dict]


def _now_ms() -> int:
    return int(time.time() * 1000)


class TodoService:
    """
    Service for managing agent TODO lists.

    Usage:
        service = TodoService("/path/to/workspace")
        todo_list = service.create_todo_list("Orchestrator", [
            NewTask(title="Generate code", assigned_agent="codeGenerator"),
        ])
        service.update_task_status("Orchestrator", todo_list.tasks[0].id, TaskStatus.COMPLETED)
    """

    def __init__(
        self,
        workspace_root: str,
        todos_dir: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], int] = _now_ms
    ):
        """
        Initialize the service and load existing lists.

        Args:
            workspace_root: Root of the workspace the lists belong to
            todos_dir: Override for the storage directory
            logger: Logger for persistence failures
            clock: Returns epoch milliseconds; used for ids and timestamps
        """
        self.workspace_root = workspace_root
        if todos_dir is None:
            settings = get_settings()
            todos_dir = str(Path(workspace_root) / settings.state_dir / settings.todos_dir)
        self.todos_dir = Path(todos_dir)
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._todo_lists: Dict[str, TodoList] = {}

        self._load_all_todo_lists()

    def create_todo_list(self, agent_name: str, tasks: Iterable[TaskInput]) -> TodoList:
        """
        Create (or replace) the TODO list of an agent.

        Task ids are ``task-<agent>-<ms>-<index>``.
        """
        now = self._clock()
        todo_list = TodoList(
            agent_name=agent_name,
            tasks=[
                self._build_task(task, f"task-{agent_name}-{now}-{index}", now)
                for index, task in enumerate(tasks)
            ],
            created_at=now,
            updated_at=now,
        )

        self._todo_lists[agent_name] = todo_list
        self._save_todo_list(todo_list)
        return todo_list

    def add_task(self, agent_name: str, task: TaskInput) -> TodoTask:
        """Append a task, creating an empty list for the agent if needed."""
        now = self._clock()
        todo_list = self._todo_lists.get(agent_name)
        if todo_list is None:
            todo_list = TodoList(agent_name=agent_name, created_at=now, updated_at=now)
            self._todo_lists[agent_name] = todo_list

        new_task = self._build_task(task, f"task-{agent_name}-{now}-{len(todo_list.tasks)}", now)
        todo_list.tasks.append(new_task)
        todo_list.updated_at = now
        self._save_todo_list(todo_list)
        return new_task

    def update_task_status(
        self,
        agent_name: str,
        task_id: str,
        status: Union[TaskStatus, str]
    ) -> TodoTask:
        """
        Set a task's status.

        Moving to ``completed`` stamps ``completed_at``. Moving away from
        ``completed`` keeps the earlier stamp.

        Raises:
            NotFoundError: If the list or the task does not exist
        """
        todo_list = self._todo_lists.get(agent_name)
        if todo_list is None:
            raise NotFoundError(
                f"TODO list for agent {agent_name} not found",
                details={"agent_name": agent_name},
            )

        task = next((t for t in todo_list.tasks if t.id == task_id), None)
        if task is None:
            raise NotFoundError(
                f"Task {task_id} not found",
                details={"agent_name": agent_name, "task_id": task_id},
            )

        now = self._clock()
        task.status = TaskStatus(status)
        task.updated_at = now
        if task.status == TaskStatus.COMPLETED:
            task.completed_at = now

        todo_list.updated_at = now
        self._save_todo_list(todo_list)
        return task

    def get_todo_list(self, agent_name: str) -> Optional[TodoList]:
        return self._todo_lists.get(agent_name)

    def get_all_todo_lists(self) -> List[TodoList]:
        return list(self._todo_lists.values())

    def get_pending_tasks(self, agent_name: str) -> List[TodoTask]:
        """Tasks still to do: ``pending`` and ``in-progress``."""
        todo_list = self._todo_lists.get(agent_name)
        if todo_list is None:
            return []
        return [t for t in todo_list.tasks if _is_open(t)]

    def get_completed_tasks(self, agent_name: str) -> List[TodoTask]:
        todo_list = self._todo_lists.get(agent_name)
        if todo_list is None:
            return []
        return [t for t in todo_list.tasks if t.status == TaskStatus.COMPLETED]

    def clear_todo_list(self, agent_name: str) -> None:
        """Empty an agent's tasks but keep the list record."""
        todo_list = self._todo_lists.get(agent_name)
        if todo_list is not None:
            todo_list.tasks = []
            todo_list.updated_at = self._clock()
            self._save_todo_list(todo_list)

    def delete_todo_list(self, agent_name: str) -> None:
        """Remove the persisted file (missing file is fine) and the list."""
        file_path = self._get_todo_list_file_path(agent_name)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to delete TODO list file {file_path}: {e}")
        self._todo_lists.pop(agent_name, None)

    def get_todo_summary(self) -> str:
        """Markdown report over all lists, in insertion order."""
        summary = "# TODO Summary\n\n"

        for todo_list in self._todo_lists.values():
            total = len(todo_list.tasks)
            pending = sum(1 for t in todo_list.tasks if _is_open(t))
            completed = sum(1 for t in todo_list.tasks if t.status == TaskStatus.COMPLETED)
            progress = int(completed / total * 100 + 0.5) if total > 0 else 0

            summary += f"## {todo_list.agent_name}\n"
            summary += f"- Total Tasks: {total}\n"
            summary += f"- Pending: {pending}\n"
            summary += f"- Completed: {completed}\n"
            summary += f"- Progress: {progress}%\n"
            for task in todo_list.tasks:
                summary += f"  - [{task.status.value}] {task.title}\n"
            summary += "\n"

        return summary

    def _build_task(self, task: TaskInput, task_id: str, now: int) -> TodoTask:
        fields = task.model_dump() if isinstance(task, NewTask) else NewTask.model_validate(task).model_dump()
        return TodoTask(**fields, id=task_id, created_at=now, updated_at=now)

    def _save_todo_list(self, todo_list: TodoList) -> None:
        file_path = self._get_todo_list_file_path(todo_list.agent_name)
        try:
            self.todos_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(
                json.dumps(todo_list.to_document(), indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            self.logger.error(f"Failed to save TODO list for {todo_list.agent_name}: {e}")

    def _load_all_todo_lists(self) -> None:
        try:
            if not self.todos_dir.is_dir():
                return
            files = sorted(self.todos_dir.glob("*.json"))
        except OSError as e:
            self.logger.error(f"Failed to load TODO lists: {e}")
            return

        for file_path in files:
            try:
                data = json.loads(file_path.read_text(encoding="utf-8"))
                todo_list = TodoList.model_validate(data)
            except (OSError, ValueError) as e:
                self.logger.warning(f"Skipping unreadable TODO list {file_path.name}: {e}")
                continue
            self._todo_lists[todo_list.agent_name] = todo_list

    def _get_todo_list_file_path(self, agent_name: str) -> Path:
        return self.todos_dir / f"{agent_name}.json"


def _is_open(task: TodoTask) -> bool:
    return task.status in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)
