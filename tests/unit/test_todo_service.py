"""Tests for verno.services.todo_service: persisted per-agent TODO ledger."""

import json

import pytest

from verno.core.errors import NotFoundError
from verno.models.schemas import NewTask, TaskPriority, TaskStatus
from verno.services.todo_service import TodoService


class MsClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        self.now += 1
        return self.now


@pytest.fixture
def service(workspace):
    return TodoService(str(workspace), clock=MsClock())


def _todo_file(workspace, agent):
    return workspace / ".verno" / "todos" / f"{agent}.json"


# ── Construction ─────────────────────────────────────────────────────────────


class TestConstruction:
    def test_construction_creates_nothing(self, workspace):
        service = TodoService(str(workspace))
        service.get_all_todo_lists()
        service.get_todo_summary()
        assert not (workspace / ".verno").exists()

    def test_first_save_creates_directory(self, workspace):
        TodoService(str(workspace)).create_todo_list("Dev", [])
        assert (workspace / ".verno" / "todos" / "Dev.json").is_file()

    def test_custom_directory(self, tmp_path):
        custom = tmp_path / "elsewhere"
        service = TodoService(str(tmp_path), todos_dir=str(custom))
        service.create_todo_list("A", [{"title": "t"}])
        assert (custom / "A.json").exists()

    def test_loads_existing_lists(self, workspace):
        first = TodoService(str(workspace))
        first.create_todo_list("Orchestrator", [NewTask(title="Generate code")])

        second = TodoService(str(workspace))

        todo_list = second.get_todo_list("Orchestrator")
        assert todo_list is not None
        assert todo_list.tasks[0].title == "Generate code"

    def test_corrupt_file_is_skipped(self, workspace):
        TodoService(str(workspace)).create_todo_list("Good", [{"title": "ok"}])
        _todo_file(workspace, "Bad").write_text("{not json")

        service = TodoService(str(workspace))

        assert service.get_todo_list("Good") is not None
        assert service.get_todo_list("Bad") is None


# ── Mutations ────────────────────────────────────────────────────────────────


class TestCreateTodoList:
    def test_ids_and_defaults(self, service):
        todo_list = service.create_todo_list("Dev", [{"title": "a"}, NewTask(title="b")])

        ids = [t.id for t in todo_list.tasks]
        assert ids[0].startswith("task-Dev-") and ids[0].endswith("-0")
        assert ids[1].endswith("-1")
        assert len(set(ids)) == 2
        assert todo_list.tasks[0].status == TaskStatus.PENDING
        assert todo_list.tasks[0].priority == TaskPriority.MEDIUM

    def test_replaces_existing(self, service):
        service.create_todo_list("Dev", [{"title": "old"}])
        service.create_todo_list("Dev", [{"title": "new"}])
        assert [t.title for t in service.get_todo_list("Dev").tasks] == ["new"]

    def test_persisted_with_camel_case_keys(self, service, workspace):
        service.create_todo_list("Dev", [{"title": "a", "assignedAgent": "codeGenerator"}])

        data = json.loads(_todo_file(workspace, "Dev").read_text())

        assert data["agentName"] == "Dev"
        task = data["tasks"][0]
        assert task["assignedAgent"] == "codeGenerator"
        assert {"createdAt", "updatedAt"} <= set(task)
        assert "completedAt" not in task


class TestAddTask:
    def test_creates_list_lazily(self, service):
        task = service.add_task("New", {"title": "first"})
        assert service.get_todo_list("New").tasks == [task]

    def test_ids_unique_within_list(self, service):
        service.create_todo_list("Dev", [{"title": "a"}])
        added = service.add_task("Dev", {"title": "b"})
        ids = [t.id for t in service.get_todo_list("Dev").tasks]
        assert len(set(ids)) == 2
        assert added.id.endswith("-1")


class TestUpdateTaskStatus:
    def test_completed_stamps_completed_at(self, service):
        task = service.create_todo_list("Dev", [{"title": "a"}]).tasks[0]

        updated = service.update_task_status("Dev", task.id, TaskStatus.COMPLETED)

        assert updated.status == TaskStatus.COMPLETED
        assert updated.completed_at is not None
        assert updated.updated_at >= updated.created_at

    def test_accepts_string_status(self, service):
        task = service.create_todo_list("Dev", [{"title": "a"}]).tasks[0]
        assert service.update_task_status("Dev", task.id, "in-progress").status == TaskStatus.IN_PROGRESS

    def test_non_completed_leaves_completed_at_unset(self, service):
        task = service.create_todo_list("Dev", [{"title": "a"}]).tasks[0]
        assert service.update_task_status("Dev", task.id, TaskStatus.BLOCKED).completed_at is None

    def test_reopening_keeps_completed_at(self, service):
        task = service.create_todo_list("Dev", [{"title": "a"}]).tasks[0]
        done = service.update_task_status("Dev", task.id, TaskStatus.COMPLETED).completed_at
        reopened = service.update_task_status("Dev", task.id, TaskStatus.PENDING)
        assert reopened.completed_at == done

    def test_unknown_list(self, service):
        with pytest.raises(NotFoundError, match="TODO list for agent Ghost not found"):
            service.update_task_status("Ghost", "task-x", TaskStatus.COMPLETED)

    def test_unknown_task(self, service):
        service.create_todo_list("Dev", [{"title": "a"}])
        with pytest.raises(NotFoundError, match="Task task-missing not found"):
            service.update_task_status("Dev", "task-missing", TaskStatus.COMPLETED)

    def test_update_is_persisted(self, service, workspace):
        task = service.create_todo_list("Dev", [{"title": "a"}]).tasks[0]
        service.update_task_status("Dev", task.id, TaskStatus.COMPLETED)

        data = json.loads(_todo_file(workspace, "Dev").read_text())
        assert data["tasks"][0]["status"] == "completed"
        assert "completedAt" in data["tasks"][0]


# ── Views ────────────────────────────────────────────────────────────────────


class TestViews:
    def test_pending_includes_in_progress(self, service):
        tasks = service.create_todo_list("Dev", [{"title": t} for t in "abcd"]).tasks
        service.update_task_status("Dev", tasks[1].id, TaskStatus.IN_PROGRESS)
        service.update_task_status("Dev", tasks[2].id, TaskStatus.COMPLETED)
        service.update_task_status("Dev", tasks[3].id, TaskStatus.BLOCKED)

        assert [t.title for t in service.get_pending_tasks("Dev")] == ["a", "b"]
        assert [t.title for t in service.get_completed_tasks("Dev")] == ["c"]

    def test_views_of_unknown_agent_are_empty(self, service):
        assert service.get_pending_tasks("Ghost") == []
        assert service.get_completed_tasks("Ghost") == []

    def test_get_all_todo_lists(self, service):
        service.create_todo_list("A", [])
        service.create_todo_list("B", [])
        assert [t.agent_name for t in service.get_all_todo_lists()] == ["A", "B"]


class TestClearAndDelete:
    def test_clear_keeps_record(self, service, workspace):
        service.create_todo_list("Dev", [{"title": "a"}])
        service.clear_todo_list("Dev")
        assert service.get_todo_list("Dev").tasks == []
        assert json.loads(_todo_file(workspace, "Dev").read_text())["tasks"] == []

    def test_clear_unknown_is_noop(self, service):
        service.clear_todo_list("Ghost")
        assert service.get_todo_list("Ghost") is None

    def test_delete_removes_file_and_entry(self, service, workspace):
        service.create_todo_list("Dev", [{"title": "a"}])
        service.delete_todo_list("Dev")
        assert service.get_todo_list("Dev") is None
        assert not _todo_file(workspace, "Dev").exists()

    def test_delete_is_idempotent(self, service):
        service.delete_todo_list("Ghost")
        service.delete_todo_list("Ghost")


# ── Summary ──────────────────────────────────────────────────────────────────


class TestSummary:
    def test_empty(self, service):
        assert service.get_todo_summary() == "# TODO Summary\n\n"

    def test_counts_and_progress(self, service):
        tasks = service.create_todo_list("Dev", [{"title": "a"}, {"title": "b"}, {"title": "c"}]).tasks
        service.update_task_status("Dev", tasks[0].id, TaskStatus.COMPLETED)
        service.update_task_status("Dev", tasks[1].id, TaskStatus.COMPLETED)

        summary = service.get_todo_summary()

        assert "## Dev\n" in summary
        assert "- Total Tasks: 3\n" in summary
        assert "- Pending: 1\n" in summary
        assert "- Completed: 2\n" in summary
        assert "- Progress: 67%\n" in summary
        assert "  - [completed] a\n" in summary
        assert "  - [pending] c\n" in summary

    def test_empty_list_is_zero_percent(self, service):
        service.create_todo_list("Dev", [])
        assert "- Progress: 0%" in service.get_todo_summary()

    def test_lists_in_insertion_order(self, service):
        service.create_todo_list("Zed", [])
        service.create_todo_list("Alpha", [])
        summary = service.get_todo_summary()
        assert summary.index("## Zed") < summary.index("## Alpha")
