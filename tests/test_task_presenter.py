# tests/test_task_presenter.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from worklist.core.session import WorklistSession
from worklist.tasks.task_models import TaskStatus
from worklist.tasks.task_presenter import TaskListPresenter, build_row, is_overdue
from worklist.tasks.task_store import TaskStore

from .fakes import FakeConfirm, FakeTaskService, make_task

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)
PAST = "2026-10-16T12:00:00Z"
FUTURE = "2026-10-18T12:00:00Z"


@pytest.mark.parametrize(
    ("status", "due", "expected"),
    [
        (TaskStatus.IN_PROGRESS, PAST, True),
        (TaskStatus.COMPLETED, PAST, False),
        (TaskStatus.TODO, PAST, True),
        (TaskStatus.CANCELLED, PAST, True),
        (TaskStatus.IN_PROGRESS, FUTURE, False),
    ],
)
def test_overdue_predicate(status: TaskStatus, due: str, expected: bool) -> None:
    assert is_overdue(make_task(1, status=status, due=due), NOW) is expected


def test_build_row_display_values() -> None:
    row = build_row(make_task(1, status=TaskStatus.IN_PROGRESS, due=PAST), NOW)
    assert row.status_label == "IN PROGRESS"
    assert row.overdue is True
    assert "2026" in row.due_label


def test_build_row_tolerates_bad_due_value() -> None:
    row = build_row(make_task(1, due="soon"), NOW)
    assert row.due_label == "soon"
    assert row.overdue is False


class RecordingActions:
    def __init__(self) -> None:
        self.edited = []
        self.deleted = []
        self.status_changes = []

    def edit(self, task) -> None:
        self.edited.append(task.id)

    async def delete_task(self, task_id: int) -> bool:
        self.deleted.append(task_id)
        return True

    async def change_status(self, task_id: int, status) -> bool:
        self.status_changes.append((task_id, status))
        return True


def test_rows_follow_store_changes() -> None:
    store = TaskStore()
    presenter = TaskListPresenter(store, RecordingActions(), clock=lambda: NOW)
    assert presenter.rows() == []

    store.load([make_task(1, due=PAST), make_task(2, due=FUTURE)])
    assert [(r.task.id, r.overdue) for r in presenter.rows()] == [(1, True), (2, False)]

    store.remove(1)
    assert [r.task.id for r in presenter.rows()] == [2]

    presenter.close()
    store.insert(make_task(3))
    assert [r.task.id for r in presenter.rows()] == [2]


@pytest.mark.asyncio
async def test_intents_are_forwarded_unvalidated() -> None:
    store = TaskStore()
    store.load([make_task(1)])
    actions = RecordingActions()
    presenter = TaskListPresenter(store, actions)

    assert presenter.edit(1) is True
    assert presenter.edit(99) is False
    assert await presenter.delete(1) is True
    assert await presenter.change_status(1, "NOT_A_STATUS") is True

    assert actions.edited == [1]
    assert actions.deleted == [1]
    assert actions.status_changes == [(1, "NOT_A_STATUS")]


@pytest.mark.asyncio
async def test_quick_status_change_hits_service_directly() -> None:
    service = FakeTaskService.with_tasks(make_task(1))
    store = TaskStore()
    session = WorklistSession(service, store, confirm=FakeConfirm())
    presenter = TaskListPresenter(store, session)
    await session.fetch_tasks()

    assert await presenter.change_status(1, TaskStatus.COMPLETED)
    assert service.calls[-1] == ("update_status", (1, TaskStatus.COMPLETED))
    assert store.get(1).status is TaskStatus.COMPLETED


def test_render_states() -> None:
    store = TaskStore()
    presenter = TaskListPresenter(store, RecordingActions(), clock=lambda: NOW)

    assert presenter.render(loading=True) == "Loading tasks..."
    assert presenter.render().startswith("No tasks yet")

    store.load(
        [
            make_task(1, title="Late one", status=TaskStatus.CANCELLED, due=PAST),
            make_task(2, title="Done one", status=TaskStatus.COMPLETED, due=PAST, description=None),
        ]
    )
    text = presenter.render()
    assert text.splitlines()[0] == "Tasks (2)"
    assert "#1 [CANCELLED] Late one" in text
    assert text.count("(Overdue)") == 1
    assert "\033[" not in text
    assert "\033[" in presenter.render(color=True)
