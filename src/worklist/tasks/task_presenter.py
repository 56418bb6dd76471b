# src/worklist/tasks/task_presenter.py

"""
Read-only view over the task store.

Derives display values (overdue flag, formatted due date, status label) and
forwards list intents (edit / delete / quick status change) to the injected
TaskActions. The quick status change goes straight to the service: no form,
no validation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import TaskActions
from .task_models import Task, TaskStatus
from .task_store import TaskStore
from .task_time import format_local, now_utc, parse_instant

logger = logging.getLogger(__name__)

_RESET = "\033[0m"
_BOLD = "\033[1m"
_RED = "\033[31m"

# Same palette as the status badges of the web UI: grey / blue / green / red.
STATUS_COLOR: dict[TaskStatus, str] = {
    TaskStatus.TODO: "\033[90m",
    TaskStatus.IN_PROGRESS: "\033[34m",
    TaskStatus.COMPLETED: "\033[32m",
    TaskStatus.CANCELLED: "\033[31m",
}


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """
    Overdue iff the due instant is in the past and the task is not COMPLETED.

    CANCELLED tasks past their due date count as overdue too.
    """
    if now is None:
        now = now_utc()
    return parse_instant(task.due_date_time) < now and task.status != TaskStatus.COMPLETED


@dataclass(frozen=True, slots=True)
class TaskRow:
    task: Task
    status_label: str
    due_label: str
    overdue: bool


def build_row(task: Task, now: datetime | None = None) -> TaskRow:
    try:
        due_label = format_local(task.due_date_time)
        overdue = is_overdue(task, now)
    except ValueError:
        # The service owns the value; show it raw rather than hiding the task.
        logger.warning("Task id=%s has an unparseable dueDateTime=%r", task.id, task.due_date_time)
        due_label = task.due_date_time
        overdue = False
    return TaskRow(task=task, status_label=task.status.label, due_label=due_label, overdue=overdue)


def _paint(text: str, code: str, enabled: bool) -> str:
    return f"{code}{text}{_RESET}" if enabled else text


class TaskListPresenter:
    def __init__(
        self,
        store: TaskStore,
        actions: TaskActions,
        *,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._store = store
        self._actions = actions
        self._clock = clock
        self._rows: list[TaskRow] = []
        self._unsubscribe = store.subscribe(self._on_store_changed)
        self._on_store_changed(store.snapshot())

    def close(self) -> None:
        self._unsubscribe()

    def _on_store_changed(self, tasks: tuple[Task, ...]) -> None:
        now = self._clock()
        self._rows = [build_row(t, now) for t in tasks]

    def rows(self, *, now: datetime | None = None) -> list[TaskRow]:
        """Current rows. Overdue flags are re-derived when `now` is given."""
        if now is None:
            return list(self._rows)
        return [build_row(row.task, now) for row in self._rows]

    # ---- intents ----

    def edit(self, task_id: int) -> bool:
        task = self._store.get(task_id)
        if task is None:
            return False
        self._actions.edit(task)
        return True

    async def delete(self, task_id: int) -> bool:
        return await self._actions.delete_task(task_id)

    async def change_status(self, task_id: int, status: TaskStatus | str) -> bool:
        return await self._actions.change_status(task_id, status)

    # ---- console rendering ----

    def render(self, *, loading: bool = False, color: bool = False, now: datetime | None = None) -> str:
        if loading:
            return "Loading tasks..."

        rows = self.rows(now=now or self._clock())
        if not rows:
            return "No tasks yet\nCreate your first task to get started (/new)."

        lines = [_paint(f"Tasks ({len(rows)})", _BOLD, color)]
        for row in rows:
            task = row.task
            status = _paint(f"[{row.status_label}]", STATUS_COLOR.get(task.status, ""), color)
            lines.append(f"#{task.id} {status} {task.title}")
            if task.description:
                lines.append(f"    {task.description}")
            due = f"Due: {row.due_label}"
            if row.overdue:
                due = _paint(f"{due} (Overdue)", _RED, color)
            lines.append(f"    {due}")
        return "\n".join(lines)
