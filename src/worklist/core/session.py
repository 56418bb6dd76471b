# src/worklist/core/session.py

"""
Session coordinator.

Owns the single global error message and the loading flag, and turns user
intents into gateway calls followed by store updates. The protocol for every
mutating intent is the same:

1. clear the error banner
2. await the service call
3. on success apply the confirmed result to the store
4. on TransportError log the cause, set the banner, leave the store alone

A fetched list with duplicate ids is rejected the same way as a failed fetch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import StoreInvariantError, TransportError, WorklistError
from ..tasks.task_models import CreateTaskRequest, Task, TaskStatus, UpdateTaskRequest
from ..tasks.task_store import TaskStore
from .ports import ConfirmFn, TaskService

logger = logging.getLogger(__name__)

FETCH_TASKS_FAILED = "Failed to fetch tasks. Please try again."
FETCH_TASK_FAILED = "Failed to fetch task. Please try again."
CREATE_FAILED = "Failed to create task. Please try again."
UPDATE_FAILED = "Failed to update task. Please try again."
DELETE_FAILED = "Failed to delete task. Please try again."
STATUS_FAILED = "Failed to update task status. Please try again."

DELETE_CONFIRM_PROMPT = "Are you sure you want to delete this task?"


async def _always_yes(_message: str) -> bool:
    return True


class WorklistSession:
    """
    One per running UI session; created empty, filled by fetch_tasks().

    Implements both TaskSubmitter (for the form) and TaskActions (for the list).
    """

    def __init__(
        self,
        service: TaskService,
        store: TaskStore,
        *,
        confirm: ConfirmFn | None = None,
        on_edit: Callable[[Task], None] | None = None,
    ) -> None:
        self.service = service
        self.store = store
        self.confirm: ConfirmFn = confirm or _always_yes
        self.on_edit = on_edit

        self.error: str | None = None
        self.loading = False

    def _fail(self, message: str, exc: WorklistError) -> None:
        # Called from except blocks only.
        logger.exception("%s (%s)", message, exc)
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    # ---- reads ----

    async def fetch_tasks(self) -> bool:
        self.loading = True
        self.error = None
        try:
            tasks = await self.service.list_all()
        except TransportError as e:
            self._fail(FETCH_TASKS_FAILED, e)
            return False
        finally:
            self.loading = False

        try:
            self.store.load(tasks)
        except StoreInvariantError as e:
            # A list the store cannot hold counts as a failed fetch.
            self._fail(FETCH_TASKS_FAILED, e)
            return False
        logger.info("Fetched %d tasks", len(tasks))
        return True

    async def get_task(self, task_id: int) -> Task | None:
        """Fetch one task from the service. Read-only: the store is not touched."""
        self.error = None
        try:
            return await self.service.get_by_id(task_id)
        except TransportError as e:
            self._fail(FETCH_TASK_FAILED, e)
            return None

    # ---- TaskSubmitter ----

    async def create_task(self, request: CreateTaskRequest) -> bool:
        self.error = None
        try:
            task = await self.service.create(request)
        except TransportError as e:
            self._fail(CREATE_FAILED, e)
            return False

        self.store.insert(task)
        logger.info("Created task id=%s", task.id)
        return True

    async def update_task(self, task_id: int, request: UpdateTaskRequest) -> bool:
        self.error = None
        try:
            task = await self.service.update(task_id, request)
        except TransportError as e:
            self._fail(UPDATE_FAILED, e)
            return False

        self.store.replace(task_id, task)
        logger.info("Updated task id=%s", task_id)
        return True

    # ---- TaskActions ----

    def edit(self, task: Task) -> None:
        if self.on_edit is not None:
            self.on_edit(task)

    async def delete_task(self, task_id: int) -> bool:
        if not await self.confirm(DELETE_CONFIRM_PROMPT):
            logger.debug("Delete of task id=%s declined by user", task_id)
            return False

        self.error = None
        try:
            await self.service.delete(task_id)
        except TransportError as e:
            self._fail(DELETE_FAILED, e)
            return False

        self.store.remove(task_id)
        logger.info("Deleted task id=%s", task_id)
        return True

    async def change_status(self, task_id: int, status: TaskStatus | str) -> bool:
        # No validation here: the status goes to the service as given.
        self.error = None
        try:
            task = await self.service.update_status(task_id, status)
        except TransportError as e:
            self._fail(STATUS_FAILED, e)
            return False

        self.store.replace(task_id, task)
        logger.info("Task id=%s -> %s", task_id, task.status.value)
        return True
