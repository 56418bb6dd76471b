# src/worklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The form, the presenter and the session depend on Protocols instead of
concrete implementations, so each can be driven by fakes in tests and the
console front-end only wires them together.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from ..tasks.task_models import CreateTaskRequest, Task, TaskStatus, UpdateTaskRequest

ConfirmFn = Callable[[str], Awaitable[bool]]
# Asks the user a yes/no question; False means the user declined.


class TaskService(Protocol):
    """Remote task service (see tasks/task_api.py for the HTTP implementation)."""

    async def list_all(self) -> list[Task]: ...
    async def get_by_id(self, task_id: int) -> Task: ...
    async def create(self, request: CreateTaskRequest) -> Task: ...
    async def update(self, task_id: int, request: UpdateTaskRequest) -> Task: ...
    async def update_status(self, task_id: int, status: TaskStatus | str) -> Task: ...
    async def delete(self, task_id: int) -> None: ...


class TaskSubmitter(Protocol):
    """
    What the form calls once a draft is valid.

    Both return True when the service confirmed the change and the store
    reflects it, False when the call failed (the error is already reported).
    """

    async def create_task(self, request: CreateTaskRequest) -> bool: ...
    async def update_task(self, task_id: int, request: UpdateTaskRequest) -> bool: ...


class TaskActions(Protocol):
    """Intents the task list can emit."""

    def edit(self, task: Task) -> None: ...
    async def delete_task(self, task_id: int) -> bool: ...
    async def change_status(self, task_id: int, status: TaskStatus | str) -> bool: ...
