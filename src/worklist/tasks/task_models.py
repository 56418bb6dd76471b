# src/worklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskPayloadError(ValueError):
    """A task payload from the service does not have the expected shape."""


class TaskStatus(StrEnum):
    """
    Task status.

    Notes:
    - flat enumeration, any status may be replaced by any other one
    - values are the wire values used by the task service
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        try:
            return cls(raw)
        except ValueError:
            raise TaskPayloadError(f"unknown task status: {raw!r}") from None


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise TaskPayloadError(f"field {key!r} must be a string, got {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    status: TaskStatus
    due_date_time: str  # ISO-8601 instant, kept as the service sent it

    created_at: str
    updated_at: str

    description: str | None = None

    @classmethod
    def from_wire(cls, data: Any) -> Task:
        if not isinstance(data, dict):
            raise TaskPayloadError(f"task payload must be an object, got {type(data).__name__}")

        task_id = data.get("id")
        # bool is an int subclass; a JSON true is not a task id.
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise TaskPayloadError(f"field 'id' must be an integer, got {task_id!r}")

        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise TaskPayloadError(f"field 'description' must be a string, got {description!r}")

        return cls(
            id=task_id,
            title=_require_str(data, "title"),
            description=description,
            status=TaskStatus.from_wire(data.get("status")),
            due_date_time=_require_str(data, "dueDateTime"),
            created_at=_require_str(data, "createdAt"),
            updated_at=_require_str(data, "updatedAt"),
        )

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "dueDateTime": self.due_date_time,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.description is not None:
            out["description"] = self.description
        return out


@dataclass(frozen=True, slots=True)
class CreateTaskRequest:
    title: str
    status: TaskStatus
    due_date_time: str
    description: str | None = None

    def to_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "status": self.status.value,
            "dueDateTime": self.due_date_time,
        }
        if self.description is not None:
            out["description"] = self.description
        return out


@dataclass(frozen=True, slots=True)
class UpdateTaskRequest:
    """Partial replace: only fields that are set end up in the payload."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    due_date_time: str | None = None

    @classmethod
    def from_create(cls, request: CreateTaskRequest) -> UpdateTaskRequest:
        return cls(
            title=request.title,
            description=request.description,
            status=request.status,
            due_date_time=request.due_date_time,
        )

    def to_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.title is not None:
            out["title"] = self.title
        if self.description is not None:
            out["description"] = self.description
        if self.status is not None:
            out["status"] = self.status.value
        if self.due_date_time is not None:
            out["dueDateTime"] = self.due_date_time
        return out


@dataclass(frozen=True, slots=True)
class UpdateTaskStatusRequest:
    # Plain str is accepted: the quick status change path sends whatever it was given.
    status: TaskStatus | str

    def to_payload(self) -> dict[str, Any]:
        return {"status": str(self.status)}


@dataclass(slots=True)
class TaskDraft:
    """
    Raw form input, not yet validated.

    due_date_time is whatever the user typed: usually local minute precision
    (YYYY-MM-DDTHH:MM), a full ISO-8601 string is accepted as well.
    """

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    due_date_time: str = ""
