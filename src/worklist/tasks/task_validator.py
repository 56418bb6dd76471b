# src/worklist/tasks/task_validator.py

"""
Client-side validation of task drafts.

Pure: no I/O and no state. Rules are checked independently, so one pass
reports every problem with the draft at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .task_models import CreateTaskRequest, TaskDraft
from .task_time import now_utc, parse_instant, to_wire_instant

TITLE_REQUIRED = "Title is required"
DUE_REQUIRED = "Due date/time is required"
DUE_INVALID = "Due date/time is invalid"
DUE_NOT_IN_FUTURE = "Due date/time must be in the future"

FieldErrors = dict[str, str]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    request: CreateTaskRequest | None = None
    errors: FieldErrors = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _check_title(draft: TaskDraft, errors: FieldErrors) -> str:
    title = (draft.title or "").strip()
    if not title:
        errors["title"] = TITLE_REQUIRED
    return title


def _check_due(draft: TaskDraft, now: datetime, errors: FieldErrors) -> datetime | None:
    raw = (draft.due_date_time or "").strip()
    if not raw:
        errors["due_date_time"] = DUE_REQUIRED
        return None

    try:
        due = parse_instant(raw)
    except ValueError:
        errors["due_date_time"] = DUE_INVALID
        return None

    # Compare what will be sent: the wire format keeps milliseconds only.
    due = due.replace(microsecond=due.microsecond - due.microsecond % 1000)
    if due <= now:
        errors["due_date_time"] = DUE_NOT_IN_FUTURE
        return None
    return due


def validate_draft(draft: TaskDraft, *, now: datetime | None = None) -> ValidationResult:
    """
    Turn raw form input into a CreateTaskRequest or a {field: message} map.

    `now` defaults to the current instant; the due date must be strictly after it.
    Status and description are accepted as they are.
    """
    if now is None:
        now = now_utc()

    errors: FieldErrors = {}
    title = _check_title(draft, errors)
    due = _check_due(draft, now, errors)

    if errors or due is None:
        return ValidationResult(errors=errors)

    return ValidationResult(
        request=CreateTaskRequest(
            title=title,
            description=draft.description,
            status=draft.status,
            due_date_time=to_wire_instant(due),
        )
    )
