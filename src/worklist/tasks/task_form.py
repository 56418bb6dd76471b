# src/worklist/tasks/task_form.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from enum import Enum

from ..core.ports import TaskSubmitter
from .task_models import Task, TaskDraft, TaskStatus, UpdateTaskRequest
from .task_time import now_utc, to_local_input
from .task_validator import FieldErrors, validate_draft

logger = logging.getLogger(__name__)

DRAFT_FIELDS = ("title", "description", "status", "due_date_time")


class SubmitOutcome(str, Enum):
    SUBMITTED = "submitted"
    INVALID = "invalid"  # validation failed, nothing was sent
    FAILED = "failed"  # the service call failed, draft kept
    BUSY = "busy"  # a submission from this form is still in flight


class TaskForm:
    """
    Create-or-edit form controller.

    Owns only the transient draft. Create mode starts from an empty draft with
    status TODO; edit mode is entered with start_edit(task) and left on a
    successful submit or on cancel(). Submissions go through the injected
    submitter, which is responsible for updating the store.
    """

    def __init__(
        self,
        submitter: TaskSubmitter,
        *,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._submitter = submitter
        self._clock = clock

        self.draft = TaskDraft()
        self.errors: FieldErrors = {}
        self.editing: Task | None = None
        self.submitting = False

    # ---- presentation helpers ----

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    @property
    def heading(self) -> str:
        return "Edit Task" if self.is_editing else "Create New Task"

    @property
    def submit_label(self) -> str:
        if self.submitting:
            return "Saving..."
        return "Update Task" if self.is_editing else "Create Task"

    # ---- draft handling ----

    def reset(self) -> None:
        self.draft = TaskDraft()
        self.errors = {}

    def set_field(self, name: str, value: str) -> None:
        """Update one draft field; clears that field's error and no other."""
        if name not in DRAFT_FIELDS:
            raise KeyError(f"unknown form field: {name}")

        if name == "status":
            self.draft = replace(self.draft, status=TaskStatus(value))
        else:
            self.draft = replace(self.draft, **{name: value})

        self.errors.pop(name, None)

    def start_edit(self, task: Task) -> None:
        try:
            due = to_local_input(task.due_date_time)
        except ValueError:
            # Keep the raw text; validation flags it on submit.
            logger.warning("Task id=%s has unparseable due date %r", task.id, task.due_date_time)
            due = task.due_date_time

        self.editing = task
        self.errors = {}
        self.draft = TaskDraft(
            title=task.title,
            description=task.description or "",
            status=task.status,
            due_date_time=due,
        )
        logger.debug("Form: editing task id=%s", task.id)

    def cancel(self) -> None:
        """Drop the draft and leave edit mode. No network call."""
        self.reset()
        self.editing = None

    # ---- submission ----

    async def submit(self) -> SubmitOutcome:
        if self.submitting:
            logger.debug("Form: submit ignored, previous submission still in flight")
            return SubmitOutcome.BUSY

        result = validate_draft(self.draft, now=self._clock())
        self.errors = dict(result.errors)
        if not result.ok or result.request is None:
            return SubmitOutcome.INVALID

        editing = self.editing
        self.submitting = True
        try:
            if editing is None:
                ok = await self._submitter.create_task(result.request)
            else:
                ok = await self._submitter.update_task(
                    editing.id, UpdateTaskRequest.from_create(result.request)
                )
        finally:
            self.submitting = False

        if not ok:
            return SubmitOutcome.FAILED

        # Touch the draft only if the user did not switch mode/task meanwhile.
        if editing is None:
            if self.editing is None:
                self.reset()
        elif self.editing is editing:
            self.cancel()
        return SubmitOutcome.SUBMITTED
