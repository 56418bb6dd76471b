# src/worklist/errors.py

"""Exception types shared by the gateway, the store and the session."""

from __future__ import annotations


class WorklistError(Exception):
    """Base class for all worklist errors."""


class TransportError(WorklistError):
    """
    A task service call did not succeed.

    Raised for any non-2xx response, network failure or undecodable body.
    `status_code` is None when no HTTP response was received.
    """

    def __init__(self, operation: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is None:
            return f"{self.operation}: {base}"
        return f"{self.operation}: HTTP {self.status_code}: {base}"


class TaskNotFoundError(TransportError):
    """The task service has no task with the requested id."""

    def __init__(self, operation: str, task_id: int) -> None:
        super().__init__(operation, f"task {task_id} not found", status_code=404)
        self.task_id = task_id


class StoreInvariantError(WorklistError):
    """The in-memory task collection was asked to do something that breaks its invariants."""
