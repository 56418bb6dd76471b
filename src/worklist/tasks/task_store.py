# src/worklist/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from ..errors import StoreInvariantError
from .task_models import Task

logger = logging.getLogger(__name__)

StoreListener = Callable[[tuple[Task, ...]], None]


class TaskStore:
    """
    In-memory task collection: the mirror of server-confirmed state.

    Rules:
    - order is insertion/fetch order, never sorted
    - ids are unique
    - mutate only with a result the task service already confirmed
      (nothing is applied speculatively)

    Listeners are called after every mutation with the new snapshot.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._listeners: list[StoreListener] = []

    # ---- read access ----

    def snapshot(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.snapshot())

    def __contains__(self, task_id: object) -> bool:
        return any(task.id == task_id for task in self._tasks)

    # ---- observers ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("TaskStore listener failed: %r", listener)

    # ---- mutations (call only after the service confirmed them) ----

    def load(self, tasks: Iterable[Task]) -> None:
        new_tasks = list(tasks)
        ids = [t.id for t in new_tasks]
        if len(ids) != len(set(ids)):
            raise StoreInvariantError("load: duplicate task ids in fetched list")
        self._tasks = new_tasks
        logger.debug("TaskStore loaded total=%d", len(self._tasks))
        self._notify()

    def insert(self, task: Task) -> None:
        if task.id in self:
            raise StoreInvariantError(f"insert: task id={task.id} is already present")
        self._tasks = [*self._tasks, task]
        logger.debug("TaskStore inserted id=%s", task.id)
        self._notify()

    def replace(self, task_id: int, task: Task) -> None:
        if task.id != task_id:
            raise StoreInvariantError(f"replace: id mismatch (slot {task_id}, task {task.id})")
        if task_id not in self:
            raise StoreInvariantError(f"replace: no task with id={task_id}")
        self._tasks = [task if t.id == task_id else t for t in self._tasks]
        logger.debug("TaskStore replaced id=%s", task_id)
        self._notify()

    def remove(self, task_id: int) -> None:
        self._tasks = [t for t in self._tasks if t.id != task_id]
        logger.debug("TaskStore removed id=%s", task_id)
        self._notify()
