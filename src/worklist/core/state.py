# src/worklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_api import TaskApiClient
from ..tasks.task_form import TaskForm
from ..tasks.task_presenter import TaskListPresenter
from ..tasks.task_store import TaskStore
from .session import WorklistSession


@dataclass
class AppState:
    """Everything one running session needs. Built by cli/bootstrap.py."""

    # Settings (or any object with the same attributes, e.g. in tests).
    settings: Any

    store: TaskStore
    session: WorklistSession
    form: TaskForm
    presenter: TaskListPresenter

    # Concrete HTTP gateway, if this state owns one (closed on shutdown).
    api: TaskApiClient | None = None

    color: bool = False

    async def aclose(self) -> None:
        self.presenter.close()
        if self.api is not None:
            await self.api.aclose()
