# src/worklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the gateway, store, session, form and presenter into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ConfirmFn, TaskService
from ..core.session import WorklistSession
from ..core.state import AppState
from ..tasks.task_api import TaskApiClient
from ..tasks.task_form import TaskForm
from ..tasks.task_presenter import TaskListPresenter
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    service: TaskService | None = None,
    confirm: ConfirmFn | None = None,
    color: bool = False,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and the service injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings(); if
    service is None, an HTTP TaskApiClient is built from settings.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    api: TaskApiClient | None = None
    if service is None:
        api = TaskApiClient(
            settings.api_base_url,
            timeout_seconds=getattr(settings, "http_timeout_seconds", None),
        )
        service = api
        logger.info("Task service: %s", api.base_url)

    if not getattr(settings, "confirm_delete", True):
        confirm = None

    store = TaskStore()
    session = WorklistSession(service, store, confirm=confirm)
    form = TaskForm(session)
    session.on_edit = form.start_edit
    presenter = TaskListPresenter(store, session)

    return AppState(
        settings=settings,
        store=store,
        session=session,
        form=form,
        presenter=presenter,
        api=api,
        color=color,
    )
