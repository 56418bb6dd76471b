# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from worklist.cli.bootstrap import create_initial_state
from worklist.core.state import AppState
from worklist.tasks.task_models import TaskStatus

from .fakes import FakeConfirm, FakeTaskService, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="worklist-test",
        log_level="DEBUG",
        api_base_url="http://tasks.test/api/tasks",
        http_timeout_seconds=None,
        confirm_delete=True,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def service() -> FakeTaskService:
    return FakeTaskService.with_tasks(
        make_task(1, title="Review bundle"),
        make_task(2, title="Draft order", status=TaskStatus.IN_PROGRESS),
        make_task(3, title="Call witness", description=None),
    )


@pytest.fixture()
def confirm() -> FakeConfirm:
    return FakeConfirm(answer=True)


@pytest.fixture()
def state(settings: SimpleNamespace, service: FakeTaskService, confirm: FakeConfirm) -> AppState:
    """AppState wired with the fake service; the store starts empty."""
    return create_initial_state(settings=settings, service=service, confirm=confirm)
