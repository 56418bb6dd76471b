# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from worklist.config import Settings
from worklist.tasks.task_api import DEFAULT_BASE_URL


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "WORKLIST_APP_NAME",
        "WORKLIST_LOG_LEVEL",
        "WORKLIST_API_BASE_URL",
        "WORKLIST_HTTP_TIMEOUT_SECONDS",
        "WORKLIST_CONFIRM_DELETE",
        "WORKLIST_DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "worklist"
    assert s.log_level == "INFO"
    assert s.api_base_url == DEFAULT_BASE_URL
    assert s.http_timeout_seconds is None
    assert s.confirm_delete is True
    assert s.data_dir == Path(".local/worklist")


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WORKLIST_API_BASE_URL", "https://tasks.example.org/api/tasks")
    monkeypatch.setenv("WORKLIST_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("WORKLIST_CONFIRM_DELETE", "no")
    monkeypatch.setenv("WORKLIST_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.api_base_url == "https://tasks.example.org/api/tasks"
    assert s.http_timeout_seconds == 2.5
    assert s.confirm_delete is False
    assert s.data_dir == tmp_path


@pytest.mark.parametrize("raw", ["abc", "0", "-1", ""])
def test_bad_timeout_falls_back_to_transport_default(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("WORKLIST_HTTP_TIMEOUT_SECONDS", raw)
    assert Settings.from_env().http_timeout_seconds is None
