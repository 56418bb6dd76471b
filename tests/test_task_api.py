# tests/test_task_api.py

from __future__ import annotations

import json

import httpx
import pytest

from worklist.errors import TaskNotFoundError, TransportError
from worklist.tasks.task_api import TaskApiClient
from worklist.tasks.task_models import CreateTaskRequest, TaskStatus, UpdateTaskRequest

BASE = "http://tasks.test/api/tasks"


def _wire(task_id: int, **kw) -> dict:
    data = {
        "id": task_id,
        "title": "Serve notice",
        "status": "TODO",
        "dueDateTime": "2026-11-01T10:00:00Z",
        "createdAt": "2026-10-01T08:00:00Z",
        "updatedAt": "2026-10-01T08:00:00Z",
    }
    data.update(kw)
    return data


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


def _client(handler) -> TaskApiClient:
    return TaskApiClient(BASE, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_list_all_hits_base_path_without_trailing_slash() -> None:
    rec = Recorder(httpx.Response(200, json=[_wire(1), _wire(2, status="COMPLETED")]))
    api = _client(rec)

    tasks = await api.list_all()

    assert [t.id for t in tasks] == [1, 2]
    assert tasks[1].status is TaskStatus.COMPLETED
    req = rec.requests[0]
    assert req.method == "GET"
    assert str(req.url) == BASE


@pytest.mark.asyncio
async def test_get_by_id_and_not_found() -> None:
    rec = Recorder(httpx.Response(200, json=_wire(5)), httpx.Response(404))
    api = _client(rec)

    task = await api.get_by_id(5)
    assert task.id == 5
    assert rec.requests[0].url.path == "/api/tasks/5"

    with pytest.raises(TaskNotFoundError) as exc_info:
        await api.get_by_id(6)
    assert exc_info.value.task_id == 6
    assert isinstance(exc_info.value, TransportError)


@pytest.mark.asyncio
async def test_create_posts_payload() -> None:
    rec = Recorder(httpx.Response(201, json=_wire(9, title="New")))
    api = _client(rec)

    task = await api.create(
        CreateTaskRequest(title="New", status=TaskStatus.TODO, due_date_time="2026-11-01T10:00:00.000Z")
    )

    assert task.id == 9
    req = rec.requests[0]
    assert req.method == "POST"
    assert req.url.path == "/api/tasks"
    assert json.loads(req.content) == {
        "title": "New",
        "status": "TODO",
        "dueDateTime": "2026-11-01T10:00:00.000Z",
    }


@pytest.mark.asyncio
async def test_update_puts_only_present_fields() -> None:
    rec = Recorder(httpx.Response(200, json=_wire(3, title="Renamed")))
    api = _client(rec)

    task = await api.update(3, UpdateTaskRequest(title="Renamed"))

    assert task.title == "Renamed"
    req = rec.requests[0]
    assert req.method == "PUT"
    assert req.url.path == "/api/tasks/3"
    assert json.loads(req.content) == {"title": "Renamed"}


@pytest.mark.asyncio
async def test_update_status_patches_status_path() -> None:
    rec = Recorder(httpx.Response(200, json=_wire(4, status="CANCELLED")))
    api = _client(rec)

    task = await api.update_status(4, TaskStatus.CANCELLED)

    assert task.status is TaskStatus.CANCELLED
    req = rec.requests[0]
    assert req.method == "PATCH"
    assert req.url.path == "/api/tasks/4/status"
    assert json.loads(req.content) == {"status": "CANCELLED"}


@pytest.mark.asyncio
async def test_delete_accepts_no_content() -> None:
    rec = Recorder(httpx.Response(204))
    api = _client(rec)

    assert await api.delete(8) is None
    assert rec.requests[0].method == "DELETE"
    assert rec.requests[0].url.path == "/api/tasks/8"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 404, 409, 500, 503])
async def test_non_success_responses_raise_transport_error(status_code: int) -> None:
    api = _client(Recorder(httpx.Response(status_code)))
    with pytest.raises(TransportError) as exc_info:
        await api.update_status(1, "TODO")
    assert exc_info.value.status_code == status_code
    assert exc_info.value.operation == "update_status"


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error_once() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    api = _client(handler)
    with pytest.raises(TransportError) as exc_info:
        await api.list_all()

    assert exc_info.value.status_code is None
    assert len(calls) == 1  # no retries


@pytest.mark.asyncio
async def test_malformed_bodies_raise_transport_error() -> None:
    api = _client(
        Recorder(
            httpx.Response(200, content=b"<html>oops</html>"),
            httpx.Response(200, json={"not": "a list"}),
            httpx.Response(200, json=[{"id": 1}]),
        )
    )
    for _ in range(3):
        with pytest.raises(TransportError):
            await api.list_all()


@pytest.mark.asyncio
async def test_owned_client_is_closed_by_context_manager() -> None:
    async with TaskApiClient(BASE + "/") as api:
        assert api.base_url == BASE
    assert api._client.is_closed
