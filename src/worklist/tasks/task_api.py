# src/worklist/tasks/task_api.py

"""
Remote gateway for the task service (REST, JSON).

Stateless: it serializes requests and deserializes responses, nothing else.
One attempt per call, no retries, no cancellation. Every failure surfaces as
TransportError so callers have a single thing to catch.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import TaskNotFoundError, TransportError
from .task_models import (
    CreateTaskRequest,
    Task,
    TaskPayloadError,
    TaskStatus,
    UpdateTaskRequest,
    UpdateTaskStatusRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api/tasks"


def _make_timeout(timeout_seconds: float | None) -> httpx.Timeout | None:
    if timeout_seconds is None:
        return None
    return httpx.Timeout(timeout_seconds)


class TaskApiClient:
    """
    Async client for /api/tasks.

    `client` can be injected (tests pass one built on httpx.MockTransport);
    otherwise an AsyncClient is created and owned by this object.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        # Absolute URLs are built by hand: httpx's base_url merging would turn
        # GET "" into ".../api/tasks/" (trailing slash).
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        if client is None:
            kwargs: dict[str, Any] = {"headers": {"Content-Type": "application/json"}}
            timeout = _make_timeout(timeout_seconds)
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = httpx.AsyncClient(**kwargs)
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    def _url(self, suffix: str = "") -> str:
        return f"{self._base_url}{suffix}"

    async def _send(
        self,
        operation: str,
        method: str,
        suffix: str = "",
        *,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = self._url(suffix)
        logger.debug("%s %s (%s)", method, url, operation)
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise TransportError(operation, f"{e.__class__.__name__}: {e}") from e

        if not response.is_success:
            logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
            raise TransportError(
                operation,
                response.reason_phrase or "request failed",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _decode(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                operation, "response body is not valid JSON", status_code=response.status_code
            ) from e

    def _task_from(self, operation: str, response: httpx.Response) -> Task:
        try:
            return Task.from_wire(self._decode(operation, response))
        except TaskPayloadError as e:
            raise TransportError(operation, str(e), status_code=response.status_code) from e

    # ---- public API ----

    async def list_all(self) -> list[Task]:
        response = await self._send("list", "GET")
        data = self._decode("list", response)
        if not isinstance(data, list):
            raise TransportError("list", "expected a JSON array", status_code=response.status_code)
        try:
            tasks = [Task.from_wire(item) for item in data]
        except TaskPayloadError as e:
            raise TransportError("list", str(e), status_code=response.status_code) from e
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    async def get_by_id(self, task_id: int) -> Task:
        try:
            response = await self._send("get", "GET", f"/{task_id}")
        except TransportError as e:
            if e.status_code == 404:
                raise TaskNotFoundError("get", task_id) from e
            raise
        return self._task_from("get", response)

    async def create(self, request: CreateTaskRequest) -> Task:
        response = await self._send("create", "POST", json=request.to_payload())
        return self._task_from("create", response)

    async def update(self, task_id: int, request: UpdateTaskRequest) -> Task:
        response = await self._send("update", "PUT", f"/{task_id}", json=request.to_payload())
        return self._task_from("update", response)

    async def update_status(self, task_id: int, status: TaskStatus | str) -> Task:
        payload = UpdateTaskStatusRequest(status=status).to_payload()
        response = await self._send("update_status", "PATCH", f"/{task_id}/status", json=payload)
        return self._task_from("update_status", response)

    async def delete(self, task_id: int) -> None:
        await self._send("delete", "DELETE", f"/{task_id}")
