# src/taskboard/api/client.py

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..core.errors import TransportError
from ..core.ports import TaskFields
from ..tasks.task_models import Statistics, Task

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"
STATISTICS_PATH = "/tasks/statistics"


def _task_path(task_id: str) -> str:
    # Ids are opaque: "/", "?", "#" and ".." must stay inside the path segment.
    return f"{TASKS_PATH}/{quote(str(task_id), safe='')}"


def _error_message(response: httpx.Response) -> str | None:
    """Pull a human message out of an error body ({"message": ...} and friends)."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class HttpTaskApi:
    """
    TaskApi implementation over httpx.AsyncClient.

    - One client per instance (connection pooling); close with aclose().
    - No retries. Every failure becomes a TransportError.
    - No timeout unless one is configured.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings) -> HttpTaskApi:
        return cls(
            str(getattr(settings, "api_base_url")),
            timeout_seconds=getattr(settings, "api_timeout_seconds", None),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            resp = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(resp)
            logger.warning("%s %s -> HTTP %s: %s", method, path, resp.status_code, message)
            raise TransportError(message, status_code=resp.status_code) from exc

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body", method, path)
            raise TransportError("Malformed response from server", status_code=resp.status_code) from exc

    async def list_tasks(self) -> list[Task]:
        body = await self._request("GET", TASKS_PATH)
        raw_tasks = body.get("tasks") if isinstance(body, dict) else None
        tasks: list[Task] = []
        for raw in raw_tasks or []:
            if not isinstance(raw, dict):
                continue
            try:
                tasks.append(Task.from_api(raw))
            except ValueError:
                logger.warning("Skipping task without id: %r", raw)
        logger.debug("Fetched %d task(s)", len(tasks))
        return tasks

    async def create_task(self, fields: TaskFields) -> Task:
        body = await self._request("POST", TASKS_PATH, json=fields)
        return self._task_from_body(body)

    async def update_task(self, task_id: str, fields: TaskFields) -> Task:
        body = await self._request("PUT", _task_path(task_id), json=fields)
        return self._task_from_body(body)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", _task_path(task_id))

    async def get_statistics(self) -> Statistics:
        body = await self._request("GET", STATISTICS_PATH)
        if not isinstance(body, dict):
            raise TransportError("Malformed statistics response")
        return Statistics.from_api(body)

    @staticmethod
    def _task_from_body(body: Any) -> Task:
        # Some backends wrap the document: {"task": {...}}.
        if isinstance(body, dict) and isinstance(body.get("task"), dict):
            body = body["task"]
        if not isinstance(body, dict):
            raise TransportError("Malformed task response")
        try:
            return Task.from_api(body)
        except ValueError as exc:
            raise TransportError("Malformed task response") from exc
