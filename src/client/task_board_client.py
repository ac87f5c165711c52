"""Async HTTP client for the Task Board API.

Usage:
    async with TaskBoardClient("http://localhost:8080") as client:
        await client.login("ada@example.com", "secret")
        tasks = await client.list_tasks()
"""

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx
from opentelemetry import trace

from client.session import ClientSession

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class TaskBoardClientError(Exception):
    """Base class for client-side failures."""


@dataclass
class TaskBoardApiError(TaskBoardClientError):
    """The API answered with a non-success status.

    Attributes:
        status_code: HTTP status code
        detail: Error detail from the response body, or its raw text
    """

    status_code: int
    detail: Any = None

    def __str__(self) -> str:
        return f"Task Board API error {self.status_code}: {self.detail}"


class TaskBoardTimeoutError(TaskBoardClientError):
    """The request timed out; it is safe to retry."""


class TaskBoardClient:
    """Typed wrapper around the /api endpoints.

    Args:
        base_url: Service root, e.g. http://localhost:8080
        session: Credential holder; a fresh one is created when omitted
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        session: ClientSession | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session = session or ClientSession()
        self._http = httpx.AsyncClient(base_url=f"{base_url.rstrip('/')}/api", timeout=timeout, transport=transport)

    async def __aenter__(self) -> "TaskBoardClient":
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        with tracer.start_as_current_span(f"task_board.{method.lower()}") as span:
            span.set_attribute("http.route", path)
            try:
                response = await self._http.request(method, path, json=json, headers=self.session.authorization_header())
            except httpx.TimeoutException as e:
                raise TaskBoardTimeoutError(f"{method} {path} timed out") from e

            if response.status_code == 401 and self.session.is_authenticated:
                logger.info("Server rejected the session token; clearing credentials")
                self.session.clear()
            if response.is_error:
                raise TaskBoardApiError(response.status_code, self._error_detail(response))
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    @staticmethod
    def _error_detail(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return body.get("detail", body)
        return body

    # Authentication

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self._request("POST", "/auth/login", {"email": email, "password": password})
        self.session.issue(data["access_token"], data.get("user"), data.get("expires_in"))
        return data

    async def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        return await self._request("POST", "/auth/register", {"name": name, "email": email, "password": password})

    def logout(self) -> None:
        self.session.clear()

    # Tasks

    async def list_tasks(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/tasks/")

    async def get_task(self, task_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/tasks/{task_id}")

    async def create_task(self, title: str, **fields: Any) -> dict[str, Any]:
        return await self._request("POST", "/tasks/", {"title": title, **fields})

    async def update_task(self, task_id: str, **fields: Any) -> dict[str, Any]:
        return await self._request("PATCH", f"/tasks/{task_id}", fields)

    async def delete_task(self, task_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/tasks/{task_id}")

    async def change_status(self, task_id: str, status: str) -> dict[str, Any]:
        return await self._request("PATCH", f"/tasks/{task_id}/status", {"status": status})

    async def add_comment(self, task_id: str, text: str) -> dict[str, Any]:
        return await self._request("POST", f"/tasks/{task_id}/comments", {"text": text})

    async def add_subtask(self, task_id: str, title: str) -> dict[str, Any]:
        return await self._request("POST", f"/tasks/{task_id}/subtasks", {"title": title})

    async def toggle_subtask(self, task_id: str, subtask_id: str) -> dict[str, Any]:
        return await self._request("PATCH", f"/tasks/{task_id}/subtasks/{subtask_id}/toggle")

    async def get_statistics(self) -> dict[str, Any]:
        return await self._request("GET", "/analytics/summary")

    # Administration

    async def list_users(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/admin/users")

    async def create_user(self, name: str, email: str, password: str, role: str = "employee") -> dict[str, Any]:
        return await self._request("POST", "/admin/users", {"name": name, "email": email, "password": password, "role": role})

    async def delete_user(self, user_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/admin/users/{user_id}")

    async def update_user_role(self, user_id: str, role: str) -> dict[str, Any]:
        return await self._request("PATCH", "/admin/update-role", {"user_id": user_id, "role": role})

    async def list_all_tasks(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/admin/tasks")
