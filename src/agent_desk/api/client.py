# src/agent_desk/api/client.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from ..core.errors import FetchFailure
from ..core.models import AddOnService, Profile, Task, TaskPage

logger = logging.getLogger(__name__)

TokenGetter = Callable[[], str | None]


def _make_timeout(seconds: float | None) -> httpx.Timeout:
    """
    No timeout unless configured: a hung request simply leaves the dashboard
    at its last-known-good state.
    """
    if seconds is None:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds, connect=min(seconds, 5.0))


def _services_from(data: Any, operation: str) -> list[AddOnService]:
    if not isinstance(data, dict):
        raise FetchFailure(operation, "unexpected response body")
    # Older backends call the list "extraTasks".
    raw = data.get("extraServices")
    if raw is None:
        raw = data.get("extraTasks")
    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise FetchFailure(operation, "service list is not a list")
    return [AddOnService.from_api(item) for item in raw if isinstance(item, dict)]


class RemoteTaskService:
    """
    HTTP client for the agent endpoints of the booking backend.

    Implements the TaskService port. Any transport error, non-2xx status or
    undecodable body is raised as FetchFailure; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        token: TokenGetter,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=_make_timeout(timeout_seconds),
            transport=transport,
        )

    async def __aenter__(self) -> RemoteTaskService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        headers: dict[str, str] = {}
        token = self._token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s params=%s", method, path, params)
        try:
            resp = await self._http.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.info("%s failed: %s", operation, e.__class__.__name__)
            raise FetchFailure(operation, f"transport error: {e.__class__.__name__}") from e

        if not resp.is_success:
            logger.info("%s failed: HTTP %s", operation, resp.status_code)
            raise FetchFailure(operation, "non-success response", status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise FetchFailure(operation, "response body is not JSON") from e

    async def list_tasks(self, page: int, limit: int) -> TaskPage:
        op = "fetch dashboard data"
        data = await self._request(op, "GET", "/agent/dashboard", params={"page": page, "limit": limit})
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise FetchFailure(op, "unexpected response body")
        try:
            tasks = tuple(Task.from_api(item) for item in data["tasks"])
            total_pages = int(data.get("totalPages") or 1)
        except (TypeError, ValueError) as e:
            raise FetchFailure(op, f"malformed task listing: {e}") from e
        return TaskPage(tasks=tasks, total_pages=max(1, total_pages))

    async def mark_in_progress(self, task_id: str) -> None:
        await self._request(
            "update task status", "PUT", "/agent/bookings/in-progress", json={"bookingId": task_id}
        )

    async def mark_completed(self, task_id: str) -> None:
        await self._request(
            "update task status", "PUT", "/agent/bookings/completed", json={"bookingId": task_id}
        )

    async def list_extra_services(self, task_id: str) -> list[AddOnService]:
        op = "fetch extra services"
        data = await self._request(op, "GET", f"/agent/bookings/{task_id}/extra-tasks")
        return _services_from(data, op)

    async def add_extra_service(
        self,
        task_id: str,
        *,
        description: str,
        extra_price: float,
    ) -> list[AddOnService]:
        op = "add service"
        body = AddOnService(description=description, extra_price=extra_price).to_api()
        data = await self._request(op, "POST", f"/agent/booking/{task_id}/service", json=body)
        return _services_from(data, op)

    async def get_profile(self) -> Profile:
        op = "fetch profile"
        data = await self._request(op, "GET", "/agent/profile")
        if not isinstance(data, dict):
            raise FetchFailure(op, "unexpected response body")
        return Profile.from_api(data)

    async def update_profile(self, profile: Profile) -> Profile:
        op = "update profile"
        data = await self._request(op, "PUT", "/agent/profile", json=profile.to_api())
        if not isinstance(data, dict):
            raise FetchFailure(op, "unexpected response body")
        return Profile.from_api(data)

    async def logout(self) -> None:
        await self._request("log out", "GET", "/auth/logout", params={"role": "AGENT"})
