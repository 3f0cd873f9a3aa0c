# tests/fakes.py

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field

from agent_desk.core.errors import FetchFailure
from agent_desk.core.models import AddOnService, Profile, Task, TaskPage, TaskStatus


def make_tasks(*statuses: TaskStatus, prefix: str = "t") -> list[Task]:
    return [
        Task(id=f"{prefix}{i}", title=f"Task {prefix}{i}", description=f"about {prefix}{i}", status=s)
        for i, s in enumerate(statuses, start=1)
    ]


class FakeTaskService:
    """
    In-memory TaskService for unit tests.

    - Serves `tasks` in pages of `limit`
    - `fail` holds operation names that should raise FetchFailure
    - `gates[(op, key)]` blocks that call until the event is set, so tests can
      hold a response and control the order in which responses arrive
    - Records every call for assertions
    """

    def __init__(
        self,
        tasks: list[Task] | None = None,
        services: dict[str, list[AddOnService]] | None = None,
    ) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.services: dict[str, list[AddOnService]] = {k: list(v) for k, v in (services or {}).items()}
        self.profile = Profile(name="Ann Agent", email="ann@example.com", phone_number="555-0100")
        self.total_pages_override: int | None = None
        self.fail: set[str] = set()
        self.gates: dict[tuple[str, object], asyncio.Event] = {}
        self.calls: list[tuple[str, object]] = []
        self.profile_updates: list[Profile] = []

    def calls_of(self, op: str) -> list[object]:
        return [arg for name, arg in self.calls if name == op]

    def hold(self, op: str, key: object) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[(op, key)] = event
        return event

    async def _enter(self, op: str, key: object) -> None:
        self.calls.append((op, key))
        gate = self.gates.get((op, key))
        if gate is not None:
            await gate.wait()
        if op in self.fail:
            raise FetchFailure(op, "simulated failure", status_code=500)

    async def list_tasks(self, page: int, limit: int) -> TaskPage:
        await self._enter("list_tasks", page)
        total = self.total_pages_override or max(1, math.ceil(len(self.tasks) / limit))
        chunk = self.tasks[(page - 1) * limit: page * limit]
        return TaskPage(tasks=tuple(chunk), total_pages=total)

    def _set_status(self, task_id: str, status: TaskStatus) -> None:
        self.tasks = [t.with_status(status) if t.id == task_id else t for t in self.tasks]

    async def mark_in_progress(self, task_id: str) -> None:
        await self._enter("mark_in_progress", task_id)
        self._set_status(task_id, TaskStatus.IN_PROGRESS)

    async def mark_completed(self, task_id: str) -> None:
        await self._enter("mark_completed", task_id)
        self._set_status(task_id, TaskStatus.COMPLETED)

    async def list_extra_services(self, task_id: str) -> list[AddOnService]:
        await self._enter("list_extra_services", task_id)
        return list(self.services.get(task_id, []))

    async def add_extra_service(self, task_id: str, *, description: str, extra_price: float) -> list[AddOnService]:
        await self._enter("add_extra_service", (task_id, description, extra_price))
        self.services.setdefault(task_id, []).append(AddOnService(description, extra_price))
        return list(self.services[task_id])

    async def get_profile(self) -> Profile:
        await self._enter("get_profile", None)
        return self.profile

    async def update_profile(self, profile: Profile) -> Profile:
        await self._enter("update_profile", profile.name)
        self.profile_updates.append(profile)
        self.profile = profile
        return profile

    async def logout(self) -> None:
        await self._enter("logout", None)


@dataclass(slots=True)
class Note:
    kind: str
    title: str
    description: str


@dataclass(slots=True)
class FakeNotifier:
    """Records notifications instead of showing them."""

    notes: list[Note] = field(default_factory=list)

    def success(self, title: str, description: str) -> None:
        self.notes.append(Note("success", title, description))

    def error(self, title: str, description: str) -> None:
        self.notes.append(Note("error", title, description))

    @property
    def errors(self) -> list[Note]:
        return [n for n in self.notes if n.kind == "error"]
