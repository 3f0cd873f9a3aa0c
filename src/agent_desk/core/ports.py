# src/agent_desk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
The HTTP client and the console front-end plug in here; tests plug in fakes.
"""

from typing import Protocol

from .models import AddOnService, Profile, TaskPage


class TaskService(Protocol):
    """
    Authoritative remote store.

    Every method raises FetchFailure when the request does not succeed.
    """

    async def list_tasks(self, page: int, limit: int) -> TaskPage: ...

    async def mark_in_progress(self, task_id: str) -> None: ...

    async def mark_completed(self, task_id: str) -> None: ...

    async def list_extra_services(self, task_id: str) -> list[AddOnService]: ...

    async def add_extra_service(
            self,
            task_id: str,
            *,
            description: str,
            extra_price: float,
    ) -> list[AddOnService]: ...

    # Profile / auth glue
    async def get_profile(self) -> Profile: ...

    async def update_profile(self, profile: Profile) -> Profile: ...

    async def logout(self) -> None: ...


class Notifier(Protocol):
    """
    User-visible notifications (toasts in a GUI, timestamped lines in the console).
    """

    def success(self, title: str, description: str) -> None: ...

    def error(self, title: str, description: str) -> None: ...
