# src/agent_desk/core/window.py

"""
Session window: the current page of tasks plus pagination metadata.

Key invariants:
- page is always within [1, total_pages],
- page, total_pages and tasks live in one immutable snapshot that is swapped
  as a whole, so observers never see a new list with an old count (or vice versa),
- the snapshot only changes after the server answered successfully; while a
  load is outstanding the previous page stays visible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..config import DEFAULT_PAGE_SIZE
from .models import Task, TaskStatus
from .ports import TaskService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WindowSnapshot:
    page: int
    total_pages: int
    tasks: tuple[Task, ...]

    def find(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


WindowListener = Callable[[WindowSnapshot, WindowSnapshot], None]


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(int(page), max(1, int(total_pages))))


class SessionWindow:
    def __init__(self, service: TaskService, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._service = service
        self.page_size = max(1, int(page_size))
        self._snapshot = WindowSnapshot(page=1, total_pages=1, tasks=())
        self._listeners: list[WindowListener] = []
        self.loads_in_flight = 0

    @property
    def snapshot(self) -> WindowSnapshot:
        return self._snapshot

    @property
    def page(self) -> int:
        return self._snapshot.page

    @property
    def total_pages(self) -> int:
        return self._snapshot.total_pages

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._snapshot.tasks

    def add_listener(self, listener: WindowListener) -> None:
        """Called with (old, new) after every successful load."""
        self._listeners.append(listener)

    def find(self, task_id: str) -> Task | None:
        return self._snapshot.find(task_id)

    def tasks_with_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._snapshot.tasks if t.status is status]

    async def load(self, page: int) -> None:
        """
        Fetch `page` and swap it in.

        Raises FetchFailure on failure; the current snapshot is left untouched.
        """
        page = max(1, int(page))

        self.loads_in_flight += 1
        try:
            result = await self._service.list_tasks(page, self.page_size)
        finally:
            self.loads_in_flight -= 1

        total_pages = max(1, int(result.total_pages))
        if page > total_pages:
            # The dataset shrank under us: show the last page that exists instead.
            logger.info("Page %d is past the end (total=%d); loading last page", page, total_pages)
            await self.load(total_pages)
            return

        old = self._snapshot
        new = WindowSnapshot(page=page, total_pages=total_pages, tasks=tuple(result.tasks))
        self._snapshot = new
        logger.debug("Loaded page %d/%d (%d tasks)", page, total_pages, len(new.tasks))

        for listener in list(self._listeners):
            listener(old, new)

    async def set_page(self, delta: int) -> bool:
        """
        Move by `delta` pages, clamped to [1, total_pages].

        Returns False (and sends nothing) when the clamped page equals the current one.
        """
        current = self._snapshot
        target = clamp_page(current.page + int(delta), current.total_pages)
        if target == current.page:
            return False
        await self.load(target)
        return True

    def reset(self) -> None:
        """Back to an empty first page (after logout)."""
        self._snapshot = WindowSnapshot(page=1, total_pages=1, tasks=())

    def replace_task(self, task: Task) -> bool:
        """
        Swap in `task` (matched by id) keeping order and every other task.

        Returns False when the task is not on the current page; nothing changes then.
        """
        current = self._snapshot
        if current.find(task.id) is None:
            return False
        tasks = tuple(task if t.id == task.id else t for t in current.tasks)
        self._snapshot = WindowSnapshot(page=current.page, total_pages=current.total_pages, tasks=tasks)
        return True
