# src/agent_desk/core/transitions.py

from __future__ import annotations

"""
Status transition engine.

Confirm-then-apply: the remote service is asked first, and only a successful
answer changes the task held by the session window. There is no optimistic
update and therefore nothing to roll back on failure.
"""

import logging

from .errors import InvalidTransition
from .models import Task, TaskStatus
from .ports import TaskService
from .window import SessionWindow

logger = logging.getLogger(__name__)

ALLOWED_TARGETS = (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED)


class StatusTransitionEngine:
    def __init__(self, service: TaskService, window: SessionWindow) -> None:
        self._service = service
        self._window = window

    def check(self, task_id: str, target: TaskStatus) -> None:
        """
        Raise InvalidTransition unless `target` is the next stage.

        Only tasks on the current page can be checked; for others the current
        status is unknown locally and the request goes out unguarded.
        """
        if target not in ALLOWED_TARGETS:
            raise InvalidTransition(task_id, None, target)
        task = self._window.find(task_id)
        if task is not None and task.status.next() is not target:
            raise InvalidTransition(task_id, task.status, target)

    async def advance(self, task_id: str, target: TaskStatus) -> Task | None:
        """
        Move one task forward by exactly one stage.

        Returns the updated task when it is on the current page, None otherwise.
        Raises InvalidTransition (nothing sent) or FetchFailure (nothing changed).
        """
        target = TaskStatus.from_wire(target)
        self.check(task_id, target)

        if target is TaskStatus.IN_PROGRESS:
            await self._service.mark_in_progress(task_id)
        else:
            await self._service.mark_completed(task_id)

        logger.info("Task %s -> %s", task_id, target.value)

        # Re-read after the await: the page may have been replaced meanwhile.
        task = self._window.find(task_id)
        if task is None:
            return None
        updated = task.with_status(target)
        self._window.replace_task(updated)
        return updated

    async def start(self, task_id: str) -> Task | None:
        return await self.advance(task_id, TaskStatus.IN_PROGRESS)

    async def complete(self, task_id: str) -> Task | None:
        return await self.advance(task_id, TaskStatus.COMPLETED)
