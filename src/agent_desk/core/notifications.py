# src/agent_desk/core/notifications.py

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .models import Task, TaskStatus
from .window import SessionWindow

StartAction = Callable[[str], Awaitable[object]]


@dataclass(slots=True, frozen=True)
class PendingNotification:
    """A task awaiting start, with its one-step "Start" action."""

    task: Task
    action: StartAction

    async def start(self) -> object:
        return await self.action(self.task.id)


def pending_tasks(window: SessionWindow) -> list[Task]:
    # Scoped to the loaded page only: pending work on other pages is not counted.
    return window.tasks_with_status(TaskStatus.PENDING)


def badge_count(window: SessionWindow) -> int:
    return len(pending_tasks(window))


def pending_notifications(window: SessionWindow, start: StartAction) -> list[PendingNotification]:
    """`start` receives the task id; the Dashboard binds its own `start_task` here."""
    return [PendingNotification(task=t, action=start) for t in pending_tasks(window)]
