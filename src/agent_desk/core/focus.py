# src/agent_desk/core/focus.py

from __future__ import annotations

import logging

from .ledger import AddOnLedger
from .models import Task

logger = logging.getLogger(__name__)


class FocusController:
    """At most one task under detailed inspection; owns the ledger's scope."""

    def __init__(self, ledger: AddOnLedger) -> None:
        self._ledger = ledger
        self._focused: Task | None = None

    @property
    def focused(self) -> Task | None:
        return self._focused

    @property
    def is_open(self) -> bool:
        return self._focused is not None

    async def open(self, task: Task) -> None:
        """
        Focus `task` (replacing any current focus) and refresh its ledger.

        A failed refresh keeps the focus with an empty ledger and re-raises.
        """
        self._focused = task
        logger.debug("Focus -> task %s", task.id)
        await self._ledger.refresh(task.id)

    def close(self) -> None:
        if self._focused is not None:
            logger.debug("Focus closed (task %s)", self._focused.id)
        self._focused = None
        self._ledger.clear()

    def sync(self, task: Task) -> None:
        """Pick up a newer copy of the focused task (same id) without touching the ledger."""
        if self._focused is not None and self._focused.id == task.id:
            self._focused = task
