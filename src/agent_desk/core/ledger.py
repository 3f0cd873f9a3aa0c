# src/agent_desk/core/ledger.py

"""
Add-on service ledger for the focused task.

The list is never patched locally: it is replaced wholesale by whatever the
server returned for the last successful listing or add. Every refresh/clear
starts a new generation; a response that arrives for an older generation
(or for a task that is no longer in scope) is dropped, so the last opened
task always wins.
"""

from __future__ import annotations

import logging

from .models import AddOnService, coerce_extra_price
from .ports import TaskService

logger = logging.getLogger(__name__)


class AddOnLedger:
    def __init__(self, service: TaskService) -> None:
        self._service = service
        self._task_id: str | None = None
        self._services: tuple[AddOnService, ...] = ()
        self._refreshed = False
        self._generation = 0

    @property
    def task_id(self) -> str | None:
        return self._task_id

    @property
    def services(self) -> tuple[AddOnService, ...]:
        return self._services

    @property
    def refreshed(self) -> bool:
        """False until the first successful listing for the task in scope."""
        return self._refreshed

    def total_extra(self) -> float:
        return sum(s.extra_price for s in self._services)

    def clear(self) -> None:
        self._generation += 1
        self._task_id = None
        self._services = ()
        self._refreshed = False

    def _is_current(self, generation: int, task_id: str) -> bool:
        return generation == self._generation and task_id == self._task_id

    async def refresh(self, task_id: str) -> None:
        """
        Scope the ledger to `task_id` and load its list from the server.

        Raises FetchFailure; the ledger then stays empty/unrefreshed for this task.
        """
        self._generation += 1
        generation = self._generation
        self._task_id = task_id
        self._services = ()
        self._refreshed = False

        services = await self._service.list_extra_services(task_id)

        if not self._is_current(generation, task_id):
            logger.debug("Dropping stale service list for task %s", task_id)
            return
        self._services = tuple(services)
        self._refreshed = True

    async def add(self, task_id: str, description: str, extra_price: object = None) -> bool:
        """
        Create an add-on service and adopt the server's full list.

        Returns False without sending anything when the description is blank.
        Raises FetchFailure; the ledger is left unchanged then.
        """
        description = (description or "").strip()
        if not description:
            logger.debug("Add-on with empty description skipped (task %s)", task_id)
            return False

        price = coerce_extra_price(extra_price)
        generation = self._generation

        services = await self._service.add_extra_service(
            task_id, description=description, extra_price=price
        )

        if not self._is_current(generation, task_id):
            # Focus moved while the request was out; the new scope has its own list.
            logger.debug("Dropping service list from add for task %s (scope changed)", task_id)
            return True
        self._services = tuple(services)
        self._refreshed = True
        logger.info("Add-on added to task %s (%d services now)", task_id, len(self._services))
        return True
