# src/agent_desk/core/dashboard.py

"""
Dashboard orchestration.

This module is front-end agnostic:
- front-ends (console, tests) call the async actions below,
- the actions drive the window / engine / ledger / focus components,
- every FetchFailure is caught right here, logged and turned into a
  user-visible notification; nothing propagates further.

Key invariants:
- state changes only after the server confirmed (components enforce it),
- a second status change for a task with one still outstanding is ignored,
- after a page load the focus survives only if its task is on the new page.
"""

from __future__ import annotations

import logging

from ..auth.session import SessionStore
from .errors import FetchFailure, InvalidTransition
from .focus import FocusController
from .ledger import AddOnLedger
from .models import Profile, Task, TaskStatus
from .notifications import PendingNotification, badge_count, pending_notifications
from .ports import Notifier, TaskService
from .transitions import StatusTransitionEngine
from .window import SessionWindow, WindowSnapshot

logger = logging.getLogger(__name__)


class Dashboard:
    def __init__(
        self,
        service: TaskService,
        notifier: Notifier,
        *,
        page_size: int,
        session: SessionStore | None = None,
    ) -> None:
        self.service = service
        self.notifier = notifier
        self.session = session

        self.window = SessionWindow(service, page_size=page_size)
        self.engine = StatusTransitionEngine(service, self.window)
        self.ledger = AddOnLedger(service)
        self.focus = FocusController(self.ledger)
        self.profile = Profile()

        self._status_in_flight: set[str] = set()
        self.window.add_listener(self._on_page_loaded)

    # ---- internals ----

    def _on_page_loaded(self, old: WindowSnapshot, new: WindowSnapshot) -> None:
        focused = self.focus.focused
        if focused is None:
            return
        current = new.find(focused.id)
        if current is None:
            logger.info("Focused task %s is not on page %d; closing it", focused.id, new.page)
            self.focus.close()
        else:
            self.focus.sync(current)

    def _report(self, err: FetchFailure, description: str) -> None:
        logger.error("Error during %s: %s", err.operation, err)
        self.notifier.error("Error", description)

    # ---- task window ----

    async def load_page(self, page: int | None = None) -> bool:
        """Load `page` (default: reload the current one)."""
        target = self.window.page if page is None else page
        try:
            await self.window.load(target)
        except FetchFailure as e:
            self._report(e, "Failed to fetch dashboard data. Please try again.")
            return False
        return True

    async def _move(self, delta: int) -> bool:
        try:
            return await self.window.set_page(delta)
        except FetchFailure as e:
            self._report(e, "Failed to fetch dashboard data. Please try again.")
            return False

    async def next_page(self) -> bool:
        return await self._move(+1)

    async def previous_page(self) -> bool:
        return await self._move(-1)

    def tasks(self, status: TaskStatus | None = None) -> list[Task]:
        if status is None:
            return list(self.window.tasks)
        return self.window.tasks_with_status(status)

    # ---- lifecycle ----

    def is_updating(self, task_id: str) -> bool:
        return task_id in self._status_in_flight

    async def change_status(self, task_id: str, target: TaskStatus) -> bool:
        target = TaskStatus.from_wire(target)
        if task_id in self._status_in_flight:
            logger.debug("Status change for task %s already outstanding; ignored", task_id)
            return False

        self._status_in_flight.add(task_id)
        try:
            updated = await self.engine.advance(task_id, target)
        except InvalidTransition as e:
            logger.warning("Rejected status change: %s", e)
            self.notifier.error("Error", f"Task cannot be moved to {target.value} from its current status.")
            return False
        except FetchFailure as e:
            self._report(e, "Failed to update task status. Please try again.")
            return False
        finally:
            self._status_in_flight.discard(task_id)

        if updated is not None:
            self.focus.sync(updated)
        self.notifier.success("Success", f"Task status updated to {target.value}.")
        return True

    async def start_task(self, task_id: str) -> bool:
        return await self.change_status(task_id, TaskStatus.IN_PROGRESS)

    async def complete_task(self, task_id: str) -> bool:
        return await self.change_status(task_id, TaskStatus.COMPLETED)

    # ---- pending notifications ----

    def pending(self) -> list[PendingNotification]:
        return pending_notifications(self.window, self.start_task)

    def badge_count(self) -> int:
        return badge_count(self.window)

    # ---- focus + add-on services ----

    async def open_task(self, task: Task) -> bool:
        try:
            await self.focus.open(task)
        except FetchFailure as e:
            current = self.focus.focused
            if current is None or current.id != task.id:
                logger.debug("Service list for task %s failed after focus moved on: %s", task.id, e)
                return False
            self._report(e, "Failed to fetch extra services. Please try again.")
            return False
        return True

    def close_task(self) -> None:
        self.focus.close()

    async def add_service(self, description: str, extra_price: object = None) -> bool:
        """Add an add-on to the focused task; silent no-op without focus or description."""
        task = self.focus.focused
        if task is None:
            return False
        try:
            added = await self.ledger.add(task.id, description, extra_price)
        except FetchFailure as e:
            self._report(e, "Failed to add service. Please try again.")
            return False
        if added:
            self.notifier.success("Success", "Service added successfully.")
        return added

    # ---- profile / session glue ----

    async def fetch_profile(self) -> bool:
        try:
            self.profile = await self.service.get_profile()
        except FetchFailure as e:
            self._report(e, "Failed to fetch profile. Please try again.")
            return False
        return True

    async def update_profile(self, profile: Profile) -> bool:
        try:
            self.profile = await self.service.update_profile(profile)
        except FetchFailure as e:
            self._report(e, "Failed to update profile. Please try again.")
            return False
        self.notifier.success("Success", "Profile updated successfully.")
        return True

    async def logout(self) -> bool:
        try:
            await self.service.logout()
        except FetchFailure as e:
            self._report(e, "Failed to log out. Please try again.")
            return False

        if self.session is not None:
            self.session.clear()
        self.focus.close()
        self.window.reset()
        self.profile = Profile()
        self.notifier.success("Logged Out", "You have been successfully logged out.")
        return True
