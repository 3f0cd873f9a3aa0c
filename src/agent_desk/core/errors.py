# src/agent_desk/core/errors.py

from __future__ import annotations


class DeskError(Exception):
    """Base class for errors raised by the dashboard core."""


class FetchFailure(DeskError):
    """
    A request to the remote task service did not succeed.

    Covers transport errors, non-2xx responses and undecodable bodies alike;
    the core never distinguishes them (nothing is retried automatically).
    """

    def __init__(self, operation: str, message: str = "", *, status_code: int | None = None) -> None:
        self.operation = operation
        self.status_code = status_code
        detail = message or "request failed"
        if status_code is not None:
            detail = f"{detail} (HTTP {status_code})"
        super().__init__(f"{operation}: {detail}")


class InvalidTransition(DeskError):
    """A status change that would skip or reverse a lifecycle stage."""

    def __init__(self, task_id: str, current: object, target: object) -> None:
        self.task_id = task_id
        self.current = current
        self.target = target
        super().__init__(f"task {task_id}: cannot move from {current} to {target}")
