# src/agent_desk/core/models.py

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the exact strings the remote service sends and expects.
    The lifecycle is strictly PENDING -> IN_PROGRESS -> COMPLETED.
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        if isinstance(raw, TaskStatus):
            return raw
        text = str(raw or "").strip()
        # Accept "InProgress" / "in_progress" spellings from older payloads.
        squashed = text.replace(" ", "").replace("_", "").replace("-", "").lower()
        for status in cls:
            if status.value.replace(" ", "").lower() == squashed:
                return status
        raise ValueError(f"unknown task status: {raw!r}")

    def next(self) -> TaskStatus | None:
        """The only status this one may move to, or None for the final stage."""
        if self is TaskStatus.PENDING:
            return TaskStatus.IN_PROGRESS
        if self is TaskStatus.IN_PROGRESS:
            return TaskStatus.COMPLETED
        return None


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Task:
        task_id = data.get("_id", data.get("id"))
        if task_id is None or str(task_id) == "":
            raise ValueError("task without id")
        return cls(
            id=str(task_id),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            status=TaskStatus.from_wire(data.get("status")),
        )

    def with_status(self, status: TaskStatus) -> Task:
        return replace(self, status=status)


def coerce_extra_price(raw: Any) -> float:
    """
    Normalize a user-entered price.

    Absent, empty, non-numeric and non-finite values become 0.0.
    Negative values are clamped to 0.0 (never rejected).
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return max(0.0, value)


@dataclass(frozen=True, slots=True)
class AddOnService:
    description: str
    extra_price: float = 0.0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> AddOnService:
        return cls(
            description=str(data.get("description") or ""),
            extra_price=coerce_extra_price(data.get("extraPrice")),
        )

    def to_api(self) -> dict[str, Any]:
        return {"description": self.description, "extraPrice": self.extra_price}


@dataclass(frozen=True, slots=True)
class TaskPage:
    """One page of the task listing as returned by the server."""

    tasks: tuple[Task, ...]
    total_pages: int


@dataclass(slots=True)
class Profile:
    name: str = ""
    email: str = ""
    phone_number: str = ""
    profile_picture: str = "/placeholder.svg"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Profile:
        return cls(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            phone_number=str(data.get("phoneNumber") or ""),
            profile_picture=str(data.get("profilePicture") or "/placeholder.svg"),
        )

    def to_api(self) -> dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "profilePicture": self.profile_picture,
        }
