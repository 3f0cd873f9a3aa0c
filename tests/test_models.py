# tests/test_models.py

from __future__ import annotations

import pytest

from agent_desk.core.models import AddOnService, Task, TaskStatus, coerce_extra_price


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (-5, 0.0),
        (None, 0.0),
        ("", 0.0),
        ("  ", 0.0),
        ("12.5", 12.5),
        ("nope", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (True, 0.0),
        (7, 7.0),
    ],
)
def test_coerce_extra_price(raw: object, expected: float) -> None:
    assert coerce_extra_price(raw) == expected


def test_status_order() -> None:
    assert TaskStatus.PENDING.next() is TaskStatus.IN_PROGRESS
    assert TaskStatus.IN_PROGRESS.next() is TaskStatus.COMPLETED
    assert TaskStatus.COMPLETED.next() is None


@pytest.mark.parametrize("raw", ["In Progress", "InProgress", "in_progress", "in-progress"])
def test_status_from_wire_spellings(raw: str) -> None:
    assert TaskStatus.from_wire(raw) is TaskStatus.IN_PROGRESS


def test_status_from_wire_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        TaskStatus.from_wire("Archived")


def test_task_from_api_uses_underscore_id() -> None:
    task = Task.from_api({"_id": "65f0", "title": "Kitchen", "description": "Deep", "status": "Completed"})
    assert task == Task(id="65f0", title="Kitchen", description="Deep", status=TaskStatus.COMPLETED)


def test_task_from_api_requires_id() -> None:
    with pytest.raises(ValueError):
        Task.from_api({"title": "x", "status": "Pending"})


def test_add_on_from_api_normalizes_price() -> None:
    assert AddOnService.from_api({"description": "Oven", "extraPrice": "-1"}) == AddOnService("Oven", 0.0)
    assert AddOnService.from_api({"description": "Oven"}).extra_price == 0.0
