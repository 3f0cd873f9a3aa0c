# src/agent_desk/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..auth.session import SessionStore
from .dashboard import Dashboard
from .ports import TaskService


@dataclass
class AppState:
    """
    Everything a front-end needs, passed explicitly (no module-level globals).

    settings is typed loosely so tests can pass a SimpleNamespace.
    """

    settings: Any
    session: SessionStore
    service: TaskService
    dashboard: Dashboard
