# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from agent_desk.auth.session import SessionStore
from agent_desk.core.dashboard import Dashboard
from agent_desk.core.models import TaskStatus
from agent_desk.core.state import AppState

from .fakes import FakeNotifier, FakeTaskService, make_tasks

P, W, C = TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="agent-desk-test",
        api_base_url="http://backend.test",
        api_token=None,
        page_size=10,
        http_timeout_seconds=None,
        data_dir=tmp_path,
        session_path=tmp_path / "session.json",
    )


@pytest.fixture()
def service() -> FakeTaskService:
    """
    Three pages of ten: page 1 has 3 pending / 4 in progress / 3 completed,
    page 2 has no pending tasks, page 3 has two pending.
    """
    page1 = make_tasks(P, W, C, P, W, W, C, P, W, C, prefix="a")
    page2 = make_tasks(W, C, W, C, W, C, W, C, W, C, prefix="b")
    page3 = make_tasks(P, P, prefix="c")
    return FakeTaskService(tasks=page1 + page2 + page3)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def session(settings: SimpleNamespace) -> SessionStore:
    return SessionStore(settings.session_path)


@pytest.fixture()
def dashboard(service: FakeTaskService, notifier: FakeNotifier, session: SessionStore) -> Dashboard:
    return Dashboard(service, notifier, page_size=10, session=session)


@pytest.fixture()
def state(settings: SimpleNamespace, session: SessionStore, service: FakeTaskService, dashboard: Dashboard) -> AppState:
    return AppState(settings=settings, session=session, service=service, dashboard=dashboard)
