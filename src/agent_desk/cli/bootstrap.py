# src/agent_desk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP client, credential store and dashboard into AppState.
"""

from __future__ import annotations

import logging

from ..api.client import RemoteTaskService
from ..auth.session import SessionStore
from ..config import get_settings
from ..core.dashboard import Dashboard
from ..core.ports import Notifier
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(notifier: Notifier, *, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    session = SessionStore(settings.session_path, env_token=settings.api_token)
    service = RemoteTaskService(
        settings.api_base_url,
        lambda: session.token,
        timeout_seconds=settings.http_timeout_seconds,
    )
    dashboard = Dashboard(service, notifier, page_size=settings.page_size, session=session)

    if session.token is None:
        logger.warning("No session credential set. Use /token <value> or AGENT_DESK_API_TOKEN.")

    return AppState(settings=settings, session=session, service=service, dashboard=dashboard)


async def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    close = getattr(state.service, "aclose", None)
    if close is None:
        return
    try:
        await close()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)
