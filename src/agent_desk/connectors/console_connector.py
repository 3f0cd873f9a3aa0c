# src/agent_desk/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts_block(text: str) -> None:
    ts = _ts_local()
    lines = text.splitlines() or [""]
    for i, line in enumerate(lines):
        # keep alignment for multi-line command output
        prefix = f"[{ts}] " if i == 0 else " " * (len(ts) + 3)
        print(prefix + line)


class ConsoleNotifier:
    """Notifier port for the terminal: toasts become timestamped lines."""

    def success(self, title: str, description: str) -> None:
        _print_ts_block(f"[{title}] {description}")

    def error(self, title: str, description: str) -> None:
        _print_ts_block(f"[{title}] {description}")
        sys.stdout.flush()


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    dash = state.dashboard
    app_name = str(getattr(state.settings, "app_name", "agent-desk"))

    # Initial load, like opening the dashboard page.
    await dash.fetch_profile()
    await dash.load_page(1)

    welcome = f"Welcome, {dash.profile.name}" if dash.profile.name else f"Welcome to {app_name}"
    _print_ts_block(
        f"{welcome}. Page {dash.window.page} of {dash.window.total_pages}, "
        f"{dash.badge_count()} pending. Use /help for commands, /exit to quit.\n"
    )

    while True:
        try:
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            _print_ts_block("Commands start with '/'. Use /help to list them.")
            continue
        if response:
            _print_ts_block(response)

    logger.info("Console connector finished.")
