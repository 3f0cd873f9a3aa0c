# src/agent_desk/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace

from ..core.models import AddOnService, Task, TaskStatus
from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], Awaitable[str] | str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        result = handler(state, args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

_STATUS_MARK = {
    TaskStatus.PENDING: " ",
    TaskStatus.IN_PROGRESS: "~",
    TaskStatus.COMPLETED: "x",
}

_FILTERS = {
    "pending": TaskStatus.PENDING,
    "in-progress": TaskStatus.IN_PROGRESS,
    "progress": TaskStatus.IN_PROGRESS,
    "completed": TaskStatus.COMPLETED,
    "done": TaskStatus.COMPLETED,
}


def _row_number(state: AppState, task: Task) -> int:
    for i, t in enumerate(state.dashboard.window.tasks, start=1):
        if t.id == task.id:
            return i
    return 0


def _format_task(state: AppState, task: Task) -> str:
    busy = " (updating...)" if state.dashboard.is_updating(task.id) else ""
    return f"  {_row_number(state, task)}. [{_STATUS_MARK[task.status]}] {task.title} <{task.status.value}>{busy}"


def _format_services(services: tuple[AddOnService, ...]) -> list[str]:
    if not services:
        return ["  No extra services added yet."]
    return [f"  - {s.description}: ${s.extra_price:.2f}" for s in services]


def resolve_task(state: AppState, ref: str) -> Task | None:
    """Row number on the current page (1-based) or task id."""
    window = state.dashboard.window
    if ref.isdigit():
        idx = int(ref)
        if 1 <= idx <= len(window.tasks):
            return window.tasks[idx - 1]
    return window.find(ref)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    dash = state.dashboard
    focused = dash.focus.focused
    return (
        "Status:\n"
        f"  API: {getattr(state.settings, 'api_base_url', '?')}\n"
        f"  Credential: {'set' if state.session.token else 'missing'}\n"
        f"  Page: {dash.window.page} of {dash.window.total_pages}\n"
        f"  Pending on this page: {dash.badge_count()}\n"
        f"  Open task: {focused.title if focused else '-'}"
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks               -> in-progress tab (default view)
    /tasks completed     -> completed tab
    /tasks pending|all
    """
    dash = state.dashboard
    which = args[0].lower() if args else "in-progress"

    if which == "all":
        tasks = dash.tasks()
        title = "All tasks"
    elif which in _FILTERS:
        status = _FILTERS[which]
        tasks = dash.tasks(status)
        title = f"{status.value} tasks"
    else:
        return "Usage: /tasks [in-progress|completed|pending|all]"

    lines = [f"{title} (page {dash.window.page} of {dash.window.total_pages}):"]
    if not tasks:
        lines.append("  (none on this page)")
    for task in tasks:
        lines.append(_format_task(state, task))
        if task.description:
            lines.append(f"       {task.description}")
    return "\n".join(lines)


async def cmd_next(state: AppState, args: list[str]) -> str:
    if not await state.dashboard.next_page():
        window = state.dashboard.window
        if window.page >= window.total_pages:
            return "Already on the last page."
        return ""
    return cmd_tasks(state, ["all"])


async def cmd_prev(state: AppState, args: list[str]) -> str:
    if not await state.dashboard.previous_page():
        if state.dashboard.window.page <= 1:
            return "Already on the first page."
        return ""
    return cmd_tasks(state, ["all"])


async def cmd_reload(state: AppState, args: list[str]) -> str:
    if not await state.dashboard.load_page():
        return ""
    return cmd_tasks(state, ["all"])


def cmd_bell(state: AppState, args: list[str]) -> str:
    pending = state.dashboard.pending()
    lines = [f"You have {len(pending)} pending tasks."]
    for note in pending:
        lines.append(f"  ! {_row_number(state, note.task)}. {note.task.title}")
    if pending:
        lines.append("Use /start <n> to start one.")
    return "\n".join(lines)


async def _change(state: AppState, args: list[str], target: TaskStatus, usage: str) -> str:
    if not args:
        return usage
    task = resolve_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r} on this page."
    if task.status.next() is not target:
        return f"'{task.title}' is {task.status.value}; it cannot be moved to {target.value}."
    await state.dashboard.change_status(task.id, target)
    return ""


async def cmd_start(state: AppState, args: list[str]) -> str:
    return await _change(state, args, TaskStatus.IN_PROGRESS, "Usage: /start <n|id>")


async def cmd_done(state: AppState, args: list[str]) -> str:
    return await _change(state, args, TaskStatus.COMPLETED, "Usage: /done <n|id>")


def _render_focus(state: AppState) -> str:
    dash = state.dashboard
    task = dash.focus.focused
    if task is None:
        return "No task is open. Use /open <n|id>."
    lines = [f"{task.title} <{task.status.value}>"]
    if task.description:
        lines.append(f"  {task.description}")
    lines.append("Extra services:")
    lines.extend(_format_services(dash.ledger.services))
    if dash.ledger.services:
        lines.append(f"  Total extra: ${dash.ledger.total_extra():.2f}")
    return "\n".join(lines)


async def cmd_open(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /open <n|id>"
    task = resolve_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r} on this page."
    await state.dashboard.open_task(task)
    return _render_focus(state)


def cmd_close(state: AppState, args: list[str]) -> str:
    if not state.dashboard.focus.is_open:
        return "No task is open."
    state.dashboard.close_task()
    return "Closed."


def cmd_services(state: AppState, args: list[str]) -> str:
    return _render_focus(state)


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <description> | <price>
    /add <description>           -> price 0
    """
    if not state.dashboard.focus.is_open:
        return "Open a task first (/open <n|id>)."
    text = " ".join(args)
    description, sep, price = text.rpartition("|")
    if not sep:
        description, price = text, ""
    if not await state.dashboard.add_service(description.strip(), price.strip()):
        if not description.strip():
            return "Usage: /add <description> | <price>"
        return ""
    return _render_focus(state)


_PROFILE_FIELDS = {
    "name": "name",
    "email": "email",
    "phone": "phone_number",
    "picture": "profile_picture",
}


async def cmd_profile(state: AppState, args: list[str]) -> str:
    """
    /profile                         -> show
    /profile name=Ann phone=555-0100 -> update (values without spaces)
    """
    dash = state.dashboard
    if not args:
        if not await dash.fetch_profile():
            return ""
    else:
        changes: dict[str, str] = {}
        for arg in args:
            key, sep, value = arg.partition("=")
            field_name = _PROFILE_FIELDS.get(key.lower())
            if not sep or field_name is None:
                return "Usage: /profile [name=... email=... phone=... picture=...]"
            changes[field_name] = value
        if not await dash.update_profile(replace(dash.profile, **changes)):
            return ""

    p = dash.profile
    return f"Profile:\n  Name: {p.name}\n  Email: {p.email}\n  Phone: {p.phone_number}"


def cmd_token(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /token <value>"
    state.session.save(args[0])
    return "Credential stored. Use /reload to fetch your tasks."


async def cmd_logout(state: AppState, args: list[str]) -> str:
    await state.dashboard.logout()
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show connection, page and focus.")
registry.register(
    "tasks", cmd_tasks, help_text="List tasks: /tasks [in-progress|completed|pending|all].", aliases=["ls"]
)
registry.register("next", cmd_next, help_text="Next page.", aliases=["n"])
registry.register("prev", cmd_prev, help_text="Previous page.", aliases=["p"])
registry.register("reload", cmd_reload, help_text="Reload the current page.")
registry.register("bell", cmd_bell, help_text="Pending tasks on this page.", aliases=["pending"])
registry.register("start", cmd_start, help_text="Start a pending task: /start <n|id>.")
registry.register("done", cmd_done, help_text="Complete a task in progress: /done <n|id>.")
registry.register("open", cmd_open, help_text="Open task details and extra services: /open <n|id>.")
registry.register("close", cmd_close, help_text="Close the open task.")
registry.register("services", cmd_services, help_text="Show the open task and its extra services.")
registry.register("add", cmd_add, help_text="Add an extra service: /add <description> | <price>.")
registry.register("profile", cmd_profile, help_text="Show or update profile: /profile [name=... phone=...].")
registry.register("token", cmd_token, help_text="Store the session credential: /token <value>.")
registry.register("logout", cmd_logout, help_text="Log out and forget the stored credential.")
