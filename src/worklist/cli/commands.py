# src/worklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..tasks.task_form import SubmitOutcome
from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_time import format_local

AskFn = Callable[[str], Awaitable[str]]
CommandHandler = Callable[[AppState, list[str], AskFn], Awaitable[str]]

logger = logging.getLogger(__name__)

CANCEL_WORD = "/cancel"
CLEAR_WORD = "-"
MAX_FORM_ATTEMPTS = 3

FIELD_PROMPTS = {
    "title": "Title",
    "description": "Description (optional)",
    "status": "Status (" + ", ".join(s.value for s in TaskStatus) + ")",
    "due_date_time": "Due date/time (YYYY-MM-DDTHH:MM)",
}


class FormAborted(Exception):
    """The user typed /cancel at a form prompt."""


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

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

    async def handle(self, state: AppState, line: str, ask: AskFn) -> str | None:
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

        return await handler(state, args, ask)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _with_banner(state: AppState, text: str) -> str:
    """Prefix the global error message, if any."""
    if state.session.error:
        return f"[ERROR] {state.session.error}\n{text}" if text else f"[ERROR] {state.session.error}"
    return text


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _describe(task: Task) -> str:
    try:
        due = format_local(task.due_date_time)
    except ValueError:
        due = task.due_date_time
    lines = [
        f"#{task.id} {task.title}",
        f"  Status: {task.status.label}",
        f"  Due: {due}",
    ]
    if task.description:
        lines.append(f"  Description: {task.description}")
    lines.append(f"  Created: {task.created_at}")
    lines.append(f"  Updated: {task.updated_at}")
    return "\n".join(lines)


async def _ask_field(state: AppState, ask: AskFn, name: str) -> None:
    current = getattr(state.form.draft, name)
    current_s = current.value if isinstance(current, TaskStatus) else str(current or "")
    suffix = f" [{current_s}]" if current_s else ""

    answer = (await ask(f"{FIELD_PROMPTS[name]}{suffix}: ")).strip()
    if answer == CANCEL_WORD:
        raise FormAborted()
    if not answer:
        # Empty answer keeps the current value (and its error, if any).
        return
    if answer == CLEAR_WORD and name != "status":
        state.form.set_field(name, "")
        return

    if name == "status":
        value = answer.upper().replace(" ", "_")
        try:
            state.form.set_field("status", value)
        except ValueError:
            logger.debug("Ignoring unknown status %r in form", answer)
        return

    state.form.set_field(name, answer)


async def _run_form(state: AppState, ask: AskFn) -> str:
    """Prompt every field, then re-prompt only the invalid ones until it validates."""
    form = state.form
    try:
        for name in FIELD_PROMPTS:
            await _ask_field(state, ask, name)

        for attempt in range(1, MAX_FORM_ATTEMPTS + 1):
            outcome = await form.submit()

            if outcome is SubmitOutcome.SUBMITTED:
                return _with_banner(state, "Task saved.")
            if outcome is SubmitOutcome.FAILED:
                return _with_banner(state, "Draft kept; use /retry to submit it again.")
            if outcome is SubmitOutcome.BUSY:
                return "A submission is already in progress."

            errors = "\n".join(f"  {FIELD_PROMPTS[k]}: {v}" for k, v in form.errors.items())
            if attempt == MAX_FORM_ATTEMPTS:
                return f"Task not saved:\n{errors}"
            await ask(f"Please fix:\n{errors}\n(press Enter) ")
            for name in list(form.errors):
                await _ask_field(state, ask, name)
    except FormAborted:
        form.cancel()
        return "Cancelled."

    return "Task not saved."


# ---- commands ----


async def cmd_help(state: AppState, args: list[str], ask: AskFn) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str], ask: AskFn) -> str:
    return _with_banner(state, state.presenter.render(loading=state.session.loading, color=state.color))


async def cmd_refresh(state: AppState, args: list[str], ask: AskFn) -> str:
    await state.session.fetch_tasks()
    return await cmd_list(state, args, ask)


async def cmd_show(state: AppState, args: list[str], ask: AskFn) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = await state.session.get_task(task_id)
    if task is None:
        return _with_banner(state, "")
    return _describe(task)


async def cmd_new(state: AppState, args: list[str], ask: AskFn) -> str:
    """
    /new  -> prompt for title, description, status and due date, then create.
    Type /cancel at any prompt to abort.
    """
    if state.form.is_editing:
        state.form.cancel()
    return f"{state.form.heading}\n" + await _run_form(state, ask)


async def cmd_edit(state: AppState, args: list[str], ask: AskFn) -> str:
    """
    /edit <id>  -> prompt every field (Enter keeps the current value, "-" clears it), then update.
    """
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id>"
    if not state.presenter.edit(task_id):
        return f"No task #{task_id} in the list. Use /refresh to reload."
    return f"{state.form.heading} #{task_id}\n" + await _run_form(state, ask)


async def cmd_retry(state: AppState, args: list[str], ask: AskFn) -> str:
    """Submit the current draft again (after a failed save)."""
    outcome = await state.form.submit()
    if outcome is SubmitOutcome.SUBMITTED:
        return _with_banner(state, "Task saved.")
    if outcome is SubmitOutcome.INVALID:
        return "Task not saved:\n" + "\n".join(
            f"  {FIELD_PROMPTS[k]}: {v}" for k, v in state.form.errors.items()
        )
    if outcome is SubmitOutcome.BUSY:
        return "A submission is already in progress."
    return _with_banner(state, "Draft kept.")


async def cmd_cancel(state: AppState, args: list[str], ask: AskFn) -> str:
    was_editing = state.form.is_editing
    state.form.cancel()
    return "Edit cancelled." if was_editing else "Draft cleared."


async def cmd_status(state: AppState, args: list[str], ask: AskFn) -> str:
    """
    /status <id> <STATUS>  -> quick status change (sent as given, e.g. IN_PROGRESS).
    """
    task_id = _parse_id(args)
    if task_id is None or len(args) < 2:
        return "Usage: /status <id> <" + "|".join(s.value for s in TaskStatus) + ">"
    status = "_".join(args[1:]).upper()
    if await state.presenter.change_status(task_id, status):
        return f"Task #{task_id} -> {status.replace('_', ' ')}"
    return _with_banner(state, "")


async def cmd_delete(state: AppState, args: list[str], ask: AskFn) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    if await state.presenter.delete(task_id):
        return f"Task #{task_id} deleted."
    return _with_banner(state, "Nothing deleted.")


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload all tasks from the service.")
registry.register("show", cmd_show, help_text="Fetch one task from the service: /show <id>.")
registry.register("new", cmd_new, help_text="Create a task (prompts for each field).")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> (Enter keeps a value, - clears it).")
registry.register("retry", cmd_retry, help_text="Submit the current draft again.")
registry.register("cancel", cmd_cancel, help_text="Discard the draft and leave edit mode.")
registry.register("status", cmd_status, help_text="Change status: /status <id> <STATUS>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
