# src/worklist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..errors import WorklistError

logger = logging.getLogger(__name__)

YES_ANSWERS = {"y", "yes"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def ask(prompt: str) -> str:
    """Read one line without blocking the event loop."""
    return await asyncio.to_thread(input, prompt)


async def confirm(message: str) -> bool:
    answer = await ask(f"{message} [y/N]: ")
    return answer.strip().lower() in YES_ANSWERS


async def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(state.settings, "app_name", "worklist"))
    logger.info("Console connector started (%s).", app_name)
    _print_ts("[CONSOLE] Manage your casework tasks. Use /help for commands. Use /exit to quit.\n")

    await state.session.fetch_tasks()
    print(await command_registry.handle(state, "/list", ask))

    while True:
        try:
            user_input = (await ask(f"{app_name}> ")).strip()
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
            reply = await command_registry.handle(state, user_input, ask)
        except (EOFError, KeyboardInterrupt):
            print()
            logger.info("Input closed during a command, exiting.")
            break
        except WorklistError:
            # e.g. StoreInvariantError after racing responses; /refresh resyncs.
            logger.exception("Command failed: %s", user_input)
            reply = "Internal error; the task list may be stale. Use /refresh to reload it."
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling the command. See the log for details."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list available commands."
        if reply:
            print(reply)
