# src/tag_agenda/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Read commands line by line until /exit, EOF or Ctrl+C.

    `read`/`write` default to input()/print(); tests pass their own.
    """
    prompt = str(getattr(state.settings, "prompt", "agenda> "))
    logger.info("Console connector started (clock=%s).", state.agenda.clock)
    write("[CONSOLE] Type /help for commands. Use /exit to quit.")

    while True:
        try:
            user_input = read(prompt).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Not a command. Use /help to list available commands."
        write(response)

    logger.info("Console connector finished.")
