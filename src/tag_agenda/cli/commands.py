# src/tag_agenda/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..core.render import format_tags
from ..core.state import AppState
from ..tasks.expression import ExpressionError
from ..tasks.task_models import DAY_RE, TIME_RE, Instant, parse_day, parse_time

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /query, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
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

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------


def _split_when(args: list[str], base: Instant) -> tuple[Instant, list[str], bool, bool]:
    """
    Consume a leading `dd.mm.yy` and/or `hh:mm` (either order).

    Missing parts come from `base`. Returns (instant, rest, had_day, had_time).
    Raises ValueError for a malformed day/time.
    """
    day = base.day
    t = base.time
    had_day = had_time = False
    rest = list(args)
    while rest:
        tok = rest[0]
        if not had_day and DAY_RE.match(tok):
            day = parse_day(tok)
            had_day = True
        elif not had_time and TIME_RE.match(tok):
            t = parse_time(tok)
            had_time = True
        else:
            break
        rest.pop(0)
    return Instant(day, t), rest, had_day, had_time


def _position(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def _marker(state: AppState) -> str:
    return str(getattr(state.settings, "tag_marker", "#") or "#")


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_now(state: AppState, args: list[str]) -> str:
    return f"Clock: {state.agenda.clock}"


def cmd_clock(state: AppState, args: list[str]) -> str:
    """
    /clock                   -> show the clock
    /clock [dd.mm.yy] [hh:mm] -> advance the clock
    """
    if not args:
        return cmd_now(state, args)
    try:
        target, rest, _, _ = _split_when(args, state.agenda.clock)
    except ValueError as e:
        return str(e)
    if rest:
        return "Usage: /clock [dd.mm.yy] [hh:mm]"
    if not state.agenda.set_clock(target):
        return f"Cannot move the clock back (clock is {state.agenda.clock})."
    return f"Clock: {state.agenda.clock}"


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add [dd.mm.yy] [hh:mm] title words #tag ..."""
    try:
        when, rest, _, _ = _split_when(args, state.agenda.clock)
    except ValueError as e:
        return str(e)

    tags = [w for w in rest if w.startswith("#")]
    title = " ".join(w for w in rest if not w.startswith("#")).strip()
    if not title:
        return "Usage: /add [dd.mm.yy] [hh:mm] title #tag ..."

    if not state.agenda.add_task(when, title, tags):
        return f"Cannot add at {when}: it is past, already taken, or a tag contains parentheses."
    return f"Added: {when} {title}"


def cmd_query(state: AppState, args: list[str]) -> str:
    """
    /query [expr]                     -> all future tasks
    /query dd.mm.yy [expr]            -> one day
    /query dd.mm.yy dd.mm.yy [expr]   -> inclusive day range
    """
    days: list[date] = []
    rest = list(args)
    while rest and len(days) < 2 and DAY_RE.match(rest[0]):
        try:
            days.append(parse_day(rest.pop(0)))
        except ValueError as e:
            return str(e)
    expression = " ".join(rest)

    try:
        if len(days) == 2:
            rows = state.agenda.query_range(days[0], days[1], expression)
        elif len(days) == 1:
            rows = state.agenda.query_day(days[0], expression)
        else:
            rows = state.agenda.query(expression)
    except ExpressionError as e:
        logger.debug("Rejected expression %r: %s", expression, e)
        return f"Invalid expression: {e}"

    return state.renderer.render(rows)


def cmd_menu(state: AppState, args: list[str]) -> str:
    return state.renderer.render(state.agenda.menu())


def cmd_past(state: AppState, args: list[str]) -> str:
    return state.renderer.render(state.agenda.past())


def cmd_tags(state: AppState, args: list[str]) -> str:
    tags = state.agenda.store.index.tags()
    if not tags:
        return "No tags."
    return format_tags(tags, _marker(state))


def cmd_title(state: AppState, args: list[str]) -> str:
    """/title N new title words"""
    pos = _position(args)
    title = " ".join(args[1:]).strip()
    if pos is None or not title:
        return "Usage: /title N new title"
    if not state.agenda.set_title(pos, title):
        return f"Cannot edit item {pos}."
    return f"Item {pos} renamed."


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move N [dd.mm.yy] [hh:mm]"""
    pos = _position(args)
    if pos is None:
        return "Usage: /move N [dd.mm.yy] [hh:mm]"
    current = state.agenda.menu_instant(pos)
    if current is None:
        return f"Cannot edit item {pos}."
    try:
        target, rest, had_day, had_time = _split_when(args[1:], current)
    except ValueError as e:
        return str(e)
    if rest or not (had_day or had_time):
        return "Usage: /move N [dd.mm.yy] [hh:mm]"

    if had_day and had_time:
        ok = state.agenda.reschedule(pos, target)
    elif had_day:
        ok = state.agenda.set_day(pos, target.day)
    else:
        ok = state.agenda.set_time(pos, target.time)

    if not ok:
        return f"Cannot move item {pos} to {target}: it is past, taken, or the item is not editable."
    return f"Item {pos} moved to {target}."


def cmd_tag(state: AppState, args: list[str]) -> str:
    """/tag N #tag ..."""
    pos = _position(args)
    if pos is None or len(args) < 2:
        return "Usage: /tag N #tag ..."
    if not state.agenda.add_tags(pos, args[1:]):
        return f"Cannot tag item {pos}."
    return f"Item {pos} tagged."


def cmd_untag(state: AppState, args: list[str]) -> str:
    """/untag N #tag ..."""
    pos = _position(args)
    if pos is None or len(args) < 2:
        return "Usage: /untag N #tag ..."
    if not state.agenda.remove_tags(pos, args[1:]):
        return f"Cannot untag item {pos}."
    return f"Item {pos} untagged."


def cmd_untag_all(state: AppState, args: list[str]) -> str:
    pos = _position(args)
    if pos is None:
        return "Usage: /untag-all N"
    if not state.agenda.clear_tags(pos):
        return f"Cannot untag item {pos}."
    return f"Item {pos}: all tags removed."


def cmd_delete(state: AppState, args: list[str]) -> str:
    pos = _position(args)
    if pos is None:
        return "Usage: /delete N"
    if not state.agenda.delete(pos):
        return f"Cannot delete item {pos}."
    return f"Item {pos} deleted."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("now", cmd_now, help_text="Show the clock.")
registry.register("clock", cmd_clock, help_text="Advance the clock: /clock [dd.mm.yy] [hh:mm].")
registry.register(
    "add", cmd_add, help_text="Add a task: /add [dd.mm.yy] [hh:mm] title #tag ..."
)
registry.register(
    "query",
    cmd_query,
    help_text="Search: /query [dd.mm.yy [dd.mm.yy]] [expr with AND/OR/NOT/( )].",
    aliases=["q"],
)
registry.register("menu", cmd_menu, help_text="Show the last query result again.")
registry.register("past", cmd_past, help_text="List past tasks.")
registry.register("tags", cmd_tags, help_text="List known tags.")
registry.register("title", cmd_title, help_text="Rename a menu item: /title N text.")
registry.register("move", cmd_move, help_text="Reschedule a menu item: /move N [dd.mm.yy] [hh:mm].")
registry.register("tag", cmd_tag, help_text="Tag a menu item: /tag N #tag ...")
registry.register("untag", cmd_untag, help_text="Untag a menu item: /untag N #tag ...")
registry.register("untag-all", cmd_untag_all, help_text="Remove all tags of a menu item.")
registry.register("delete", cmd_delete, help_text="Delete a menu item: /delete N.", aliases=["del", "rm"])
