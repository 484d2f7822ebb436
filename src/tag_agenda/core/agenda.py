# src/tag_agenda/core/agenda.py

"""
Agenda: clock + task store + menu cursor.

Queries build the menu; edits address tasks through it by position. Tasks
at or before the clock are past: they never show up in queries (only in
`past()`) and every edit on them fails.

Failure model:
- precondition failures (past, occupied, bad position) return False and
  change nothing;
- a malformed expression raises ExpressionError before anything changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from datetime import time as dt_time

from ..tasks.expression import evaluate, parse_expression, to_text
from ..tasks.menu import MenuCursor
from ..tasks.task_models import Instant, MenuRow, Task, is_valid_tag, normalize_tag
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class Agenda:
    def __init__(self, clock: Instant | None = None) -> None:
        self._clock = clock if clock is not None else Instant.now()
        self._store = TaskStore()
        self._menu = MenuCursor()
        logger.info("Agenda ready clock=%s", self._clock)

    # ---- clock ----

    @property
    def clock(self) -> Instant:
        return self._clock

    @property
    def today(self) -> date:
        return self._clock.day

    @property
    def hour(self) -> dt_time:
        return self._clock.time

    def set_clock(self, instant: Instant) -> bool:
        """Advance the clock. Moving it backwards fails."""
        if instant < self._clock:
            logger.debug("Clock rollback rejected: %s -> %s", self._clock, instant)
            return False
        self._clock = instant
        logger.debug("Clock set to %s", instant)
        return True

    def is_past(self, instant: Instant) -> bool:
        return not (self._clock < instant)

    # ---- store ----

    @property
    def store(self) -> TaskStore:
        return self._store

    def __len__(self) -> int:
        return len(self._store)

    def add_task(self, instant: Instant, title: str, tags: Iterable[str] = ()) -> bool:
        """Insert a task; fails if `instant` is past or taken, or a tag has spaces or parentheses."""
        if self.is_past(instant):
            logger.debug("add_task rejected: %s is past", instant)
            return False
        tags = list(tags)
        bad = [t for t in map(normalize_tag, tags) if t and not is_valid_tag(t)]
        if bad:
            logger.debug("add_task rejected: invalid tag(s) %s", bad)
            return False
        return self._store.add(instant, Task.create(title, tags))

    def remove_task(self, instant: Instant) -> bool:
        """Delete the task at `instant`; fails if absent or past."""
        if self.is_past(instant) or instant not in self._store:
            return False
        self._menu.forget(instant)
        return self._store.pop(instant) is not None

    # ---- queries ----

    def query(
        self,
        expression: str = "",
        *,
        first: date | None = None,
        last: date | None = None,
    ) -> list[MenuRow]:
        """
        Non-past tasks with day in [first, last] whose tags satisfy
        `expression`, ascending. Missing bounds are open. The result
        replaces the menu.

        Raises ExpressionError (menu untouched) for a malformed expression.
        """
        node = parse_expression(expression)

        lo = Instant.start_of(first) if first is not None else None
        hi = Instant.end_of(last) if last is not None else None
        after = self._clock

        if node is None:
            found = self._store.instants(after=after, lo=lo, hi=hi)
        else:
            universe = self._store.instants(after=after, lo=lo, hi=hi)

            def lookup(tag: str) -> list[Instant]:
                return self._store.tagged(tag, after=after, lo=lo, hi=hi)

            found = evaluate(node, lookup, universe)

        self._menu.replace(found)
        logger.debug(
            "Query first=%s last=%s expr=%s -> %d task(s)",
            first,
            last,
            to_text(node) if node is not None else "*",
            len(found),
        )
        return self.menu()

    def query_day(self, day: date, expression: str = "") -> list[MenuRow]:
        return self.query(expression, first=day, last=day)

    def query_range(self, first: date, last: date, expression: str = "") -> list[MenuRow]:
        return self.query(expression, first=first, last=last)

    def menu(self) -> list[MenuRow]:
        """
        Rows of the current menu. Slots of deleted tasks are skipped, the
        others keep their positions. Tasks that went past after the query
        stay listed but can no longer be edited.
        """
        rows: list[MenuRow] = []
        for pos, instant in enumerate(self._menu, start=1):
            if instant is None:
                continue
            task = self._store.get(instant)
            if task is None:
                continue
            rows.append(self._row(pos, instant, task))
        return rows

    def past(self) -> list[MenuRow]:
        """Every past task, ascending. Does not touch the menu."""
        rows: list[MenuRow] = []
        for pos, instant in enumerate(self._store.instants(hi=self._clock), start=1):
            task = self._store.get(instant)
            if task is not None:
                rows.append(self._row(pos, instant, task))
        return rows

    @staticmethod
    def _row(position: int, instant: Instant, task: Task) -> MenuRow:
        return MenuRow(
            position=position,
            title=task.title,
            instant=instant,
            tags=tuple(task.sorted_tags()),
        )

    # ---- positional edits ----

    def menu_instant(self, position: int) -> Instant | None:
        """Instant the menu holds at `position` (may be stale)."""
        return self._menu.resolve(position)

    def _editable(self, position: int) -> Instant | None:
        """Menu position -> instant, if it still names a present, non-past task."""
        instant = self._menu.resolve(position)
        if instant is None:
            logger.debug("Menu position %s out of range or deleted (size=%d)", position, len(self._menu))
            return None
        if instant not in self._store or self.is_past(instant):
            logger.debug("Menu position %s is stale or past (%s)", position, instant)
            return None
        return instant

    def set_title(self, position: int, title: str) -> bool:
        instant = self._editable(position)
        if instant is None:
            return False
        task = self._store.get(instant)
        if task is None:
            return False
        task.set_title(title.strip())
        return True

    def add_tag(self, position: int, tag: str) -> bool:
        return self.add_tags(position, [tag])

    def add_tags(self, position: int, tags: Iterable[str]) -> bool:
        clean = [normalize_tag(t) for t in tags]
        instant = self._editable(position)
        if instant is None or not clean or not all(is_valid_tag(t) for t in clean):
            return False
        return self._store.add_tags(instant, clean)

    def remove_tag(self, position: int, tag: str) -> bool:
        return self.remove_tags(position, [tag])

    def remove_tags(self, position: int, tags: Iterable[str]) -> bool:
        clean = [normalize_tag(t) for t in tags]
        instant = self._editable(position)
        if instant is None or not clean or not all(clean):
            return False
        return self._store.remove_tags(instant, clean)

    def clear_tags(self, position: int) -> bool:
        instant = self._editable(position)
        if instant is None:
            return False
        return self._store.clear_tags(instant)

    def delete(self, position: int) -> bool:
        instant = self._editable(position)
        if instant is None:
            return False
        self._menu.forget(instant)
        return self._store.pop(instant) is not None

    def reschedule(self, position: int, target: Instant) -> bool:
        """
        Move a menu task to `target`. Fails (nothing changes) if the target
        is past or taken by another task. On success the menu slot follows
        the task.
        """
        instant = self._editable(position)
        if instant is None:
            return False
        if target == instant:
            return True
        if self.is_past(target) or target in self._store:
            logger.debug("Reschedule rejected: %s -> %s", instant, target)
            return False
        if not self._store.move(instant, target):
            return False
        self._menu.rebind(position, target)
        return True

    def set_day(self, position: int, day: date) -> bool:
        instant = self._menu.resolve(position)
        if instant is None:
            return False
        return self.reschedule(position, instant.with_day(day))

    def set_time(self, position: int, t: dt_time) -> bool:
        instant = self._menu.resolve(position)
        if instant is None:
            return False
        return self.reschedule(position, instant.with_time(t))
