# src/tag_agenda/tasks/task_models.py

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from datetime import time as dt_time
from typing import Final

DAY_FORMAT: Final[str] = "%d.%m.%y"
TIME_FORMAT: Final[str] = "%H:%M"

# Zero-padded only, so that printing a parsed value gives back the same text.
DAY_RE: Final[re.Pattern[str]] = re.compile(r"^\d{2}\.\d{2}\.\d{2}$")
TIME_RE: Final[re.Pattern[str]] = re.compile(r"^\d{2}:\d{2}$")


def parse_day(text: str) -> date:
    """Parse `dd.mm.yy` into a date. Raises ValueError on anything else."""
    s = (text or "").strip()
    if not DAY_RE.match(s):
        raise ValueError(f"Invalid day '{text}' (expected dd.mm.yy)")
    try:
        return datetime.strptime(s, DAY_FORMAT).date()
    except ValueError as e:
        raise ValueError(f"Invalid day '{text}' (expected dd.mm.yy)") from e


def parse_time(text: str) -> dt_time:
    """Parse `hh:mm` into a time-of-day. Raises ValueError on anything else."""
    s = (text or "").strip()
    if not TIME_RE.match(s):
        raise ValueError(f"Invalid time '{text}' (expected hh:mm)")
    try:
        return datetime.strptime(s, TIME_FORMAT).time()
    except ValueError as e:
        raise ValueError(f"Invalid time '{text}' (expected hh:mm)") from e


def format_day(day: date) -> str:
    return day.strftime(DAY_FORMAT)


def format_time(t: dt_time) -> str:
    return t.strftime(TIME_FORMAT)


def normalize_tag(raw: str) -> str:
    """
    Canonical tag name: surrounding whitespace and leading markers removed.

    "#work" and "work" name the same tag. Returns "" for an empty tag.
    """
    return (raw or "").strip().lstrip("#").strip()


def is_valid_tag(name: str) -> bool:
    """A normalized tag that a query expression can name: no spaces or parentheses."""
    return bool(name) and not any(c.isspace() or c in "()" for c in name)


@dataclass(frozen=True, order=True, slots=True)
class Instant:
    """
    A point in time with minute resolution: the unique key of a task.

    Ordering is date-major, then time-of-day (field order of the dataclass).
    """

    day: date
    time: dt_time

    @classmethod
    def parse(cls, text: str) -> Instant:
        """Parse `dd.mm.yy hh:mm`."""
        parts = (text or "").split()
        if len(parts) != 2:
            raise ValueError(f"Invalid instant '{text}' (expected dd.mm.yy hh:mm)")
        return cls(parse_day(parts[0]), parse_time(parts[1]))

    @classmethod
    def now(cls) -> Instant:
        ts = datetime.now().replace(second=0, microsecond=0)
        return cls(ts.date(), ts.time())

    @classmethod
    def start_of(cls, day: date) -> Instant:
        return cls(day, dt_time(0, 0))

    @classmethod
    def end_of(cls, day: date) -> Instant:
        return cls(day, dt_time(23, 59))

    def with_day(self, day: date) -> Instant:
        return Instant(day, self.time)

    def with_time(self, t: dt_time) -> Instant:
        return Instant(self.day, t)

    def __str__(self) -> str:
        return f"{format_day(self.day)} {format_time(self.time)}"


@dataclass(slots=True)
class Task:
    """
    Plain task record: a title and a set of tags.

    Tag mutators have set semantics (adding an existing tag or removing an
    absent one is a no-op). Owners that keep a tag index must route tag
    changes through the store, not call these directly.
    """

    title: str
    tags: set[str] = field(default_factory=set)

    def set_title(self, title: str) -> None:
        self.title = title

    def add_tag(self, tag: str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags.discard(tag)

    def clear_tags(self) -> None:
        self.tags.clear()

    def sorted_tags(self) -> list[str]:
        return sorted(self.tags)

    @classmethod
    def create(cls, title: str, tags: Iterable[str] = ()) -> Task:
        clean = {normalize_tag(t) for t in tags}
        clean.discard("")
        return cls(title=title.strip(), tags=clean)


@dataclass(frozen=True, slots=True)
class MenuRow:
    """One rendered line of a menu: what the rendering collaborator consumes."""

    position: int
    title: str
    instant: Instant
    tags: tuple[str, ...]
