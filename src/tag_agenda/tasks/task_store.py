# src/tag_agenda/tasks/task_store.py

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right, insort
from collections.abc import Iterable, Iterator

from .task_models import Instant, Task, normalize_tag

logger = logging.getLogger(__name__)


def window(
    seq: list[Instant],
    *,
    after: Instant | None = None,
    lo: Instant | None = None,
    hi: Instant | None = None,
) -> list[Instant]:
    """
    Slice of an ascending list bounded to `(after, ...)` and `[lo, hi]`.

    `after` is exclusive (used for the clock), `lo`/`hi` inclusive. An empty
    window (lo after hi) gives an empty list.
    """
    start = 0
    if lo is not None:
        start = bisect_left(seq, lo)
    if after is not None:
        start = max(start, bisect_right(seq, after))
    end = len(seq) if hi is None else bisect_right(seq, hi)
    if start >= end:
        return []
    return seq[start:end]


class TagIndex:
    """
    Inverted index: tag name -> ascending instants of tasks carrying it.

    Only TaskStore mutates it; it holds no tasks, just instant values.
    Tags whose last instant goes away are dropped.
    """

    def __init__(self) -> None:
        self._by_tag: dict[str, list[Instant]] = {}

    def add(self, tag: str, instant: Instant) -> None:
        seq = self._by_tag.setdefault(tag, [])
        i = bisect_left(seq, instant)
        if i < len(seq) and seq[i] == instant:
            return
        seq.insert(i, instant)

    def discard(self, tag: str, instant: Instant) -> None:
        seq = self._by_tag.get(tag)
        if not seq:
            return
        i = bisect_left(seq, instant)
        if i < len(seq) and seq[i] == instant:
            del seq[i]
        if not seq:
            del self._by_tag[tag]

    def instants(
        self,
        tag: str,
        *,
        after: Instant | None = None,
        lo: Instant | None = None,
        hi: Instant | None = None,
    ) -> list[Instant]:
        """Ascending instants for `tag` inside the window; [] for an unknown tag."""
        seq = self._by_tag.get(tag)
        if not seq:
            return []
        return window(seq, after=after, lo=lo, hi=hi)

    def tags(self) -> list[str]:
        return sorted(self._by_tag)

    def pairs(self) -> set[tuple[str, Instant]]:
        return {(tag, inst) for tag, seq in self._by_tag.items() for inst in seq}


class TaskStore:
    """
    In-memory primary store (instant -> task) with its tag index.

    Every mutating method checks its preconditions first and only then
    touches the task map, the ordered key list and the tag index together,
    so a rejected call leaves all three untouched.

    Clock rules (past instants are read-only) live in Agenda; the store only
    enforces key uniqueness and presence.
    """

    def __init__(self) -> None:
        self._tasks: dict[Instant, Task] = {}
        self._order: list[Instant] = []
        self._index = TagIndex()

    # ---- read ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, instant: object) -> bool:
        return instant in self._tasks

    def __iter__(self) -> Iterator[Instant]:
        return iter(list(self._order))

    def get(self, instant: Instant) -> Task | None:
        return self._tasks.get(instant)

    def instants(
        self,
        *,
        after: Instant | None = None,
        lo: Instant | None = None,
        hi: Instant | None = None,
    ) -> list[Instant]:
        """Ascending stored instants inside the window."""
        return window(self._order, after=after, lo=lo, hi=hi)

    def tagged(
        self,
        tag: str,
        *,
        after: Instant | None = None,
        lo: Instant | None = None,
        hi: Instant | None = None,
    ) -> list[Instant]:
        return self._index.instants(normalize_tag(tag), after=after, lo=lo, hi=hi)

    @property
    def index(self) -> TagIndex:
        return self._index

    # ---- write ----

    def add(self, instant: Instant, task: Task) -> bool:
        if instant in self._tasks:
            logger.debug("TaskStore add rejected: %s occupied", instant)
            return False
        self._tasks[instant] = task
        insort(self._order, instant)
        for tag in task.tags:
            self._index.add(tag, instant)
        logger.debug("Task added at=%s title=%r tags=%s", instant, task.title, task.sorted_tags())
        return True

    def pop(self, instant: Instant) -> Task | None:
        task = self._tasks.pop(instant, None)
        if task is None:
            return None
        del self._order[bisect_left(self._order, instant)]
        for tag in task.tags:
            self._index.discard(tag, instant)
        logger.debug("Task removed at=%s title=%r", instant, task.title)
        return task

    def move(self, old: Instant, new: Instant) -> bool:
        """Re-key a task; fails if `old` is absent or `new` is occupied."""
        if old == new:
            return old in self._tasks
        if old not in self._tasks or new in self._tasks:
            logger.debug("TaskStore move rejected: %s -> %s", old, new)
            return False
        task = self._tasks.pop(old)
        del self._order[bisect_left(self._order, old)]
        self._tasks[new] = task
        insort(self._order, new)
        for tag in task.tags:
            self._index.discard(tag, old)
            self._index.add(tag, new)
        logger.debug("Task moved %s -> %s", old, new)
        return True

    def add_tags(self, instant: Instant, tags: Iterable[str]) -> bool:
        task = self._tasks.get(instant)
        if task is None:
            return False
        for raw in tags:
            tag = normalize_tag(raw)
            if not tag:
                continue
            task.add_tag(tag)
            self._index.add(tag, instant)
        return True

    def remove_tags(self, instant: Instant, tags: Iterable[str]) -> bool:
        task = self._tasks.get(instant)
        if task is None:
            return False
        for raw in tags:
            tag = normalize_tag(raw)
            task.remove_tag(tag)
            self._index.discard(tag, instant)
        return True

    def clear_tags(self, instant: Instant) -> bool:
        task = self._tasks.get(instant)
        if task is None:
            return False
        for tag in task.tags:
            self._index.discard(tag, instant)
        task.clear_tags()
        return True
