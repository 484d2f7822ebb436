# src/tag_agenda/tasks/menu.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .task_models import Instant


class MenuCursor:
    """
    Result of the last query: instants addressed by 1-based position.

    A view only (instant values, no tasks). Queries replace it wholesale.
    A slot whose task was deleted is closed (holds None) so that it never
    reaches a task later moved onto the freed instant; entries may also
    go past when the clock moves, so callers revalidate whatever
    `resolve()` hands back.
    """

    def __init__(self) -> None:
        self._items: list[Instant | None] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Instant | None]:
        return iter(self._items)

    def replace(self, instants: Iterable[Instant]) -> None:
        self._items = list(instants)

    def resolve(self, position: int) -> Instant | None:
        """Instant at `position` (1-based), or None when out of range or closed."""
        if position < 1 or position > len(self._items):
            return None
        return self._items[position - 1]

    def rebind(self, position: int, instant: Instant) -> None:
        """Point an existing slot at a task's new instant after a reschedule."""
        if 1 <= position <= len(self._items) and self._items[position - 1] is not None:
            self._items[position - 1] = instant

    def forget(self, instant: Instant) -> None:
        """Close every slot holding `instant` (its task is gone)."""
        self._items = [None if i == instant else i for i in self._items]
