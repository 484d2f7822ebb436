# src/tag_agenda/core/render.py

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..tasks.task_models import MenuRow

EMPTY_MENU_TEXT = "(no tasks)"


def format_tags(tags: Iterable[str], marker: str = "#") -> str:
    """`#a #b`: each tag prefixed with the marker, single spaces, no trailing separator."""
    return " ".join(f"{marker}{t}" for t in tags)


def format_row(row: MenuRow, marker: str = "#") -> str:
    """`<position> <title> <dd.mm.yy hh:mm>[ <tags>]`"""
    line = f"{row.position} {row.title} {row.instant}"
    tags = format_tags(row.tags, marker)
    return f"{line} {tags}" if tags else line


class TextMenuRenderer:
    """Plain-text menu: one line per row."""

    def __init__(self, marker: str = "#") -> None:
        self.marker = marker or "#"

    def render(self, rows: Sequence[MenuRow]) -> str:
        if not rows:
            return EMPTY_MENU_TEXT
        return "\n".join(format_row(r, self.marker) for r in rows)
