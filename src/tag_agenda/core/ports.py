# src/tag_agenda/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on Protocols instead of concrete implementations, so the
output format is swappable and tests can capture what would be shown.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import MenuRow


class MenuRenderer(Protocol):
    """Turns ordered (position, title, instant, tags) rows into display text."""

    def render(self, rows: Sequence[MenuRow]) -> str: ...
