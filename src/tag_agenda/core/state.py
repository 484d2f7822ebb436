# src/tag_agenda/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .agenda import Agenda
from .ports import MenuRenderer


@dataclass
class AppState:
    # Settings are kept on the state for easy access from command handlers.
    settings: object

    agenda: Agenda
    renderer: MenuRenderer
