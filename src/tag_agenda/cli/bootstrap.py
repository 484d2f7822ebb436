# src/tag_agenda/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the Agenda with its initial clock,
- wires the menu renderer into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.agenda import Agenda
from ..core.render import TextMenuRenderer
from ..core.state import AppState
from ..tasks.task_models import Instant

logger = logging.getLogger(__name__)


def _initial_clock(settings) -> Instant:
    raw = getattr(settings, "initial_clock", None)
    if not raw:
        return Instant.now()
    try:
        return Instant.parse(raw)
    except ValueError:
        logger.warning("Ignoring invalid initial clock %r; using current time.", raw)
        return Instant.now()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(
        settings=settings,
        agenda=Agenda(clock=_initial_clock(settings)),
        renderer=TextMenuRenderer(marker=getattr(settings, "tag_marker", "#")),
    )
    return state
