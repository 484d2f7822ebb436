# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tag_agenda.core.agenda import Agenda
from tag_agenda.core.render import TextMenuRenderer
from tag_agenda.core.state import AppState
from tag_agenda.tasks.task_models import Instant


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="agenda-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        log_to_file=False,
        initial_clock="01.05.24 12:00",
        tag_marker="#",
        prompt="> ",
    )


@pytest.fixture()
def agenda() -> Agenda:
    """Empty agenda with the clock at 01.05.24 12:00."""
    return Agenda(clock=Instant.parse("01.05.24 12:00"))


@pytest.fixture()
def scenario(agenda: Agenda) -> Agenda:
    """
    Three future tasks:
      10.05.24 09:00  #work
      10.05.24 10:00  #work #urgent
      11.05.24 08:00  #home
    """
    assert agenda.add_task(Instant.parse("10.05.24 09:00"), "Standup", ["#work"])
    assert agenda.add_task(Instant.parse("10.05.24 10:00"), "Release", ["#work", "#urgent"])
    assert agenda.add_task(Instant.parse("11.05.24 08:00"), "Groceries", ["#home"])
    return agenda


@pytest.fixture()
def state(settings: SimpleNamespace, agenda: Agenda) -> AppState:
    return AppState(settings=settings, agenda=agenda, renderer=TextMenuRenderer())
