# tests/test_task_models.py

from __future__ import annotations

from datetime import date, time

import pytest

from tag_agenda.tasks.task_models import Instant, Task, normalize_tag, parse_day, parse_time


def test_instant_orders_date_first_then_time() -> None:
    a = Instant.parse("10.05.24 23:00")
    b = Instant.parse("11.05.24 08:00")
    c = Instant.parse("11.05.24 09:30")

    assert a < b < c
    assert sorted([c, a, b]) == [a, b, c]
    assert Instant.parse("01.01.25 00:00") > Instant.parse("31.12.24 23:59")
    assert not (a < a)
    assert a == Instant.parse("10.05.24 23:00")


@pytest.mark.parametrize("text", ["10.05.24 09:00", "01.01.00 00:00", "31.12.99 23:59"])
def test_instant_print_parse_round_trip(text: str) -> None:
    inst = Instant.parse(text)
    assert str(inst) == text
    assert Instant.parse(str(inst)) == inst


@pytest.mark.parametrize("bad", ["", "10.05.24", "1.5.24 09:00", "10.05.24 9:00", "32.01.24 10:00", "10-05-24 10:00"])
def test_instant_parse_rejects_malformed(bad: str) -> None:
    with pytest.raises(ValueError):
        Instant.parse(bad)


def test_day_and_time_helpers() -> None:
    assert parse_day("10.05.24") == date(2024, 5, 10)
    assert parse_time("07:05") == time(7, 5)
    assert Instant.start_of(date(2024, 5, 10)) == Instant.parse("10.05.24 00:00")
    assert Instant.end_of(date(2024, 5, 10)) == Instant.parse("10.05.24 23:59")

    inst = Instant.parse("10.05.24 09:00")
    assert inst.with_day(date(2024, 6, 1)) == Instant.parse("01.06.24 09:00")
    assert inst.with_time(time(18, 30)) == Instant.parse("10.05.24 18:30")


def test_task_tags_have_set_semantics() -> None:
    task = Task.create("  Plan trip ", ["#travel", "travel", "", "#"])
    assert task.title == "Plan trip"
    assert task.tags == {"travel"}

    task.add_tag("travel")
    task.remove_tag("absent")
    assert task.sorted_tags() == ["travel"]

    task.add_tag("family")
    assert task.sorted_tags() == ["family", "travel"]
    task.clear_tags()
    assert task.tags == set()


def test_normalize_tag() -> None:
    assert normalize_tag("#work") == "work"
    assert normalize_tag("  work ") == "work"
    assert normalize_tag("##") == ""
