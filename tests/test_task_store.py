# tests/test_task_store.py

from __future__ import annotations

from tag_agenda.tasks.task_models import Instant, Task
from tag_agenda.tasks.task_store import TaskStore, window


def _inst(text: str) -> Instant:
    return Instant.parse(text)


def _expected_pairs(store: TaskStore) -> set[tuple[str, Instant]]:
    out: set[tuple[str, Instant]] = set()
    for instant in store:
        task = store.get(instant)
        assert task is not None
        out |= {(tag, instant) for tag in task.tags}
    return out


def test_index_is_exact_inverse_of_task_tags() -> None:
    store = TaskStore()
    t1, t2, t3 = _inst("10.05.24 09:00"), _inst("10.05.24 10:00"), _inst("11.05.24 08:00")

    assert store.add(t1, Task.create("a", ["work"]))
    assert store.add(t2, Task.create("b", ["work", "urgent"]))
    assert store.add(t3, Task.create("c", ["home"]))
    assert store.index.pairs() == _expected_pairs(store)

    store.add_tags(t3, ["#urgent", "errand"])
    store.remove_tags(t2, ["work", "never-there"])
    assert store.index.pairs() == _expected_pairs(store)
    assert store.tagged("urgent") == [t2, t3]
    assert store.tagged("work") == [t1]

    assert store.move(t1, _inst("12.05.24 07:00"))
    store.clear_tags(t3)
    assert store.index.pairs() == _expected_pairs(store)
    assert store.index.tags() == ["urgent", "work"]

    assert store.pop(t2) is not None
    assert store.index.pairs() == _expected_pairs(store)
    assert store.tagged("urgent") == []
    assert len(store) == 2


def test_add_and_move_reject_occupied_keys_without_change() -> None:
    store = TaskStore()
    t1, t2 = _inst("10.05.24 09:00"), _inst("10.05.24 10:00")
    store.add(t1, Task.create("first", ["x"]))
    store.add(t2, Task.create("second", ["y"]))

    assert not store.add(t1, Task.create("dup", ["z"]))
    assert store.get(t1).title == "first"  # type: ignore[union-attr]
    assert store.tagged("z") == []

    assert not store.move(t1, t2)
    assert not store.move(_inst("01.01.25 00:00"), _inst("02.01.25 00:00"))
    assert list(store) == [t1, t2]
    assert store.tagged("x") == [t1]


def test_window_bounds() -> None:
    seq = [_inst(f"10.05.24 0{h}:00") for h in range(1, 8)]
    lo, hi = _inst("10.05.24 02:00"), _inst("10.05.24 05:00")

    assert window(seq, lo=lo, hi=hi) == seq[1:5]
    assert window(seq, after=lo, hi=hi) == seq[2:5]
    assert window(seq, after=_inst("10.05.24 04:00"), lo=lo) == seq[4:]
    assert window(seq, lo=hi, hi=lo) == []
    assert window([], lo=lo, hi=hi) == []
    assert window(seq) == seq
