# tests/test_merge.py

from __future__ import annotations

import random

from tag_agenda.tasks.merge import difference, intersect, union
from tag_agenda.tasks.task_models import Instant


def _inst(text: str) -> Instant:
    return Instant.parse(text)


A = [_inst("10.05.24 09:00"), _inst("10.05.24 10:00"), _inst("12.05.24 08:00")]
B = [_inst("10.05.24 10:00"), _inst("11.05.24 08:00"), _inst("12.05.24 08:00")]


def test_intersect_and_union_on_instants() -> None:
    assert intersect(A, B) == [_inst("10.05.24 10:00"), _inst("12.05.24 08:00")]
    assert union(A, B) == [
        _inst("10.05.24 09:00"),
        _inst("10.05.24 10:00"),
        _inst("11.05.24 08:00"),
        _inst("12.05.24 08:00"),
    ]
    assert difference(A, B) == [_inst("10.05.24 09:00")]


def test_empty_operands() -> None:
    assert intersect(A, []) == []
    assert intersect([], B) == []
    assert union(A, []) == A
    assert union([], B) == B
    assert difference(A, []) == A
    assert difference([], B) == []


def test_merge_laws_against_python_sets() -> None:
    rng = random.Random(7)
    for _ in range(50):
        xs = sorted(rng.sample(range(40), rng.randint(0, 15)))
        ys = sorted(rng.sample(range(40), rng.randint(0, 15)))
        zs = sorted(rng.sample(range(40), rng.randint(0, 15)))

        assert intersect(xs, ys) == sorted(set(xs) & set(ys))
        assert union(xs, ys) == sorted(set(xs) | set(ys))
        assert difference(xs, ys) == sorted(set(xs) - set(ys))

        # commutative
        assert intersect(xs, ys) == intersect(ys, xs)
        assert union(xs, ys) == union(ys, xs)
        # associative (left fold == right fold)
        assert intersect(intersect(xs, ys), zs) == intersect(xs, intersect(ys, zs))
        assert union(union(xs, ys), zs) == union(xs, union(ys, zs))


def test_inputs_are_not_mutated() -> None:
    a = list(A)
    b = list(B)
    union(a, b)
    intersect(a, b)
    difference(a, b)
    assert a == A
    assert b == B
