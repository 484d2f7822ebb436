# src/tag_agenda/tasks/merge.py

"""
Ordered-set merges over ascending sequences.

Every function does one linear co-scan of both inputs (O(n + m)), never
re-sorts, and returns a new ascending list without duplicates. Inputs must
already be ascending and duplicate-free; results can be fed straight back in,
so N-way merges fold left to right.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar


class _Ordered(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


T = TypeVar("T", bound=_Ordered)


def intersect(a: Sequence[T], b: Sequence[T]) -> list[T]:
    """Items present in both `a` and `b`."""
    out: list[T] = []
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            i += 1
        elif b[j] < a[i]:
            j += 1
        else:
            out.append(a[i])
            i += 1
            j += 1
    return out


def union(a: Sequence[T], b: Sequence[T]) -> list[T]:
    """Items present in `a` or `b`, each once."""
    out: list[T] = []
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            out.append(a[i])
            i += 1
        elif b[j] < a[i]:
            out.append(b[j])
            j += 1
        else:
            out.append(a[i])
            i += 1
            j += 1
    out.extend(a[i:])
    out.extend(b[j:])
    return out


def difference(a: Sequence[T], b: Sequence[T]) -> list[T]:
    """Items of `a` that are not in `b`."""
    out: list[T] = []
    i = j = 0
    while i < len(a):
        if j >= len(b) or a[i] < b[j]:
            out.append(a[i])
            i += 1
        elif b[j] < a[i]:
            j += 1
        else:
            i += 1
            j += 1
    return out
