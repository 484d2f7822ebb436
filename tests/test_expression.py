# tests/test_expression.py

from __future__ import annotations

import pytest

from tag_agenda.tasks.expression import (
    And,
    ExpressionError,
    Group,
    Not,
    Or,
    Tag,
    evaluate,
    parse_expression,
    to_text,
)


def test_empty_expression_means_match_all() -> None:
    assert parse_expression("") is None
    assert parse_expression("   ") is None


def test_and_binds_tighter_than_or() -> None:
    assert parse_expression("a OR b AND c") == Or(Tag("a"), And(Tag("b"), Tag("c")))
    assert parse_expression("a AND b OR c") == Or(And(Tag("a"), Tag("b")), Tag("c"))


def test_parentheses_not_and_markers() -> None:
    node = parse_expression("(#work OR home) and not urgent")
    assert node == And(Group(Or(Tag("work"), Tag("home"))), Not(Tag("urgent")))
    assert parse_expression("NOT NOT a") == Not(Not(Tag("a")))
    # a marker lets a tag share a keyword's name
    assert parse_expression("#or AND #not") == And(Tag("or"), Tag("not"))


def test_canonical_text_parses_back() -> None:
    node = parse_expression("(work OR home) AND NOT urgent OR x")
    assert node is not None
    assert parse_expression(to_text(node)) == node


@pytest.mark.parametrize(
    "bad",
    [
        "(work",
        "work)",
        "()",
        "work AND",
        "OR work",
        "NOT",
        "work home",
        "work && home",
        "work | home",
        "work AND (home OR)",
        "#",
    ],
)
def test_malformed_expressions_raise(bad: str) -> None:
    with pytest.raises(ExpressionError):
        parse_expression(bad)


def test_error_reports_column() -> None:
    with pytest.raises(ExpressionError) as exc:
        parse_expression("work & home")
    assert exc.value.position == 5
    assert "column 6" in str(exc.value)


def test_evaluate_folds_over_sorted_sets() -> None:
    index = {
        "a": [1, 2, 3, 5],
        "b": [2, 3, 4],
        "c": [5, 6],
    }
    universe = [1, 2, 3, 4, 5, 6, 7]

    def lookup(tag: str) -> list[int]:
        return index.get(tag, [])

    def run(text: str) -> list[int]:
        node = parse_expression(text)
        assert node is not None
        return evaluate(node, lookup, universe)  # type: ignore[arg-type]

    assert run("a AND b") == [2, 3]
    assert run("a OR c") == [1, 2, 3, 5, 6]
    assert run("NOT a") == [4, 6, 7]
    assert run("(a OR c) AND NOT b") == [1, 5, 6]
    assert run("missing") == []
    assert run("missing AND a") == []
    assert run("NOT missing") == universe


def test_tags_may_contain_punctuation() -> None:
    assert parse_expression("c++ AND #v1.2") == And(Tag("c++"), Tag("v1.2"))
    assert parse_expression("(a/b)") == Group(Tag("a/b"))
    assert parse_expression("NOT x-y") == Not(Tag("x-y"))


def test_long_chain_prints_flat() -> None:
    node = parse_expression(" OR ".join(f"t{i}" for i in range(1500)))
    assert node is not None
    text = to_text(node)
    assert text.startswith("#t0 OR #t1 OR ")
    reparsed = parse_expression(text)
    assert reparsed is not None and to_text(reparsed) == text
