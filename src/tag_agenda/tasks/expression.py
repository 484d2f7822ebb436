# src/tag_agenda/tasks/expression.py

"""
Boolean tag expressions.

Grammar (AND binds tighter than OR, NOT tightest):

    expr   := term ("OR" term)*
    term   := factor ("AND" factor)*
    factor := "NOT" factor | "(" expr ")" | TAG

Keywords are case-insensitive bare words. A tag is any run of characters
other than whitespace and parentheses (`c++`, `v1.2`); it may carry a
leading `#`, which is also the way to name a tag that collides with a
keyword (`#or`). Two tags without an operator, a dangling operator or
unbalanced parentheses are an ExpressionError.

Evaluation folds the tree bottom-up over ascending instant lists using the
merge functions; the caller supplies the per-tag lookup (already bounded to
the query window) and the universe used by NOT. Runs of the same operator
(`a AND b AND c ...`) are folded in a loop, so long chains do not recurse.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Final, TypeAlias

from .merge import difference, intersect, union
from .task_models import Instant, normalize_tag

KEYWORDS: Final[frozenset[str]] = frozenset({"AND", "OR", "NOT"})

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r"\s*(?:(\()|(\))|([^\s()]+))")


class ExpressionError(ValueError):
    """Raised for a malformed tag expression."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        if position is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} (at column {position + 1})")


# ---------------------------------------------------------------------
# AST
# ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Tag:
    name: str


@dataclass(frozen=True, slots=True)
class Not:
    operand: Node


@dataclass(frozen=True, slots=True)
class And:
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Or:
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Group:
    inner: Node


Node: TypeAlias = Tag | Not | And | Or | Group


def _operands(node: Node, kind: type[And] | type[Or]) -> list[Node]:
    """Operands of a left-deep run of `kind`, left to right."""
    rights: list[Node] = []
    while isinstance(node, kind):
        rights.append(node.right)
        node = node.left
    rights.append(node)
    rights.reverse()
    return rights


def to_text(node: Node) -> str:
    """Canonical text of a tree; parses back to an equal tree."""
    if isinstance(node, Tag):
        return f"#{node.name}"
    if isinstance(node, Not):
        return f"NOT {to_text(node.operand)}"
    if isinstance(node, And):
        return " AND ".join(to_text(n) for n in _operands(node, And))
    if isinstance(node, Or):
        return " OR ".join(to_text(n) for n in _operands(node, Or))
    return f"({to_text(node.inner)})"


# ---------------------------------------------------------------------
# Tokenizer / parser
# ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str  # "(", ")", "AND", "OR", "NOT", "TAG", "END"
    text: str
    pos: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            # only trailing whitespace left
            break
        if m.group(1):
            tokens.append(_Token("(", "(", m.start(1)))
        elif m.group(2):
            tokens.append(_Token(")", ")", m.start(2)))
        else:
            word = m.group(3)
            upper = word.upper()
            if upper in KEYWORDS:
                tokens.append(_Token(upper, word, m.start(3)))
            else:
                name = normalize_tag(word)
                if not name:
                    raise ExpressionError("Empty tag name", m.start(3))
                tokens.append(_Token("TAG", name, m.start(3)))
        pos = m.end()
    tokens.append(_Token("END", "", len(text)))
    return tokens


class _Parser:
    def __init__(self, text: str) -> None:
        self._tokens = _tokenize(text)
        self._i = 0

    def _peek(self) -> _Token:
        return self._tokens[self._i]

    def _next(self) -> _Token:
        tok = self._tokens[self._i]
        self._i += 1
        return tok

    def parse(self) -> Node:
        node = self._expr()
        tok = self._peek()
        if tok.kind == ")":
            raise ExpressionError("Unbalanced ')'", tok.pos)
        if tok.kind != "END":
            raise ExpressionError(f"Expected AND or OR before '{tok.text}'", tok.pos)
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self._peek().kind == "OR":
            self._next()
            node = Or(node, self._term())
        return node

    def _term(self) -> Node:
        node = self._factor()
        while self._peek().kind == "AND":
            self._next()
            node = And(node, self._factor())
        return node

    def _factor(self) -> Node:
        tok = self._next()
        if tok.kind == "NOT":
            return Not(self._factor())
        if tok.kind == "TAG":
            return Tag(tok.text)
        if tok.kind == "(":
            if self._peek().kind == ")":
                raise ExpressionError("Empty parentheses", self._peek().pos)
            inner = self._expr()
            close = self._next()
            if close.kind != ")":
                if close.kind == "END":
                    raise ExpressionError("Missing ')'", tok.pos)
                raise ExpressionError(f"Expected ')' before '{close.text}'", close.pos)
            return Group(inner)
        if tok.kind == "END":
            raise ExpressionError("Expression ends after an operator", tok.pos)
        raise ExpressionError(f"Expected a tag, NOT or '(' but found '{tok.text}'", tok.pos)


def parse_expression(text: str) -> Node | None:
    """
    Parse `text` into a tree.

    Returns None for an empty (or whitespace-only) expression, which means
    "match everything in range".
    """
    if not (text or "").strip():
        return None
    try:
        return _Parser(text).parse()
    except RecursionError:
        raise ExpressionError("Expression is nested too deeply") from None


# ---------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------

TagLookup = Callable[[str], Sequence[Instant]]


def evaluate(node: Node, lookup: TagLookup, universe: Sequence[Instant]) -> list[Instant]:
    """
    Ascending instants satisfying `node`.

    `lookup(tag)` must return the ascending instants carrying `tag`, already
    bounded to the query window; `universe` is every candidate instant in the
    window (the complement base for NOT).
    """
    if isinstance(node, Tag):
        return list(lookup(node.name))
    if isinstance(node, Group):
        return evaluate(node.inner, lookup, universe)
    if isinstance(node, Not):
        return difference(universe, evaluate(node.operand, lookup, universe))
    if isinstance(node, And):
        result: list[Instant] = []
        for i, operand in enumerate(_operands(node, And)):
            found = evaluate(operand, lookup, universe)
            result = found if i == 0 else intersect(result, found)
            if not result:
                return []
        return result
    return reduce(union, (evaluate(n, lookup, universe) for n in _operands(node, Or)))

