"""Functional-interface vocabulary.

Plain ``Callable`` aliases named after the roles they play in a pipeline, plus
small combinators for building predicates and comparators out of smaller ones.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from contracts.query_contracts import require_callable

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")
V = TypeVar("V")

Supplier = Callable[[], T]
Consumer = Callable[[T], None]
BiConsumer = Callable[[T, U], None]
Predicate = Callable[[T], bool]
BiPredicate = Callable[[T, U], bool]
Function = Callable[[T], R]
BiFunction = Callable[[T, U], R]
UnaryOperator = Callable[[T], T]
BinaryOperator = Callable[[T, T], T]
Comparator = Callable[[T, T], int]


# -----------------------------
# Predicates
# -----------------------------


def negate(predicate: Predicate[T]) -> Predicate[T]:
    require_callable(predicate, "predicate")
    return lambda item: not predicate(item)


def all_of(*predicates: Predicate[T]) -> Predicate[T]:
    for p in predicates:
        require_callable(p, "predicate")
    return lambda item: all(p(item) for p in predicates)


def any_of(*predicates: Predicate[T]) -> Predicate[T]:
    for p in predicates:
        require_callable(p, "predicate")
    return lambda item: any(p(item) for p in predicates)


# -----------------------------
# Functions
# -----------------------------


def identity(value: T) -> T:
    return value


def and_then(first: Function[T, R], then: Function[R, V]) -> Function[T, V]:
    """``and_then(f, g)(x) == g(f(x))``."""
    require_callable(first, "first")
    require_callable(then, "then")
    return lambda value: then(first(value))


def compose(outer: Function[R, V], inner: Function[T, R]) -> Function[T, V]:
    """``compose(f, g)(x) == f(g(x))``."""
    return and_then(inner, outer)


# -----------------------------
# Comparators
# -----------------------------


def natural_order(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if right < left:
        return 1
    return 0


def comparing(key: Function[T, Any]) -> Comparator[T]:
    require_callable(key, "key")
    return lambda left, right: natural_order(key(left), key(right))


def reversed_order(comparator: Comparator[T]) -> Comparator[T]:
    require_callable(comparator, "comparator")
    return lambda left, right: comparator(right, left)


def then_comparing(first: Comparator[T], second: Comparator[T]) -> Comparator[T]:
    require_callable(first, "first")
    require_callable(second, "second")

    def _cmp(left: T, right: T) -> int:
        result = first(left, right)
        return result if result != 0 else second(left, right)

    return _cmp


__all__ = [
    "BiConsumer",
    "BiFunction",
    "BiPredicate",
    "BinaryOperator",
    "Comparator",
    "Consumer",
    "Function",
    "Predicate",
    "Supplier",
    "UnaryOperator",
    "all_of",
    "and_then",
    "any_of",
    "comparing",
    "compose",
    "identity",
    "natural_order",
    "negate",
    "reversed_order",
    "then_comparing",
]
