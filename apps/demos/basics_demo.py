"""Closures, functional-interface shapes, reduce/collect and partition vs group."""

from __future__ import annotations

import io
import math
import random
from collections.abc import Callable

from apps.demos.lambda_demo import banner
from contracts.functional import (
    BiConsumer,
    BiFunction,
    BinaryOperator,
    BiPredicate,
    Consumer,
    Function,
    Predicate,
    Supplier,
    UnaryOperator,
)
from pipeline.query import QueryPipeline

Gorilla = Callable[[], str]


class GorillaFamily:
    """Lambdas capturing an instance attribute, a parameter and a local."""

    def __init__(self, sink: Consumer[str]) -> None:
        self.walk = "walk"
        self._sink = sink

    def everyone_play(self, baby: bool) -> None:
        approach = "amble"
        self.play(lambda: self.walk)
        self.play(lambda: "hitch a ride" if baby else "run")
        self.play(lambda: approach)

    def play(self, gorilla: Gorilla) -> None:
        self._sink(gorilla())


def closures(sink: Consumer[str]) -> None:
    family = GorillaFamily(sink)
    family.everyone_play(True)
    sink("---")
    family.everyone_play(False)


def functional_interfaces(sink: Consumer[str], rng: random.Random | None = None) -> None:
    rng = rng or random.Random()

    random_number: Supplier[int] = lambda: rng.randrange(100)
    sink(str(random_number()))

    plus_five: Consumer[int] = lambda n: sink(str(n + 5))
    plus_five(5)

    print_pair: BiConsumer[str, int] = lambda s, i: sink(f"{s}: {i}")
    print_pair("Value", 42)

    is_even: Predicate[int] = lambda num: num % 2 == 0
    sink(str(is_even(4)).lower())

    is_length_equal_to: BiPredicate[str, int] = lambda s, length: len(s) == length
    sink(str(is_length_equal_to("hello", 5)).lower())

    int_to_string: Function[int, str] = lambda i: f"Number: {i}"
    sink(int_to_string(42))

    hypotenuse: BiFunction[int, int, float] = lambda a, b: math.sqrt(a * a + b * b)
    sink(str(hypotenuse(3, 4)))

    square: UnaryOperator[int] = lambda n: n * n
    sink(str(square(5)))

    add: BinaryOperator[int] = lambda a, b: a + b
    sink(str(add(3, 4)))


def reductions(sink: Consumer[str]) -> None:
    total = QueryPipeline.of_values(1, 2, 3, 4, 5).reduce(lambda a, b: a + b, identity=0)
    sink(str(total))

    word = QueryPipeline.of_values("w", "o", "l", "f").collect(
        io.StringIO,
        lambda buf, s: buf.write(s),
        lambda left, right: left.write(right.getvalue()),
    )
    sink(word.getvalue())


def partition_vs_group(sink: Consumer[str]) -> None:
    starts_with_c: Predicate[str] = lambda s: s.startswith("c")
    partitioned = QueryPipeline.empty().partition_by(starts_with_c)
    grouped = QueryPipeline.empty().group_by(starts_with_c)
    sink(f"{format_mapping(partitioned)} {format_mapping(grouped)}")


def format_mapping(mapping: dict) -> str:
    """Render ``{False: [], True: ['x']}`` as ``{false=[], true=[x]}``."""

    def _fmt(value: object) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, list):
            return "[" + ", ".join(_fmt(v) for v in value) + "]"
        return str(value)

    return "{" + ", ".join(f"{_fmt(k)}={_fmt(v)}" for k, v in mapping.items()) + "}"


def run(sink: Consumer[str] = print, rng: random.Random | None = None) -> None:
    sink(banner("Closure capture"))
    closures(sink)
    sink(banner("Functional interfaces"))
    functional_interfaces(sink, rng)
    sink(banner("Reduce and collect"))
    reductions(sink)
    sink(banner("Partitioning vs grouping an empty source"))
    partition_vs_group(sink)


if __name__ == "__main__":
    run()
