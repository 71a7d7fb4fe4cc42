"""Tests for collector recipes used with QueryPipeline.collect."""

from __future__ import annotations

import pytest

from contracts.query_contracts import InvalidArgumentError
from pipeline.query import QueryPipeline, SummaryStatistics
from pipeline.query import collectors as C
from tests.factories import make_author, make_user

USERS = [
    make_user(name="Seven", age=7, active=True),
    make_user(name="Four", age=4, active=False),
    make_user(name="Eleven", age=11, active=True),
    make_user(name="Nine", age=9, active=False),
]


def test_grouping_with_downstream_counting() -> None:
    counts = QueryPipeline.of(USERS).group_by(lambda u: u.active, C.counting())
    assert counts == {True: 2, False: 2}


def test_partitioning_with_downstream_counting_on_empty_input() -> None:
    counts = QueryPipeline.empty().partition_by(lambda u: u.active, C.counting())
    assert counts == {False: 0, True: 0}


def test_partitioning_with_mapping_downstream() -> None:
    names = QueryPipeline.of(USERS).collect(
        C.partitioning_by(lambda u: u.age > 8, C.mapping(lambda u: u.name, C.joining(",")))
    )
    assert names == {False: "Seven,Four", True: "Eleven,Nine"}


def test_grouping_never_produces_empty_lists() -> None:
    groups = QueryPipeline.of(USERS).collect(C.grouping_by(lambda u: u.age % 2))
    assert all(groups.values())
    assert sorted(groups) == [0, 1]


def test_summing_and_averaging() -> None:
    assert QueryPipeline.of(USERS).collect(C.summing(lambda u: u.age)) == 31
    assert QueryPipeline.of(USERS).collect(C.averaging(lambda u: u.age)) == 7.75
    assert QueryPipeline.empty().collect(C.averaging(lambda u: u.age)) == 0.0


def test_joining_with_prefix_and_suffix() -> None:
    joined = QueryPipeline.of_values("a", "b", "c").collect(C.joining(", ", "[", "]"))
    assert joined == "[a, b, c]"


def test_reducing_and_to_set() -> None:
    assert QueryPipeline.of_values(1, 2, 3, 4).collect(C.reducing(0, lambda a, b: a + b)) == 10
    assert QueryPipeline.of_values(1, 1, 2).collect(C.to_set()) == {1, 2}


def test_summarizing_book_prices() -> None:
    author = make_author(prices=[80, 190, 210])
    stats = QueryPipeline.of(author.books).collect(C.summarizing(lambda b: b.price))
    assert stats == SummaryStatistics(count=3, sum=480, min=80, max=210)
    assert stats.average == 160.0


def test_factories_reject_missing_functions() -> None:
    with pytest.raises(InvalidArgumentError):
        C.grouping_by(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        C.partitioning_by(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        C.mapping(str, None)  # type: ignore[arg-type]
