"""Mutable reduction recipes for ``QueryPipeline.collect``.

A Collector is three functions: make an empty container, fold one element
into it, and turn the container into the final result. Grouping and
partitioning take a downstream collector that runs once per group.

Partitioning and grouping differ in exactly one way: ``partitioning_by``
always yields both the True and False keys, while ``grouping_by`` only yields
keys that were actually observed.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from contracts.query_contracts import as_number, require, require_callable

from .numeric import SummaryStatistics


@dataclass(frozen=True)
class Collector:
    supplier: Callable[[], Any]
    accumulator: Callable[[Any, Any], Any]
    finisher: Callable[[Any], Any] = lambda container: container

    def collect(self, items: Any) -> Any:
        container = self.supplier()
        for item in items:
            self.accumulator(container, item)
        return self.finisher(container)


class _Box:
    """Mutable cell for collectors whose state is an immutable value."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value


def to_list() -> Collector:
    return Collector(list, lambda acc, x: acc.append(x))


def to_set() -> Collector:
    return Collector(set, lambda acc, x: acc.add(x))


def counting() -> Collector:
    def _acc(box: _Box, _item: Any) -> None:
        box.value += 1

    return Collector(lambda: _Box(0), _acc, lambda box: box.value)


def summing(extractor: Callable[[Any], Any]) -> Collector:
    require_callable(extractor, "extractor")
    return Collector(
        list,
        lambda acc, x: acc.append(as_number(extractor(x))),
        lambda nums: sum(nums) if all(isinstance(n, int) for n in nums) else math.fsum(nums),
    )


def averaging(extractor: Callable[[Any], Any]) -> Collector:
    """Mean of the extracted values; 0.0 for an empty input.

    Use ``QueryPipeline.aggregate`` when an empty input must stay distinguishable
    from a real zero.
    """
    require_callable(extractor, "extractor")
    return Collector(
        list,
        lambda acc, x: acc.append(as_number(extractor(x))),
        lambda nums: math.fsum(nums) / len(nums) if nums else 0.0,
    )


def summarizing(extractor: Callable[[Any], Any]) -> Collector:
    require_callable(extractor, "extractor")
    return Collector(list, lambda acc, x: acc.append(extractor(x)), SummaryStatistics.of)


def joining(separator: str = "", prefix: str = "", suffix: str = "") -> Collector:
    return Collector(
        list,
        lambda acc, x: acc.append(str(x)),
        lambda parts: f"{prefix}{separator.join(parts)}{suffix}",
    )


def mapping(transform: Callable[[Any], Any], downstream: Collector) -> Collector:
    require_callable(transform, "transform")
    require(downstream, "downstream")
    return Collector(
        downstream.supplier,
        lambda acc, x: downstream.accumulator(acc, transform(x)),
        downstream.finisher,
    )


def reducing(identity: Any, op: Callable[[Any, Any], Any]) -> Collector:
    require_callable(op, "op")

    def _acc(box: _Box, item: Any) -> None:
        box.value = op(box.value, item)

    return Collector(lambda: _Box(identity), _acc, lambda box: box.value)


def grouping_by(key: Callable[[Any], Any], downstream: Collector | None = None) -> Collector:
    """Map each observed key to the downstream result of its elements.

    Keys appear in first-seen order and every key has at least one element, so
    an empty input yields ``{}``.
    """
    require_callable(key, "key")
    inner = downstream or to_list()

    def _acc(groups: dict[Any, Any], item: Any) -> None:
        k = key(item)
        if k not in groups:
            groups[k] = inner.supplier()
        inner.accumulator(groups[k], item)

    return Collector(dict, _acc, lambda groups: {k: inner.finisher(v) for k, v in groups.items()})


def partitioning_by(predicate: Callable[[Any], bool], downstream: Collector | None = None) -> Collector:
    """Split into exactly two groups, ``False`` and ``True``.

    Both keys are always present, so an empty input yields
    ``{False: [], True: []}`` (or the downstream's empty result for each).
    """
    require_callable(predicate, "predicate")
    inner = downstream or to_list()

    def _supply() -> dict[bool, Any]:
        return {False: inner.supplier(), True: inner.supplier()}

    def _acc(parts: dict[bool, Any], item: Any) -> None:
        inner.accumulator(parts[bool(predicate(item))], item)

    return Collector(_supply, _acc, lambda parts: {k: inner.finisher(v) for k, v in parts.items()})


__all__ = [
    "Collector",
    "averaging",
    "counting",
    "grouping_by",
    "joining",
    "mapping",
    "partitioning_by",
    "reducing",
    "summarizing",
    "summing",
    "to_list",
    "to_set",
]
