"""
pipeline/query/engine.py

Declarative query pipeline over in-memory collections.

Design goals
------------
- One source, an ordered list of optional stages, exactly one terminal op.
- Never mutate the source or any element; every stage yields new items.
- Single use: a pipeline instance runs at most one operation. Intermediate
  ops hand back a new pipeline; terminal ops consume the instance.
- Absence is explicit: aggregates over nothing return an empty
  OptionalValue (or raise/default, when the caller asks for that).

How to use
----------
    names = ["John", "Jane", "Mary", "Harry", "Joe"]
    (QueryPipeline.of(names)
        .filter(lambda n: len(n) == 4)
        .sort()
        .limit(2)
        .to_list())                      # ["Jane", "John"]

    (QueryPipeline.of(authors)
        .expand(lambda a: a.books)
        .aggregate(lambda b: b.price))   # OptionalValue[mean price]

Snapshot vs live view
---------------------
``QueryPipeline.of(source)`` copies the source when it is created. Pass
``live=True`` (or set ``QUERY__LIVE_VIEW=1``) to read the caller's collection
only when the terminal op runs, so elements added in between are counted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from contracts.optional_value import OptionalValue
from contracts.query_contracts import (
    AbsentPolicy,
    InvalidArgumentError,
    as_number,
    require,
    require_callable,
)

from . import collectors as _collectors
from ._common import BasePipeline, mean_of, resolve_live, source_reader
from .collectors import Collector
from .numeric import NumericPipeline

LOG = logging.getLogger(__name__)


class QueryPipeline(BasePipeline):
    """
    Single-use query pipeline.

    Intermediate stages: filter, expand/flat_map, map, sort, limit, skip,
    distinct, peek, map_to_number.

    Terminal operations: to_list, for_each, count, aggregate, group_by,
    partition_by, collect, reduce, find_first, min, max, any_match,
    all_match, none_match.
    """

    # -------------------------------
    # Construction
    # -------------------------------

    @classmethod
    def of(cls, source: Iterable[Any], *, live: bool | None = None) -> QueryPipeline:
        require(source, "source")
        is_live = resolve_live(live)
        return cls(source_reader(source, live=is_live), live=is_live)

    @classmethod
    def of_values(cls, *values: Any) -> QueryPipeline:
        return cls.of(values, live=False)

    @classmethod
    def empty(cls) -> QueryPipeline:
        return cls.of((), live=False)

    # -------------------------------
    # Intermediate stages
    # -------------------------------

    def expand(self, child_extractor: Callable[[Any], Iterable[Any]]) -> QueryPipeline:
        """Replace each element by its children, flattening one level in source order."""
        require_callable(child_extractor, "child_extractor")

        def _expand(items: Iterator[Any]) -> Iterator[Any]:
            for parent in items:
                children = child_extractor(parent)
                if children is None:
                    raise InvalidArgumentError(f"child_extractor returned None for {parent!r}")
                yield from children

        return self._chain("expand", _expand)

    flat_map = expand

    def map_to_number(self, extractor: Callable[[Any], Any]) -> NumericPipeline:
        require_callable(extractor, "extractor")
        return self._link(
            NumericPipeline,
            "map_to_number",
            lambda items: (as_number(extractor(x)) for x in items),
        )

    # -------------------------------
    # Terminal operations
    # -------------------------------

    def aggregate(
        self,
        numeric_extractor: Callable[[Any], Any],
        *,
        on_empty: AbsentPolicy | str | None = None,
        default: float | None = None,
    ) -> OptionalValue[float]:
        """
        Arithmetic mean of ``numeric_extractor(element)`` over the pipeline.

        Empty input resolves through ``on_empty``:
          - "empty"   -> OptionalValue.empty() (the default)
          - "default" -> OptionalValue.of(default)
          - "throw"   -> IllegalStateError
        """
        require_callable(numeric_extractor, "numeric_extractor")
        if on_empty is not None:
            on_empty = AbsentPolicy.parse(on_empty)
        values =[as_number(numeric_extractor(x)) for x in self._evaluate("aggregate")]
        result = mean_of(values, on_empty=on_empty, default=default)
        LOG.debug("aggregate over %d value(s) -> %r", len(values), result)
        return result

    def group_by(
        self,
        key_extractor: Callable[[Any], Any],
        downstream: Collector | None = None,
    ) -> dict[Any, Any]:
        require_callable(key_extractor, "key_extractor")
        return self._collect_with("group_by", _collectors.grouping_by(key_extractor, downstream))

    def partition_by(
        self,
        predicate: Callable[[Any], bool],
        downstream: Collector | None = None,
    ) -> dict[bool, Any]:
        require_callable(predicate, "predicate")
        return self._collect_with("partition_by", _collectors.partitioning_by(predicate, downstream))

    def collect(
        self,
        collector_or_supplier: Collector | Callable[[], Any],
        accumulator: Callable[[Any, Any], Any] | None = None,
        combiner: Callable[[Any, Any], Any] | None = None,
    ) -> Any:
        """
        Mutable reduction.

        ``collect(collector)`` runs a Collector recipe.
        ``collect(supplier, accumulator, combiner)`` creates a container with
        ``supplier`` and feeds every element to ``accumulator(container, x)``.
        Evaluation is sequential, so ``combiner`` is validated but never called.
        """
        require(collector_or_supplier, "collector")
        if accumulator is None and combiner is None:
            if not isinstance(collector_or_supplier, Collector):
                raise InvalidArgumentError(
                    "collect() takes a Collector, or supplier + accumulator + combiner"
                )
            return self._collect_with("collect", collector_or_supplier)

        supplier = require_callable(collector_or_supplier, "supplier")
        require_callable(accumulator, "accumulator")
        require_callable(combiner, "combiner")
        container = supplier()
        for x in self._evaluate("collect"):
            accumulator(container, x)
        return container

    def _collect_with(self, op: str, collector: Collector) -> Any:
        return collector.collect(self._evaluate(op))

    def min(
        self,
        comparator: Callable[[Any, Any], int] | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
    ) -> OptionalValue[Any]:
        return self._extreme("min", comparator, key)

    def max(
        self,
        comparator: Callable[[Any, Any], int] | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
    ) -> OptionalValue[Any]:
        return self._extreme("max", comparator, key)

    def _extreme(
        self,
        op: str,
        comparator: Callable[[Any, Any], int] | None,
        key: Callable[[Any], Any] | None,
    ) -> OptionalValue[Any]:
        if comparator is not None and key is not None:
            raise InvalidArgumentError("pass either comparator or key, not both")
        if comparator is not None:
            require_callable(comparator, "comparator")
        elif key is not None:
            require_callable(key, "key")
        best: Any = None
        found = False
        for x in self._evaluate(op):
            if not found:
                best, found = x, True
                continue
            if comparator is not None:
                diff = comparator(x, best)
            else:
                left, right = (key(x), key(best)) if key is not None else (x, best)
                diff = -1 if left < right else (1 if right < left else 0)
            if (op == "min" and diff < 0) or (op == "max" and diff > 0):
                best = x
        return OptionalValue.of(best) if found else OptionalValue.empty()
