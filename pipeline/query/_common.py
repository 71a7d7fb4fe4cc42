"""Shared plumbing for query pipelines.

A pipeline is a source reader plus an ordered tuple of named stages. Each stage
is a function ``Iterator -> Iterator``; stages are composed lazily and only
run when a terminal operation pulls items through them.

Lifecycle::

    UNCONSUMED --intermediate op--> LINKED
    UNCONSUMED --terminal op------> CONSUMED

A LINKED or CONSUMED instance rejects every further operation with
IllegalStateError. Intermediate ops return a fresh UNCONSUMED pipeline that
shares the source.
"""

from __future__ import annotations

import functools
import itertools
import logging
import math
from collections.abc import Callable, Iterable, Iterator, Sequence
from enum import Enum
from typing import Any, TypeVar

from contracts.optional_value import OptionalValue
from contracts.query_contracts import (
    AbsentPolicy,
    IllegalStateError,
    InvalidArgumentError,
    require_callable,
    require_non_negative,
)
from infra.config import get_settings

LOG = logging.getLogger(__name__)

P = TypeVar("P", bound="BasePipeline")

SourceReader = Callable[[], Iterable[Any]]
Stage = tuple[str, Callable[[Iterator[Any]], Iterator[Any]]]

_MISSING: Any = object()


class PipelineState(str, Enum):
    UNCONSUMED = "unconsumed"
    LINKED = "linked"
    CONSUMED = "consumed"


def source_reader(source: Iterable[Any], *, live: bool) -> SourceReader:
    """Return a zero-arg reader over ``source``.

    live=True re-reads the caller's collection when the terminal op runs, so
    structural changes made before that point are visible. live=False takes a
    snapshot now.
    """
    if live:
        return lambda: source
    snapshot = tuple(source)
    return lambda: snapshot


def resolve_live(live: bool | None) -> bool:
    if live is None:
        return bool(get_settings().query.live_view)
    return bool(live)


def resolve_absent(on_empty: AbsentPolicy | str | None, default: Any) -> tuple[AbsentPolicy, Any]:
    """Fill the on-empty policy and default from settings when not given."""
    query = get_settings().query
    policy = AbsentPolicy.parse(on_empty if on_empty is not None else query.on_empty)
    return policy, (query.default_value if default is None else default)


def mean_of(
    values: Sequence[float | int],
    *,
    on_empty: AbsentPolicy | str | None = None,
    default: Any = None,
) -> OptionalValue[float]:
    """Arithmetic mean as an OptionalValue; an empty input is never a zero."""
    if values:
        return OptionalValue.of(math.fsum(values) / len(values))
    policy, fallback = resolve_absent(on_empty, default)
    if policy is AbsentPolicy.THROW:
        raise IllegalStateError("mean of an empty sequence has no value")
    if policy is AbsentPolicy.DEFAULT:
        return OptionalValue.of(float(fallback))
    return OptionalValue.empty()


class BasePipeline:
    """Stage chaining, single-use bookkeeping and the terminal ops every pipeline shares."""

    def __init__(
        self,
        read_source: SourceReader,
        stages: tuple[Stage, ...] = (),
        *,
        live: bool = False,
    ) -> None:
        self._read_source = read_source
        self._stages = stages
        self._live = live
        self._state = PipelineState.UNCONSUMED

    # -------------------------------
    # Introspection
    # -------------------------------

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def live(self) -> bool:
        return self._live

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._stages)

    def __repr__(self) -> str:
        stages = " -> ".join(self.stage_names) or "source"
        return f"{type(self).__name__}<{self._state.value}>({stages})"

    # -------------------------------
    # Plumbing
    # -------------------------------

    def _ensure_usable(self, op: str) -> None:
        if self._state is not PipelineState.UNCONSUMED:
            raise IllegalStateError(
                f"cannot run {op}(): pipeline has already been operated upon or consumed "
                f"(state={self._state.value})"
            )

    def _chain(self: P, name: str, fn: Callable[[Iterator[Any]], Iterator[Any]]) -> P:
        return self._link(type(self), name, fn)

    def _link(self, cls: type[P], name: str, fn: Callable[[Iterator[Any]], Iterator[Any]]) -> P:
        self._ensure_usable(name)
        self._state = PipelineState.LINKED
        return cls(self._read_source, self._stages + ((name, fn),), live=self._live)

    def _evaluate(self, op: str) -> Iterator[Any]:
        self._ensure_usable(op)
        self._state = PipelineState.CONSUMED
        LOG.debug(
            "Evaluating %s.%s over stages [%s] (live=%s)",
            type(self).__name__,
            op,
            ", ".join(self.stage_names),
            self._live,
        )
        items: Iterator[Any] = iter(self._read_source())
        for _, fn in self._stages:
            items = fn(items)
        return items

    # -------------------------------
    # Intermediate stages
    # -------------------------------

    def filter(self: P, predicate: Callable[[Any], bool]) -> P:
        require_callable(predicate, "predicate")
        return self._chain("filter", lambda items: (x for x in items if predicate(x)))

    def map(self: P, transform: Callable[[Any], Any]) -> P:
        require_callable(transform, "transform")
        return self._chain("map", lambda items: (transform(x) for x in items))

    def sort(
        self: P,
        comparator: Callable[[Any, Any], int] | None = None,
        *,
        key: Callable[[Any], Any] | None = None,
        reverse: bool = False,
    ) -> P:
        """Stable sort by comparator, key function, or natural order when neither is given."""
        if comparator is not None and key is not None:
            raise InvalidArgumentError("pass either comparator or key, not both")
        if comparator is not None:
            require_callable(comparator, "comparator")
            key = functools.cmp_to_key(comparator)
        elif key is not None:
            require_callable(key, "key")
        sort_key = key
        return self._chain(
            "sort", lambda items: iter(sorted(items, key=sort_key, reverse=reverse))
        )

    def limit(self: P, max_size: int) -> P:
        require_non_negative(max_size, "max_size")
        return self._chain("limit", lambda items: itertools.islice(items, max_size))

    def skip(self: P, n: int) -> P:
        require_non_negative(n, "n")
        return self._chain("skip", lambda items: itertools.islice(items, n, None))

    def distinct(self: P) -> P:
        def _distinct(items: Iterator[Any]) -> Iterator[Any]:
            seen: set[Any] = set()
            seen_unhashable: list[Any] = []
            for x in items:
                try:
                    if x in seen:
                        continue
                    seen.add(x)
                except TypeError:
                    # unhashable elements fall back to a linear scan
                    if x in seen_unhashable:
                        continue
                    seen_unhashable.append(x)
                yield x

        return self._chain("distinct", _distinct)

    def peek(self: P, action: Callable[[Any], Any]) -> P:
        require_callable(action, "action")

        def _peek(items: Iterator[Any]) -> Iterator[Any]:
            for x in items:
                action(x)
                yield x

        return self._chain("peek", _peek)

    # -------------------------------
    # Terminal operations
    # -------------------------------

    def to_list(self) -> list[Any]:
        return list(self._evaluate("to_list"))

    def for_each(self, action: Callable[[Any], Any]) -> None:
        require_callable(action, "action")
        for x in self._evaluate("for_each"):
            action(x)

    def count(self) -> int:
        return sum(1 for _ in self._evaluate("count"))

    def any_match(self, predicate: Callable[[Any], bool]) -> bool:
        require_callable(predicate, "predicate")
        return any(predicate(x) for x in self._evaluate("any_match"))

    def all_match(self, predicate: Callable[[Any], bool]) -> bool:
        require_callable(predicate, "predicate")
        return all(predicate(x) for x in self._evaluate("all_match"))

    def none_match(self, predicate: Callable[[Any], bool]) -> bool:
        require_callable(predicate, "predicate")
        return not any(predicate(x) for x in self._evaluate("none_match"))

    def find_first(self) -> OptionalValue[Any]:
        for x in self._evaluate("find_first"):
            return OptionalValue.of(x)
        return OptionalValue.empty()

    def reduce(self, op: Callable[[Any, Any], Any], identity: Any = _MISSING) -> Any:
        """Fold with ``op``.

        With an identity the folded value is returned directly; without one the
        result is an OptionalValue that is empty for an empty pipeline.
        """
        require_callable(op, "op")
        items = self._evaluate("reduce")
        if identity is not _MISSING:
            return functools.reduce(op, items, identity)
        first = next(items, _MISSING)
        if first is _MISSING:
            return OptionalValue.empty()
        return OptionalValue.of(functools.reduce(op, items, first))
