"""A "zero or one" result container.

``OptionalValue.empty()`` and ``OptionalValue.of(0.0)`` are different things:
absence of data is never collapsed into a zero/default sentinel.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from contracts.query_contracts import IllegalStateError, InvalidArgumentError, require_callable

T = TypeVar("T")
R = TypeVar("R")

_MISSING: Any = object()


class OptionalValue(Generic[T]):
    __slots__ = ("_value",)

    def __init__(self, value: Any = _MISSING) -> None:
        self._value = value

    @classmethod
    def of(cls, value: T) -> OptionalValue[T]:
        if value is None:
            raise InvalidArgumentError("OptionalValue.of() requires a non-None value")
        return cls(value)

    @classmethod
    def of_nullable(cls, value: T | None) -> OptionalValue[T]:
        return cls.empty() if value is None else cls(value)

    @classmethod
    def empty(cls) -> OptionalValue[T]:
        return cls()

    def is_present(self) -> bool:
        return self._value is not _MISSING

    def is_empty(self) -> bool:
        return self._value is _MISSING

    def get(self) -> T:
        return self.or_else_throw()

    def or_else(self, default: T) -> T:
        return self._value if self.is_present() else default

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        if self.is_present():
            return self._value
        return require_callable(supplier, "supplier")()

    def or_else_throw(self, message: str = "no value present") -> T:
        if self.is_empty():
            raise IllegalStateError(message)
        return self._value

    def if_present(self, action: Callable[[T], Any]) -> None:
        require_callable(action, "action")
        if self.is_present():
            action(self._value)

    def map(self, transform: Callable[[T], R]) -> OptionalValue[R]:
        require_callable(transform, "transform")
        if self.is_empty():
            return OptionalValue.empty()
        return OptionalValue.of_nullable(transform(self._value))

    def filter(self, predicate: Callable[[T], bool]) -> OptionalValue[T]:
        require_callable(predicate, "predicate")
        if self.is_present() and predicate(self._value):
            return self
        return OptionalValue.empty()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionalValue):
            return NotImplemented
        return self._value is other._value or (
            self.is_present() and other.is_present() and self._value == other._value
        )

    def __hash__(self) -> int:
        return hash(self._value) if self.is_present() else 0

    def __bool__(self) -> bool:
        return self.is_present()

    def __repr__(self) -> str:
        if self.is_empty():
            return "OptionalValue.empty"
        return f"OptionalValue[{self._value!r}]"
