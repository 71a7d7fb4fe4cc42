"""Immutable value records used by the demos and tests."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    name: str
    age: int
    active: bool = True

    def __str__(self) -> str:
        return f"{self.name}\t| {self.age}"


@dataclass(frozen=True)
class Book:
    name: str
    price: int
    published: bool = True

    def __str__(self) -> str:
        state = "Published" if self.published else "Unpublished"
        return f"{self.name}\t| \t| ${self.price}\t| {state}"


@dataclass(frozen=True)
class Author:
    """
    An author owns an ordered, exclusive list of books.

    Books are stored as a tuple so the nested collection is as immutable as
    the author itself.
    """
    name: str
    active: bool
    books: tuple[Book, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.books, tuple):
            object.__setattr__(self, "books", tuple(self.books))

    @classmethod
    def with_books(cls, name: str, active: bool, books: Iterable[Book]) -> Author:
        return cls(name=name, active=active, books=tuple(books))

    def __str__(self) -> str:
        return f"{self.name}\t| {'Active' if self.active else 'Inactive'}"
