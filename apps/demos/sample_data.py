"""Hard-coded sample datasets used by the demos.

Both datasets are rebuilt on every call so a demo can never observe another
demo's changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from contracts.functional import Comparator, Consumer, Predicate
from contracts.records import Author, Book, User
from pipeline.query import QueryPipeline

_LOGGER = logging.getLogger(__name__)


def default_users() -> list[User]:
    return [
        User("Seven", 7, True),
        User("Four", 4, False),
        User("Eleven", 11, True),
        User("Three", 3, True),
        User("Nine", 9, False),
        User("One", 1, True),
        User("Twelve", 12, True),
    ]


class UsersRepository:
    """Seven users and one query helper with optional filter and order stages."""

    def __init__(self, users: list[User] | None = None) -> None:
        self.users: list[User] = list(users) if users is not None else default_users()

    def query(self) -> QueryPipeline:
        return QueryPipeline.of(self.users)

    def select(
        self,
        predicate: Predicate[User] | None = None,
        order: Comparator[User] | None = None,
        sink: Consumer[Any] | None = None,
    ) -> list[User]:
        """
        Run an optional-stage query and hand each selected user to ``sink``.

        A None predicate keeps every user; a None order leaves them in repository
        order (no sort stage is added at all). Returns the selected users.
        """
        pipeline = self.query()
        if predicate is not None:
            pipeline = pipeline.filter(predicate)
        if order is not None:
            pipeline = pipeline.sort(order)

        selected = pipeline.to_list()
        _LOGGER.debug(
            "select(predicate=%s, order=%s) -> %d user(s)",
            predicate is not None,
            order is not None,
            len(selected),
        )
        emit: Callable[[Any], Any] = sink if sink is not None else print
        for user in selected:
            emit(user)
        return selected


class Library:
    @staticmethod
    def get_authors() -> list[Author]:
        return [
            Author.with_books("Author A", True, [
                Book("A1", 100, True),
                Book("A2", 200, True),
                Book("A3", 220, True),
            ]),
            Author.with_books("Author B", True, [
                Book("B1", 80, True),
                Book("B2", 80, False),
                Book("B3", 190, True),
                Book("B4", 210, True),
            ]),
            Author.with_books("Author C", True, [
                Book("C1", 110, True),
                Book("C2", 120, False),
                Book("C3", 130, True),
            ]),
            Author.with_books("Author D", False, [
                Book("D1", 200, True),
                Book("D2", 300, False),
            ]),
            Author.with_books("Author X", True, []),
        ]
