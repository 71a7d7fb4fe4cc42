"""User queries: declared predicates/comparators vs inline lambdas.

Every query runs twice, once with named functional values and once with the
same logic written inline, and both runs must print the same rows.
"""

from __future__ import annotations

from collections.abc import Callable

from apps.demos.sample_data import UsersRepository
from contracts.functional import Comparator, Consumer, Predicate, comparing, reversed_order
from contracts.records import User


def banner(title: str) -> str:
    return f"#### {title} ####"


def run(sink: Consumer[str] = print) -> None:
    repository = UsersRepository()
    emit: Callable[[object], None] = lambda item: sink(str(item))

    sink(banner("Listing all users"))
    repository.select(None, None, sink=emit)

    sink(banner("Listing users with age > 5 sorted by name"))
    filter_age_5: Predicate[User] = lambda user: user.age > 5
    order_name: Comparator[User] = comparing(lambda user: user.name)
    repository.select(filter_age_5, order_name, sink=emit)
    repository.select(
        lambda user: user.age > 5,
        lambda u1, u2: (u1.name > u2.name) - (u1.name < u2.name),
        sink=emit,
    )

    sink(banner("Listing users with age < 10 sorted by age"))
    filter_age_10: Predicate[User] = lambda user: user.age < 10
    order_age: Comparator[User] = reversed_order(comparing(lambda user: user.age))
    repository.select(filter_age_10, order_age, sink=emit)
    repository.select(lambda user: user.age < 10, lambda u1, u2: u2.age - u1.age, sink=emit)

    sink(banner("Listing active users sorted by name"))
    filter_active: Predicate[User] = lambda user: user.active
    repository.select(filter_active, order_name, sink=emit)
    repository.select(
        lambda user: user.active,
        lambda u1, u2: (u1.name > u2.name) - (u1.name < u2.name),
        sink=emit,
    )

    sink(banner("Listing active users with age > 8 sorted by name"))
    filter_active_age: Predicate[User] = lambda user: user.active and user.age > 8
    repository.select(filter_active_age, order_name, sink=emit)
    repository.select(
        lambda user: user.active and user.age > 8,
        lambda u1, u2: (u1.name > u2.name) - (u1.name < u2.name),
        sink=emit,
    )


if __name__ == "__main__":
    run()
