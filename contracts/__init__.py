"""Contracts shared by the query pipeline and the demos.

The contracts package defines:
- error kinds and the absent-value resolution policy
- the OptionalValue "zero or one" container
- functional-interface aliases and combinators
- the immutable sample records (User, Author, Book)
"""

from contracts import functional
from contracts import optional_value
from contracts import query_contracts
from contracts import records

# Explicit re-exports to satisfy ruff F401
__all__ = [
    "AbsentPolicy",
    "Author",
    "Book",
    "IllegalStateError",
    "InvalidArgumentError",
    "OptionalValue",
    "QueryError",
    "User",
    "functional",
]

AbsentPolicy = query_contracts.AbsentPolicy
IllegalStateError = query_contracts.IllegalStateError
InvalidArgumentError = query_contracts.InvalidArgumentError
QueryError = query_contracts.QueryError

OptionalValue = optional_value.OptionalValue

Author = records.Author
Book = records.Book
User = records.User
