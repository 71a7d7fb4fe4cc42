"""Author and book queries over the sample library.

Every query runs twice: once with declared functional values, once with the
same functions written inline.
"""

from __future__ import annotations

from collections.abc import Callable

from apps.demos.lambda_demo import banner
from apps.demos.sample_data import Library
from contracts.functional import Consumer, Function, Predicate
from contracts.records import Author, Book
from pipeline.query import QueryPipeline


def run(sink: Consumer[str] = print) -> None:
    authors = Library.get_authors()
    printer: Callable[[object], None] = lambda item: sink(str(item))
    books_of: Function[Author, tuple[Book, ...]] = lambda author: author.books

    sink(banner("Authors information"))
    QueryPipeline.of(authors).for_each(printer)
    QueryPipeline.of(authors).for_each(lambda author: sink(str(author)))

    sink(banner("Active authors"))
    filter_author: Predicate[Author] = lambda author: author.active
    QueryPipeline.of(authors).filter(filter_author).for_each(printer)
    (
        QueryPipeline.of(authors)
        .filter(lambda author: author.active)
        .for_each(lambda author: sink(str(author)))
    )

    sink(banner("Active books for all authors"))
    filter_active_book: Predicate[Book] = lambda book: book.published
    QueryPipeline.of(authors).expand(books_of).filter(filter_active_book).for_each(printer)
    (
        QueryPipeline.of(authors)
        .expand(lambda author: author.books)
        .filter(lambda book: book.published)
        .for_each(lambda book: sink(str(book)))
    )

    sink(banner("Average price for all books in the library"))
    book_price: Function[Book, float] = lambda book: book.price
    QueryPipeline.of(authors).expand(books_of).aggregate(book_price).if_present(printer)
    (
        QueryPipeline.of(authors)
        .expand(lambda author: author.books)
        .aggregate(lambda book: book.price)
        .if_present(lambda avg: sink(str(avg)))
    )

    sink(banner("Active authors that have at least one published book"))
    filter_published_book: Predicate[Author] = lambda author: (
        QueryPipeline.of(author.books).any_match(filter_active_book)
    )
    QueryPipeline.of(authors).filter(filter_author).filter(filter_published_book).for_each(printer)
    (
        QueryPipeline.of(authors)
        .filter(lambda author: author.active)
        .filter(lambda author: QueryPipeline.of(author.books).any_match(lambda book: book.published))
        .for_each(lambda author: sink(str(author)))
    )


if __name__ == "__main__":
    run()
