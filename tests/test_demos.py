"""End-to-end tests for the console demos (output captured through the sink)."""

from __future__ import annotations

import random

from apps.demos import basics_demo, lambda_demo, streams_demo
from apps.demos.sample_data import Library, UsersRepository


def _sections(lines: list[str]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    current = ""
    for line in lines:
        if line.startswith("#### "):
            current = line.strip("# ").strip()
            out[current] = []
        else:
            out[current].append(line)
    return out


def _names(lines: list[str]) -> list[str]:
    return [line.split("\t")[0] for line in lines]


def test_select_without_stages_keeps_repository_order() -> None:
    seen: list[object] = []
    selected = UsersRepository().select(None, None, sink=seen.append)
    assert [u.name for u in selected] == ["Seven", "Four", "Eleven", "Three", "Nine", "One", "Twelve"]
    assert seen == selected


def test_select_does_not_mutate_repository() -> None:
    repo = UsersRepository()
    before = list(repo.users)
    repo.select(lambda u: u.active, lambda a, b: a.age - b.age, sink=lambda _u: None)
    assert repo.users == before


def test_lambda_demo_output() -> None:
    lines: list[str] = []
    lambda_demo.run(lines.append)
    sections = _sections(lines)

    assert _names(sections["Listing all users"]) == ["Seven", "Four", "Eleven", "Three", "Nine", "One", "Twelve"]
    assert _names(sections["Listing users with age > 5 sorted by name"]) == ["Eleven", "Nine", "Seven", "Twelve"] * 2
    assert _names(sections["Listing users with age < 10 sorted by age"]) == ["Nine", "Seven", "Four", "Three", "One"] * 2
    assert _names(sections["Listing active users sorted by name"]) == ["Eleven", "One", "Seven", "Three", "Twelve"] * 2
    assert _names(sections["Listing active users with age > 8 sorted by name"]) == ["Eleven", "Twelve"] * 2
    assert sections["Listing all users"][0] == "Seven\t| 7"


def test_streams_demo_output() -> None:
    lines: list[str] = []
    streams_demo.run(lines.append)
    sections = _sections(lines)

    assert _names(sections["Authors information"]) == ["Author A", "Author B", "Author C", "Author D", "Author X"] * 2
    assert sections["Authors information"][3] == "Author D\t| Inactive"
    assert _names(sections["Active authors"]) == ["Author A", "Author B", "Author C", "Author X"] * 2
    assert _names(sections["Active books for all authors"]) == ["A1", "A2", "A3", "B1", "B3", "B4", "C1", "C3", "D1"] * 2
    assert sections["Active books for all authors"][0] == "A1\t| \t| $100\t| Published"
    assert sections["Average price for all books in the library"] == [str(1940 / 12)] * 2
    assert _names(sections["Active authors that have at least one published book"]) == [
        "Author A",
        "Author B",
        "Author C",
    ] * 2


def test_streams_demo_declared_and_inline_runs_match() -> None:
    lines: list[str] = []
    streams_demo.run(lines.append)

    for title, body in _sections(lines).items():
        half = len(body) // 2
        assert body[:half] == body[half:], title


def test_library_is_rebuilt_per_call() -> None:
    assert Library.get_authors() == Library.get_authors()
    assert Library.get_authors() is not Library.get_authors()


def test_basics_demo_output() -> None:
    lines: list[str] = []
    basics_demo.run(lines.append, rng=random.Random(7))
    sections = _sections(lines)

    assert sections["Closure capture"] == ["walk", "hitch a ride", "amble", "---", "walk", "run", "amble"]

    functional = sections["Functional interfaces"]
    assert 0 <= int(functional[0]) < 100
    assert functional[1:] == ["10", "Value: 42", "true", "true", "Number: 42", "5.0", "25", "7"]

    assert sections["Reduce and collect"] == ["15", "wolf"]
    assert sections["Partitioning vs grouping an empty source"] == ["{false=[], true=[]} {}"]


def test_format_mapping() -> None:
    assert basics_demo.format_mapping({False: [1], True: []}) == "{false=[1], true=[]}"
