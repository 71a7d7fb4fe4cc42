"""
streamnotes CLI (flat-layout friendly).

Usage
-----
streamnotes users
streamnotes authors
streamnotes basics
streamnotes all --log-level DEBUG --json-logs
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence

from apps.demos import basics_demo, lambda_demo, streams_demo
from contracts.functional import Consumer
from infra.logging_config import clear_log_context, set_log_context, setup_logging
from version import ENGINE_NAME, ENGINE_VERSION

logger = logging.getLogger(__name__)

DEMOS: dict[str, Callable[[Consumer[str]], None]] = {
    "users": lambda_demo.run,
    "authors": streams_demo.run,
    "basics": basics_demo.run,
}


def _run_demos(names: Sequence[str], sink: Consumer[str]) -> None:
    for name in names:
        set_log_context(demo=name)
        try:
            logger.info("Running demo %s", name)
            DEMOS[name](sink)
        finally:
            clear_log_context()


def cmd_demo(args: argparse.Namespace) -> None:
    _run_demos([args.cmd], print)


def cmd_all(args: argparse.Namespace) -> None:  # pylint: disable=unused-argument
    _run_demos(list(DEMOS), print)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="streamnotes", description="Query pipeline demos")
    p.add_argument("--version", action="version", version=f"{ENGINE_NAME} {ENGINE_VERSION}")
    p.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR (or STREAMNOTES_LOG_LEVEL).")
    p.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit JSON logs on stderr (or STREAMNOTES_LOG_JSON=1).",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("users", help="User queries with predicates and comparators.")
    sp.set_defaults(func=cmd_demo)

    sp = sub.add_parser("authors", help="Author/book queries: expand, filter, average.")
    sp.set_defaults(func=cmd_demo)

    sp = sub.add_parser("basics", help="Closures, functional interfaces, reduce, partition vs group.")
    sp.set_defaults(func=cmd_demo)

    sp = sub.add_parser("all", help="Run every demo in order.")
    sp.set_defaults(func=cmd_all)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, json_logs=args.json_logs)
    args.func(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
