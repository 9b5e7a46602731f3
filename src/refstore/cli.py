from __future__ import annotations

import argparse
import sys

from rich_argparse import RichHelpFormatter

from refstore.commands.query import add_query_parser
from refstore.commands.stat import add_stat_parser
from refstore.core.logging_setup import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refstore",
        description="refstore: query reference sequence held in memory.",
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    add_query_parser(subparsers)
    add_stat_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "query":
        from refstore.commands.query import run_query
        run_query(args)
        return

    if args.command == "stat":
        from refstore.commands.stat import run_stat
        run_stat(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main(sys.argv[1:])
