from __future__ import annotations

import argparse
import sys

from rich_argparse import RichHelpFormatter

from refstore.core.errors import RefStoreError
from refstore.core.fasta import load_fasta
from refstore.core.records import parse_literal, to_literal


def add_query_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "query",
        help="Extract regions from a FASTA held in memory.",
        description=(
            "Load a FASTA (plain or .gz, '-' for stdin) into memory and print the requested regions.\n\n"
            "Regions are 1-based inclusive literals, e.g. chr1:101-200 or chr1:5.\n"
            "With --cache only the given slices are kept in memory; queries must fall inside them.\n\n"
            "Output:\n"
            "  - FASTA to stdout, one record per region."
        ),
        formatter_class=RichHelpFormatter,
    )

    p.add_argument("fasta", help="Input FASTA file. Use '-' for stdin.")
    p.add_argument("regions", nargs="+", help="Regions to extract (chr:start-end, 1-based inclusive).")
    p.add_argument(
        "--cache",
        nargs="+",
        default=None,
        help="Only cache these regions (at most one per contig). Default: cache whole records.",
    )
    p.add_argument(
        "--line-width",
        type=int,
        default=60,
        help="Wrap output sequence lines at this width. 0 disables wrapping.",
    )


def run_query(args: argparse.Namespace) -> None:
    try:
        cache = [parse_literal(r) for r in args.cache] if args.cache else None
        queries = [parse_literal(r) for r in args.regions]
        with load_fasta(args.fasta, regions=cache) as reader:
            for q in queries:
                seq = reader.get_bases(q)
                sys.stdout.write(f">{to_literal(q)}\n{_wrap_fasta(seq, args.line_width)}\n")
    except (RefStoreError, OSError) as e:
        raise SystemExit(f"ERROR: {e}")


def _wrap_fasta(seq: str, width: int) -> str:
    if width <= 0:
        return seq
    return "\n".join(seq[i:i + width] for i in range(0, len(seq), width))
