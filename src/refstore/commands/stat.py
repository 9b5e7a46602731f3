from __future__ import annotations

import argparse

from rich_argparse import RichHelpFormatter

from refstore.core.config import MissingSequencePolicy, ReaderConfig
from refstore.core.errors import RefStoreError
from refstore.core.fasta import load_fasta
from refstore.core.records import parse_literal
from refstore.core.stats import collect_contig_stats, format_tsv_rows


def add_stat_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "stat",
        help="Per-contig summary of the cached sequence.",
        description=(
            "Load a FASTA into memory, traverse it in contig order and summarize each cached record.\n\n"
            "Traversal:\n"
            "  --missing stop (default) ends at the first contig with nothing cached.\n"
            "  --missing skip moves past such contigs instead.\n\n"
            "Output:\n"
            "  - TSV to stdout (name, n_bases, cached_start, cached_end, cached_len, N_count, gc)."
        ),
        formatter_class=RichHelpFormatter,
    )

    p.add_argument("fasta", help="Input FASTA file. Use '-' for stdin.")
    p.add_argument(
        "--cache",
        nargs="+",
        default=None,
        help="Only cache these regions (at most one per contig). Default: cache whole records.",
    )
    p.add_argument(
        "--missing",
        choices=[m.value for m in MissingSequencePolicy],
        default=MissingSequencePolicy.stop.value,
        help="What traversal does at a contig with no cached sequence.",
    )


def run_stat(args: argparse.Namespace) -> None:
    config = ReaderConfig(missing_sequence=MissingSequencePolicy(args.missing))
    try:
        cache = [parse_literal(r) for r in args.cache] if args.cache else None
        with load_fasta(args.fasta, regions=cache, config=config) as reader:
            stats = collect_contig_stats(reader)
    except (RefStoreError, OSError) as e:
        raise SystemExit(f"ERROR: {e}")

    print(format_tsv_rows(stats), end="")
