from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from refstore.core.in_memory import InMemoryFastaReader

_A, _C, _G, _T, _N = (ord(c) for c in "ACGTN")


@dataclass
class ContigStats:
    name: str
    n_bases: int
    cached_start: int
    cached_end: int
    n_count: int
    gc: Optional[float]

    @property
    def cached_len(self) -> int:
        return self.cached_end - self.cached_start


TSV_COLUMNS: List[str] = ["name", "n_bases", "cached_start", "cached_end", "cached_len", "N_count", "gc"]


def base_counts(bases: str) -> np.ndarray:
    """Counts of each byte value in ``bases``, case-insensitive."""
    arr = np.frombuffer(bases.upper().encode("ascii", errors="replace"), dtype=np.uint8)
    return np.bincount(arr, minlength=256)


def gc_fraction(counts: np.ndarray) -> Optional[float]:
    den = int(counts[[_A, _C, _G, _T]].sum())
    if den == 0:
        return None
    return int(counts[[_C, _G]].sum()) / den


def collect_contig_stats(reader: InMemoryFastaReader) -> List[ContigStats]:
    """Traverse ``reader`` and summarize each record it yields."""
    out: List[ContigStats] = []
    with reader.iterate() as it:
        for name, bases in it:
            region = reader.cached_region(name)
            counts = base_counts(bases)
            out.append(
                ContigStats(
                    name=name,
                    n_bases=reader.contig(name).n_bases,
                    cached_start=region.start,
                    cached_end=region.end,
                    n_count=int(counts[_N]),
                    gc=gc_fraction(counts),
                )
            )
    return out


def _row_dict(s: ContigStats) -> Dict[str, object]:
    return {
        "name": s.name,
        "n_bases": s.n_bases,
        "cached_start": s.cached_start,
        "cached_end": s.cached_end,
        "cached_len": s.cached_len,
        "N_count": s.n_count,
        "gc": None if s.gc is None else round(s.gc, 6),
    }


def format_tsv_rows(stats: List[ContigStats]) -> str:
    lines = ["\t".join(TSV_COLUMNS)]
    for s in stats:
        row = _row_dict(s)
        lines.append("\t".join("" if row[c] is None else str(row[c]) for c in TSV_COLUMNS))
    return "\n".join(lines) + "\n"
