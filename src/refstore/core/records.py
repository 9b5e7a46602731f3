from __future__ import annotations

from dataclasses import dataclass, field
import re
from types import MappingProxyType
from typing import Mapping, NamedTuple

from refstore.core.errors import InvalidArgumentError

_LITERAL_RE = re.compile(r"^(?P<name>[^:\s]+):(?P<start>[\d,]+)(?:-(?P<end>[\d,]+))?$")


@dataclass(frozen=True)
class ContigInfo:
    """Describes a whole contig, independent of how much of it is cached."""

    name: str
    pos_in_fasta: int = 0
    n_bases: int = 0
    description: str = ""
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def short_debug_string(self) -> str:
        return f'name: "{self.name}" n_bases: {self.n_bases} pos_in_fasta: {self.pos_in_fasta}'


@dataclass(frozen=True)
class Range:
    """Half-open, 0-based interval [start, end) on a named contig."""

    reference_name: str
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def short_debug_string(self) -> str:
        return f'reference_name: "{self.reference_name}" start: {self.start} end: {self.end}'


@dataclass(frozen=True)
class ReferenceSequence:
    region: Range
    bases: str

    def short_debug_string(self) -> str:
        return f"region {{ {self.region.short_debug_string()} }} bases: {len(self.bases)}bp"


class GenomeReferenceRecord(NamedTuple):
    name: str
    bases: str


def make_range(reference_name: str, start: int, end: int) -> Range:
    return Range(reference_name=reference_name, start=start, end=end)


def is_valid_interval(range_: Range) -> bool:
    start, end = range_.start, range_.end
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (start, end)):
        return False
    return bool(range_.reference_name) and 0 <= start <= end


def parse_literal(literal: str) -> Range:
    """Parse a 1-based inclusive literal such as ``chr1:101-200`` into a Range.

    ``chr1:101-200`` becomes ``Range("chr1", 100, 200)`` and ``chr1:5`` is the
    single base ``Range("chr1", 4, 5)``.
    """
    m = _LITERAL_RE.match(literal.strip())
    if m is None:
        raise InvalidArgumentError(f"Could not parse range literal: {literal!r}")

    start = int(m.group("start").replace(",", ""))
    end = int(m.group("end").replace(",", "")) if m.group("end") else start
    if start < 1 or end < start:
        raise InvalidArgumentError(f"Invalid range literal: {literal!r}")
    return make_range(m.group("name"), start - 1, end)


def to_literal(range_: Range) -> str:
    return f"{range_.reference_name}:{range_.start + 1}-{range_.end}"
