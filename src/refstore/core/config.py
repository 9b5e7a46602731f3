from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MissingSequencePolicy(str, Enum):
    """What full traversal does when a contig has no cached sequence."""

    stop = "stop"
    skip = "skip"


@dataclass(frozen=True)
class ReaderConfig:
    missing_sequence: MissingSequencePolicy = MissingSequencePolicy.stop
    # When set, every cached sequence must name a contig from the contig list.
    require_known_contigs: bool = False
