from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from refstore.core.config import MissingSequencePolicy, ReaderConfig
from refstore.core.errors import InvalidArgumentError, ReaderClosedError
from refstore.core.iterable import GenomeReferenceRecordIterable
from refstore.core.records import (
    ContigInfo,
    GenomeReferenceRecord,
    Range,
    ReferenceSequence,
    is_valid_interval,
)

log = logging.getLogger(__name__)


class InMemoryFastaReader:
    """Immutable in-memory store of reference sequence data.

    Notes:
    - ``contigs`` describes whole chromosomes and fixes traversal order.
    - Each contig has at most one cached ReferenceSequence, which may cover
      the whole contig or only a sub-range of it.
    - Build instances with ``create``; the constructor does no validation.
    """

    def __init__(
        self,
        contigs: Tuple[ContigInfo, ...],
        seqs: Dict[str, ReferenceSequence],
        config: ReaderConfig,
    ):
        self._contigs = contigs
        self._contigs_by_name = {c.name: c for c in contigs}
        self._seqs = seqs
        self._config = config
        self._closed = False

    @classmethod
    def create(
        cls,
        contigs: Iterable[ContigInfo],
        seqs: Iterable[ReferenceSequence],
        config: Optional[ReaderConfig] = None,
    ) -> "InMemoryFastaReader":
        config = config or ReaderConfig()
        contigs = tuple(contigs)
        contig_names = {c.name for c in contigs}

        seqs_map: Dict[str, ReferenceSequence] = {}
        for seq in seqs:
            region = seq.region
            if not is_valid_interval(region):
                raise InvalidArgumentError(f"Malformed region {region.short_debug_string()}")

            region_len = region.end - region.start
            if region_len != len(seq.bases):
                raise InvalidArgumentError(
                    f"Region size = {region_len} not equal to bases.length() {len(seq.bases)}"
                )

            if region.reference_name in seqs_map:
                raise InvalidArgumentError(
                    "Each ReferenceSequence must be on a different chromosome but "
                    f"multiple ones were found on {region.reference_name}"
                )

            if config.require_known_contigs and region.reference_name not in contig_names:
                raise InvalidArgumentError(
                    f"ReferenceSequence {region.short_debug_string()} names a contig "
                    "not found in contigs"
                )
            seqs_map[region.reference_name] = seq

        log.debug(
            "Cached %d sequence(s) (%d bp) over %d contig(s)",
            len(seqs_map),
            sum(len(s.bases) for s in seqs_map.values()),
            len(contigs),
        )
        return cls(contigs, seqs_map, config)

    @property
    def config(self) -> ReaderConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def contigs(self) -> Tuple[ContigInfo, ...]:
        return self._contigs

    @property
    def n_contigs(self) -> int:
        return len(self._contigs)

    def contig(self, name: str) -> ContigInfo:
        try:
            return self._contigs_by_name[name]
        except KeyError:
            raise InvalidArgumentError(f"Unknown contig {name}") from None

    def has_contig(self, name: str) -> bool:
        return name in self._contigs_by_name

    def cached_region(self, name: str) -> Optional[Range]:
        seq = self._seqs.get(name)
        return None if seq is None else seq.region

    def is_valid_interval(self, range_: Range) -> bool:
        """True if ``range_`` is well formed and lies within a known contig."""
        if not is_valid_interval(range_) or not self.has_contig(range_.reference_name):
            return False
        return range_.end <= self.contig(range_.reference_name).n_bases

    def get_bases(self, range_: Range) -> str:
        self._check_open()
        if not is_valid_interval(range_):
            raise InvalidArgumentError(f"Invalid interval: {range_.short_debug_string()}")

        seq = self._seqs.get(range_.reference_name)
        if seq is None:
            raise InvalidArgumentError(
                f"Cannot query range={range_.short_debug_string()} as this "
                f"InMemoryFastaReader has no bases for {range_.reference_name}"
            )

        if range_.start < seq.region.start or range_.end > seq.region.end:
            raise InvalidArgumentError(
                f"Cannot query range={range_.short_debug_string()} as this "
                "InMemoryFastaReader only has bases in the "
                f"interval={seq.region.short_debug_string()}"
            )
        pos = range_.start - seq.region.start
        return seq.bases[pos:pos + (range_.end - range_.start)]

    query = get_bases
    bases = get_bases

    def iterate(self) -> "FastaFullFileIterable":
        self._check_open()
        return FastaFullFileIterable(self)

    def close(self) -> None:
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise ReaderClosedError("InMemoryFastaReader has been closed")

    def _sequence_for(self, name: str) -> Optional[ReferenceSequence]:
        return self._seqs.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._contigs_by_name

    def __len__(self) -> int:
        return len(self._contigs)

    def __enter__(self) -> "InMemoryFastaReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"InMemoryFastaReader(contigs={len(self._contigs)}, cached={len(self._seqs)})"


class FastaFullFileIterable(GenomeReferenceRecordIterable):
    """Yields (name, bases) for each contig in contig-list order.

    Under ``MissingSequencePolicy.stop`` traversal ends at the first contig
    without a cached sequence, even if later contigs have one.
    """

    def __init__(self, reader: InMemoryFastaReader):
        super().__init__(reader)
        self._pos = 0

    def next_record(self) -> Optional[GenomeReferenceRecord]:
        self.check_is_alive()
        reader = self._reader
        contigs: Sequence[ContigInfo] = reader.contigs
        skip = reader.config.missing_sequence == MissingSequencePolicy.skip

        while self._pos < len(contigs):
            name = contigs[self._pos].name
            seq = reader._sequence_for(name)
            if seq is None:
                if not skip:
                    return None
                self._pos += 1
                continue
            self._pos += 1
            return GenomeReferenceRecord(name, seq.bases)
        return None
