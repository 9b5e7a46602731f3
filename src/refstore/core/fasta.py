from __future__ import annotations

import gzip
import logging
import os
import sys
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from refstore.core.config import ReaderConfig
from refstore.core.errors import InvalidArgumentError
from refstore.core.in_memory import InMemoryFastaReader
from refstore.core.records import ContigInfo, Range, ReferenceSequence

log = logging.getLogger(__name__)


class _FastaLineSource:
    """Decoded text lines of a FASTA source, with byte progress for files.

    Handles plain files, ``.gz`` files and ``-`` (stdin, no progress bar).
    """

    def __init__(self, path: str, desc: str = "Reading"):
        self.path = path
        self.pbar: Optional[tqdm] = None
        if path == "-":
            self.raw = sys.stdin.buffer
            self.handle = self.raw
            return

        self.raw = open(path, "rb")
        self.pbar = tqdm(
            total=os.path.getsize(path),
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=desc,
            leave=False,
            mininterval=0.2,
        )
        self.handle = gzip.GzipFile(fileobj=self, mode="rb") if path.endswith(".gz") else self

    def read(self, n: int = -1) -> bytes:
        return self._counted(self.raw.read(n))

    def readline(self, n: int = -1) -> bytes:
        return self._counted(self.raw.readline(n))

    def _counted(self, b: bytes) -> bytes:
        if b and self.pbar is not None:
            self.pbar.update(len(b))
        return b

    def lines(self) -> Iterator[str]:
        for line in iter(self.handle.readline, b""):
            yield line.decode("utf-8", errors="replace")

    def close(self) -> None:
        if self.path == "-":
            return
        try:
            if self.handle is not self:
                self.handle.close()
            self.raw.close()
        finally:
            self.pbar.close()

    def __enter__(self) -> "_FastaLineSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def iter_fasta_records(path: str, desc: str = "Reading") -> Iterator[Tuple[str, str, str]]:
    """Stream (name, description, sequence) from a FASTA file, plain or .gz.

    ``-`` reads stdin without a progress bar.
    """
    with _FastaLineSource(path, desc=desc) as source:
        yield from _parse_lines(source.lines())


def _parse_lines(lines: Iterable[str]) -> Iterator[Tuple[str, str, str]]:
    name: Optional[str] = None
    description = ""
    chunks: List[str] = []

    for line in lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith(">"):
            if name is not None:
                yield name, description, "".join(chunks).upper()
            header = line[1:].split(maxsplit=1)
            if not header:
                raise InvalidArgumentError("FASTA record with empty header")
            name = header[0]
            description = header[1] if len(header) > 1 else ""
            chunks = []
        else:
            chunks.append(line)
    if name is not None:
        yield name, description, "".join(chunks).upper()


def load_fasta(
    path: str,
    regions: Optional[Iterable[Range]] = None,
    config: Optional[ReaderConfig] = None,
) -> InMemoryFastaReader:
    """Read a FASTA file and cache it in an InMemoryFastaReader.

    Without ``regions`` every record is cached whole. With ``regions`` only
    those slices are cached, at most one per contig; the contig list still
    describes every record in the file.
    """
    wanted: Optional[Dict[str, Range]] = None
    if regions is not None:
        wanted = {}
        for r in regions:
            if r.reference_name in wanted:
                raise InvalidArgumentError(f"Only one cached region per contig is supported: {r.reference_name}")
            wanted[r.reference_name] = r

    contigs: List[ContigInfo] = []
    seqs: List[ReferenceSequence] = []
    for pos, (name, description, seq) in enumerate(iter_fasta_records(path)):
        contigs.append(ContigInfo(name=name, pos_in_fasta=pos, n_bases=len(seq), description=description))
        if wanted is None:
            seqs.append(ReferenceSequence(region=Range(name, 0, len(seq)), bases=seq))
            continue

        region = wanted.pop(name, None)
        if region is None:
            continue
        if region.end > len(seq):
            raise InvalidArgumentError(
                f"Region {region.short_debug_string()} extends past the end of {name} ({len(seq)} bp)"
            )
        seqs.append(ReferenceSequence(region=region, bases=seq[region.start:region.end]))

    if wanted:
        raise InvalidArgumentError(f"Regions name contigs not present in {path}: {', '.join(sorted(wanted))}")

    log.info("Loaded %d contig(s) from %s", len(contigs), path)
    return InMemoryFastaReader.create(contigs, seqs, config)
