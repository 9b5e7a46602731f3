from __future__ import annotations

from typing import Iterator, Optional, TYPE_CHECKING

from refstore.core.errors import ReaderClosedError
from refstore.core.records import GenomeReferenceRecord

if TYPE_CHECKING:
    from refstore.core.in_memory import InMemoryFastaReader


class GenomeReferenceRecordIterable:
    """Single-pass, forward-only cursor over the records of a reader.

    Subclasses implement ``next_record``, returning ``None`` once there are no
    more records, and call ``check_is_alive`` before touching the reader.
    """

    def __init__(self, reader: "InMemoryFastaReader"):
        self._reader: Optional["InMemoryFastaReader"] = reader

    def is_alive(self) -> bool:
        return self._reader is not None and not self._reader.closed

    def check_is_alive(self) -> None:
        if self._reader is None:
            raise ReaderClosedError("Iterable has been released")
        if self._reader.closed:
            raise ReaderClosedError("Reader is not alive")

    def release(self) -> None:
        self._reader = None

    def next_record(self) -> Optional[GenomeReferenceRecord]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[GenomeReferenceRecord]:
        return self

    def __next__(self) -> GenomeReferenceRecord:
        rec = self.next_record()
        if rec is None:
            raise StopIteration
        return rec

    def __enter__(self) -> "GenomeReferenceRecordIterable":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
